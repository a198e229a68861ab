from __future__ import annotations

from pathlib import Path
from typing import Any
import orjson
import pandas as pd

from airmonitor.data.monitor import Monitor


TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _scalar(value: Any) -> Any:
    if value is None or pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.tz_convert("UTC").strftime(TIME_FORMAT) if value.tzinfo else value.strftime(TIME_FORMAT)
    if hasattr(value, "item"):
        return value.item()
    return value


def create_geojson(monitor: Monitor) -> dict[str, Any]:
    status = monitor.current_status()
    features = []
    for site in status.to_dict(orient="records"):
        features.append(
            {
                "type": "Feature",
                "geometry": {
                    "type": "Point",
                    "coordinates": [_scalar(site.get("longitude")), _scalar(site.get("latitude"))],
                },
                "properties": {
                    "deviceDeploymentID": site["deviceDeploymentID"],
                    "locationName": _scalar(site.get("locationName")),
                    "last_time": _scalar(site["lastValidDatetime"]),
                    "last_pm25": _scalar(site["lastValidPM_25"]),
                },
            }
        )
    return {"type": "FeatureCollection", "features": features}


def dumps_geojson(obj: dict[str, Any]) -> bytes:
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2)


def write_geojson(obj: dict[str, Any], path: Path) -> None:
    Path(path).write_bytes(dumps_geojson(obj))
