import numpy as np
import pandas as pd
import pytest

from airmonitor.data.monitor import Monitor


def build_monitor(values: dict, start: str = "2024-01-01 00:00", timezone: str = "UTC") -> Monitor:
    n = len(next(iter(values.values()))) if values else 0
    times = pd.date_range(start, periods=n, freq="1h", tz="UTC")
    data = pd.DataFrame({"datetime": times})
    for device_id, series in values.items():
        data[device_id] = np.array(series, dtype=float)
    ids = list(values)
    meta = pd.DataFrame(
        {
            "deviceDeploymentID": ids,
            "locationName": [f"Site {i}" for i in ids],
            "longitude": [-120.0 - i for i in range(len(ids))],
            "latitude": [45.0 + i for i in range(len(ids))],
            "timezone": [timezone] * len(ids),
        }
    )
    return Monitor(meta=meta, data=data)


@pytest.fixture
def make_monitor():
    return build_monitor
