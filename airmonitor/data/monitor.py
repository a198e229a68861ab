from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
import pandas as pd

from airmonitor.core.errors import UnknownField, UnknownSeries
from airmonitor.data.metadata import DATETIME_COLUMN, ID_COLUMN


def round_half_up(values: pd.Series) -> pd.Series:
    """Round to one decimal place with halves going up. NaN stays NaN."""
    arr = values.to_numpy(dtype=float)
    rounded = np.floor(arr * 10.0 + 0.5) / 10.0
    return pd.Series(rounded, index=values.index, name=values.name)


@dataclass(frozen=True, eq=False)
class Monitor:
    """A set of hourly PM2.5 time series sharing one time axis.

    ``meta`` has one row per series keyed by ``deviceDeploymentID``. ``data``
    has a leading ``datetime`` column followed by one float column per series.
    Every operation returns a new Monitor; neither frame is modified in place.
    """

    meta: pd.DataFrame
    data: pd.DataFrame

    # ----- Accessors -----

    def ids(self) -> list[str]:
        return self.meta[ID_COLUMN].tolist()

    def count(self) -> int:
        return int(self.meta.shape[0])

    def datetime(self) -> pd.DatetimeIndex:
        return pd.DatetimeIndex(self.data[DATETIME_COLUMN])

    def series(self, device_deployment_id: str) -> pd.Series:
        self._require_column(device_deployment_id)
        values = self.data[device_deployment_id].astype(float)
        return pd.Series(values.to_numpy(), index=self.datetime(), name=device_deployment_id)

    def pm25(self, device_deployment_id: str) -> pd.Series:
        return round_half_up(self.series(device_deployment_id))

    def metadata(self, device_deployment_id: str, field_name: str) -> Any:
        if field_name not in self.meta.columns:
            raise UnknownField(field_name)
        row = self._meta_row(device_deployment_id)
        return row[field_name]

    def _meta_row(self, device_deployment_id: str) -> pd.Series:
        matches = self.meta.loc[self.meta[ID_COLUMN] == device_deployment_id]
        if matches.empty:
            raise UnknownSeries(device_deployment_id)
        return matches.iloc[0]

    def _require_column(self, device_deployment_id: str) -> None:
        if device_deployment_id == DATETIME_COLUMN or device_deployment_id not in self.data.columns:
            raise UnknownSeries(device_deployment_id)

    # ----- Collection operations -----

    def combine(self, other: Monitor) -> Monitor:
        from airmonitor.data.alignment import combine

        return combine(self, other)

    def select(self, ids: list[str]) -> Monitor:
        from airmonitor.data.selection import select

        return select(self, ids)

    def drop_empty(self) -> Monitor:
        from airmonitor.data.selection import drop_empty

        return drop_empty(self)

    def trim_date(self, timezone: str) -> Monitor:
        from airmonitor.data.trimming import trim_date

        return trim_date(self, timezone)

    # ----- Derived products -----

    def nowcast(self, device_deployment_id: str) -> pd.Series:
        from airmonitor.analysis.nowcast import get_nowcast

        return get_nowcast(self.series(device_deployment_id))

    def daily_average(self, device_deployment_id: str) -> pd.DataFrame:
        from airmonitor.analysis.daily import get_daily_average

        return get_daily_average(self, device_deployment_id)

    def current_status(self) -> pd.DataFrame:
        from airmonitor.analysis.status import get_current_status

        return get_current_status(self)
