from __future__ import annotations

import pandas as pd

from airmonitor.data.metadata import DATETIME_COLUMN
from airmonitor.data.monitor import Monitor


def local_hours(times: pd.Series, timezone: str) -> pd.Series:
    if times.dt.tz is None:
        # Naive timestamps are stored UTC.
        times = times.dt.tz_localize("UTC")
    return times.dt.tz_convert(timezone).dt.hour


def trim_bounds(hours: pd.Series) -> tuple[int, int]:
    """Return the [start, end) row slice covering whole local days only."""
    n = len(hours)
    if n == 0:
        return 0, 0
    first = int(hours.iloc[0])
    last = int(hours.iloc[-1])
    start = 0 if first == 0 else 24 - first
    end = n if last == 23 else n - (last + 1)
    return start, max(start, end)


def trim_date(monitor: Monitor, timezone: str) -> Monitor:
    """Drop partial local-time days at both ends of the time axis.

    The timezone is not checked against metadata; pass the series' own
    ``timezone`` field. Stored timestamps are left in UTC.
    """
    hours = local_hours(monitor.data[DATETIME_COLUMN], timezone)
    start, end = trim_bounds(hours)
    data = monitor.data.iloc[start:end].reset_index(drop=True)
    return Monitor(meta=monitor.meta.copy(), data=data)
