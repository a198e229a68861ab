from __future__ import annotations

import logging
import pandas as pd

from airmonitor.core.errors import UnknownSeries
from airmonitor.data.metadata import DATETIME_COLUMN
from airmonitor.data.monitor import Monitor, round_half_up


logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


def rolling_24hr(series: pd.Series) -> pd.Series:
    # Trailing window: the current hour plus the 23 before it.
    return series.rolling(window=HOURS_PER_DAY, min_periods=1).mean()


def get_daily_average(monitor: Monitor, device_deployment_id: str) -> pd.DataFrame:
    """Daily average PM2.5 over whole local-time days.

    The monitor is first trimmed to full days in the series' own timezone.
    Each day is reported at its local-midnight timestamp with the 24-hour
    average ending at hour 23 of that day.
    """
    if device_deployment_id not in monitor.data.columns or device_deployment_id == DATETIME_COLUMN:
        raise UnknownSeries(device_deployment_id)
    timezone = monitor.metadata(device_deployment_id, "timezone")

    trimmed = monitor.trim_date(timezone).data[[DATETIME_COLUMN, device_deployment_id]].copy()
    df = trimmed.rename(columns={device_deployment_id: "pm25"})
    df["pm25"] = df["pm25"].astype(float)
    df["avg_24hr"] = rolling_24hr(df["pm25"])

    day_count = len(df) // HOURS_PER_DAY
    if len(df) % HOURS_PER_DAY:
        logger.debug(
            "%s: %d trimmed hours in %s is not whole days; ignoring the last %d",
            device_deployment_id,
            len(df),
            timezone,
            len(df) % HOURS_PER_DAY,
        )
    starts = [HOURS_PER_DAY * i for i in range(day_count)]
    ends = [HOURS_PER_DAY * i + HOURS_PER_DAY - 1 for i in range(day_count)]

    daily_datetime = df[DATETIME_COLUMN].iloc[starts].reset_index(drop=True)
    daily_avg = round_half_up(df["avg_24hr"].iloc[ends].reset_index(drop=True))
    return pd.DataFrame({DATETIME_COLUMN: daily_datetime, "avg_pm25": daily_avg})
