from __future__ import annotations

import numpy as np
import pandas as pd

from airmonitor.core.errors import UnknownSeries
from airmonitor.data.metadata import DATETIME_COLUMN
from airmonitor.data.monitor import Monitor


def last_valid_index(values: pd.Series) -> int:
    # All-missing series fall back to row 0.
    positions = np.flatnonzero(values.notna().to_numpy())
    return int(positions[-1]) if positions.size else 0


def get_current_status(monitor: Monitor) -> pd.DataFrame:
    """Metadata plus the last valid time and PM2.5 reading for each series.

    Adds ``lastValidDatetime`` and ``lastValidPM_25`` in metadata row order.
    An all-missing series reports row 0 with a NaN reading.
    """
    times = monitor.data[DATETIME_COLUMN].reset_index(drop=True)
    last_times = []
    last_values = []
    for device_deployment_id in monitor.ids():
        if device_deployment_id not in monitor.data.columns:
            raise UnknownSeries(device_deployment_id)
        values = monitor.data[device_deployment_id].reset_index(drop=True)
        index = last_valid_index(values)
        if len(times) == 0:
            last_times.append(pd.NaT)
            last_values.append(np.nan)
            continue
        last_times.append(times.iloc[index])
        last_values.append(float(values.iloc[index]))

    status = monitor.meta.copy().reset_index(drop=True)
    status["lastValidDatetime"] = pd.Series(last_times, dtype=times.dtype)
    status["lastValidPM_25"] = pd.Series(last_values, dtype=float)
    return status
