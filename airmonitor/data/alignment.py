from __future__ import annotations

import logging
import pandas as pd

from airmonitor.core.errors import SchemaMismatch
from airmonitor.data.metadata import DATETIME_COLUMN
from airmonitor.data.monitor import Monitor


logger = logging.getLogger(__name__)


def _require_time_axis(monitor: Monitor, label: str) -> None:
    if DATETIME_COLUMN not in monitor.data.columns:
        raise SchemaMismatch(f"Monitor '{label}' has no '{DATETIME_COLUMN}' column")


def combine(a: Monitor, b: Monitor) -> Monitor:
    """Merge two monitors into a new one.

    Metadata rows are concatenated as-is (duplicate ids are not removed). The
    value tables are outer-joined on ``datetime`` so the result spans the union
    of both time axes, with NaN wherever one side has no row.
    """
    _require_time_axis(a, "a")
    _require_time_axis(b, "b")
    a_times = a.data[DATETIME_COLUMN]
    b_times = b.data[DATETIME_COLUMN]
    for times in (a_times, b_times):
        if not pd.api.types.is_datetime64_any_dtype(times):
            raise SchemaMismatch(f"'{DATETIME_COLUMN}' column must be datetime, got {times.dtype}")
    a_tz = getattr(a_times.dtype, "tz", None)
    b_tz = getattr(b_times.dtype, "tz", None)
    if str(a_tz) != str(b_tz):
        raise SchemaMismatch(f"Incompatible '{DATETIME_COLUMN}' timezones: {a_tz} vs {b_tz}")

    meta = pd.concat([a.meta, b.meta], ignore_index=True)

    a_cols = [c for c in a.data.columns if c != DATETIME_COLUMN]
    overlap = [c for c in b.data.columns if c != DATETIME_COLUMN and c in set(a_cols)]
    if overlap:
        logger.warning("combine: %d overlapping ids keep the first monitor's values: %s", len(overlap), overlap)
    b_data = b.data.drop(columns=overlap)

    # Resolutions may differ (ns vs us); join on a common unit.
    a_data = a.data.assign(**{DATETIME_COLUMN: a_times.dt.as_unit("ns")})
    b_data = b_data.assign(**{DATETIME_COLUMN: b_times.dt.as_unit("ns")})

    data = pd.merge(a_data, b_data, on=DATETIME_COLUMN, how="outer", sort=True)
    data = data.reset_index(drop=True)
    return Monitor(meta=meta, data=data)
