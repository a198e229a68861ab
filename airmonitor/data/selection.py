from __future__ import annotations

import logging
import pandas as pd

from airmonitor.data.metadata import DATETIME_COLUMN, ID_COLUMN
from airmonitor.data.monitor import Monitor


logger = logging.getLogger(__name__)


def _subset(monitor: Monitor, ids: list[str]) -> Monitor:
    meta = monitor.meta.set_index(ID_COLUMN, drop=False)
    meta = meta.loc[ids].reset_index(drop=True)
    data = monitor.data[[DATETIME_COLUMN, *ids]].copy()
    return Monitor(meta=meta, data=data)


def select(monitor: Monitor, ids: list[str]) -> Monitor:
    """Subset and reorder series by deviceDeploymentID.

    Ids not present in both tables are dropped without error. Repeated ids
    keep their first position.
    """
    known_meta = set(monitor.meta[ID_COLUMN])
    known_data = set(monitor.data.columns) - {DATETIME_COLUMN}
    wanted = list(dict.fromkeys(ids))
    kept = [i for i in wanted if i in known_meta and i in known_data]
    if len(kept) < len(wanted):
        dropped = [i for i in wanted if i not in set(kept)]
        logger.debug("select: dropping %d unknown ids: %s", len(dropped), dropped)
    return _subset(monitor, kept)


def valid_counts(monitor: Monitor) -> pd.Series:
    values = monitor.data.drop(columns=[DATETIME_COLUMN])
    return values.notna().sum(axis=0)


def drop_empty(monitor: Monitor) -> Monitor:
    counts = valid_counts(monitor)
    keep = set(counts.index[counts > 0])
    dropped = counts.index[counts == 0].tolist()
    if dropped:
        logger.debug("drop_empty: removing %d all-missing series: %s", len(dropped), dropped)

    meta = monitor.meta.loc[monitor.meta[ID_COLUMN].isin(keep)].reset_index(drop=True)
    data_cols = [c for c in monitor.data.columns if c == DATETIME_COLUMN or c in keep]
    return Monitor(meta=meta, data=monitor.data[data_cols].copy())
