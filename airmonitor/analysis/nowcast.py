from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
import pandas as pd
import numpy as np

from airmonitor.core.errors import InsufficientData


NOWCAST_HOURS = 12
RECENT_HOURS = 3
MIN_RECENT_VALID = 2
MIN_WEIGHT_FACTOR = 0.5


def _round_one_decimal(value: float) -> float:
    # Ties are judged on the exact binary value: 0.15 rounds to 0.1, 0.25 to 0.3.
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _hours_ago(size: int) -> np.ndarray:
    # Position size-1 is the newest reading.
    return (size - 1) - np.arange(size)


def nowcast_pm(values, strict: bool = False) -> float:
    """NowCast for up to 12 hourly PM2.5 readings in chronological order.

    See https://observablehq.com/@openaq/epa-pm-nowcast. Fewer than two valid
    readings among the three most recent hours gives NaN, or raises
    ``InsufficientData`` when ``strict`` is set. Windows shorter than 12 hours
    use the same formula.
    """
    if np.isscalar(values) or values is None:
        values = [values]
    x = np.asarray(values, dtype=float)
    age = _hours_ago(x.size)
    valid = ~np.isnan(x)

    recent_valid = int(valid[age < RECENT_HOURS].sum())
    if recent_valid < MIN_RECENT_VALID:
        if strict:
            raise InsufficientData(
                f"NowCast needs {MIN_RECENT_VALID} of the last {RECENT_HOURS} hours, got {recent_valid}"
            )
        return float("nan")

    c = x[valid]
    exponent = age[valid]
    cmax = c.max()
    cmin = c.min()
    scaled_rate_of_change = (cmax - cmin) / cmax if cmax != 0 else 0.0
    weight_factor = max(1.0 - scaled_rate_of_change, MIN_WEIGHT_FACTOR)

    weights = weight_factor ** exponent
    result = float(np.sum(c * weights) / np.sum(weights))
    return _round_one_decimal(result)


def get_nowcast(series: pd.Series) -> pd.Series:
    """NowCast at every hour using the trailing 12-hour window."""
    out = series.astype(float).rolling(window=NOWCAST_HOURS, min_periods=1).apply(nowcast_pm, raw=True)
    return pd.Series(out.to_numpy(), index=series.index, name=series.name)
