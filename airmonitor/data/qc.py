from __future__ import annotations

from dataclasses import dataclass
import numpy as np
import pandas as pd

from airmonitor.data.metadata import DATETIME_COLUMN, NA_TOKEN


@dataclass
class QCResult:
    clean: pd.DataFrame
    reasons: dict[str, dict[str, int]]


def coerce_values(series: pd.Series) -> pd.Series:
    if series.dtype == object:
        series = series.where(series.astype(str).str.strip() != NA_TOKEN, np.nan)
    return pd.to_numeric(series, errors="coerce").astype(float)


def apply_value_qc(df: pd.DataFrame, negative_values: str = "zero") -> QCResult:
    clean = df.copy()
    reasons: dict[str, dict[str, int]] = {}

    for col in df.columns:
        if col == DATETIME_COLUMN:
            continue
        series = coerce_values(df[col])
        reasons[col] = {}

        is_null = series.isna()
        if is_null.any():
            reasons[col]["null"] = int(is_null.sum())

        # NaN compares False, so only real readings are caught.
        neg = series < 0
        if neg.any():
            reasons[col]["negative"] = int(neg.sum())
            if negative_values == "zero":
                series = series.mask(neg, 0.0)
            elif negative_values == "na":
                series = series.mask(neg, np.nan)

        clean[col] = series

    return QCResult(clean=clean, reasons=reasons)
