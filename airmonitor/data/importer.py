from __future__ import annotations

import io
import logging
from pathlib import Path
import numpy as np
import pandas as pd
import requests

from airmonitor.core.config import LoadConfig
from airmonitor.core.errors import IngestError
from airmonitor.data.metadata import (
    CORE_METADATA_NAMES,
    DATETIME_COLUMN,
    ID_COLUMN,
    NA_TOKEN,
    NUMERIC_METADATA_NAMES,
    missing_core_names,
)
from airmonitor.data.monitor import Monitor
from airmonitor.data.qc import apply_value_qc


logger = logging.getLogger(__name__)


class MonitorLoader:
    """Load monitoring v2 meta/data CSV pairs into a Monitor.

    Both files are fetched and normalized before anything is returned, so a
    failure never yields a half-loaded Monitor. All failures surface as
    ``IngestError``.
    """

    def __init__(self, config: LoadConfig | None = None, session: requests.Session | None = None):
        self.config = config or LoadConfig()
        self.session = session or requests.Session()

    # ----- Remote archive -----

    def url(self, provider: str, timespan: str, kind: str) -> str:
        name = f"{provider}_{self.config.parameter}_{timespan}_{kind}.csv"
        return f"{self.config.archive_base_url}/{timespan}/data/{name}"

    def load(self, provider: str, timespan: str = "latest") -> Monitor:
        if provider not in self.config.providers:
            raise IngestError(f"Unknown provider {provider!r}; expected one of {self.config.providers}")
        if timespan not in self.config.timespans:
            raise IngestError(f"Unknown timespan {timespan!r}; expected one of {self.config.timespans}")

        meta_raw = self._fetch_csv(self.url(provider, timespan, "meta"), dtype=str)
        data_raw = self._fetch_csv(self.url(provider, timespan, "data"))
        monitor = self._build(meta_raw, data_raw)
        logger.info("Loaded %d %s series (%s), %d hours", monitor.count(), provider, timespan, len(monitor.data))
        return monitor

    def load_latest(self, provider: str) -> Monitor:
        return self.load(provider, "latest")

    def load_daily(self, provider: str) -> Monitor:
        return self.load(provider, "daily")

    def _fetch_csv(self, url: str, dtype=None) -> pd.DataFrame:
        logger.info("Fetching %s", url)
        try:
            response = self.session.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise IngestError(f"Failed to fetch {url}: {exc}") from exc
        return self._read_csv(io.StringIO(response.text), url, dtype=dtype)

    # ----- Local files -----

    def load_csv(self, meta_path: Path, data_path: Path) -> Monitor:
        for path in (meta_path, data_path):
            if not Path(path).exists():
                raise IngestError(f"File not found: {path}")
        meta_raw = self._read_csv(meta_path, str(meta_path), dtype=str)
        data_raw = self._read_csv(data_path, str(data_path))
        return self._build(meta_raw, data_raw)

    def _read_csv(self, source, label: str, dtype=None) -> pd.DataFrame:
        try:
            df = pd.read_csv(source, dtype=dtype, keep_default_na=False, na_values=["", NA_TOKEN])
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
            raise IngestError(f"Failed to parse {label}: {exc}") from exc
        df.columns = [str(c).strip() for c in df.columns]
        return df

    # ----- Normalization -----

    def parse_meta(self, df: pd.DataFrame) -> pd.DataFrame:
        if ID_COLUMN not in df.columns:
            raise IngestError(f"Metadata missing '{ID_COLUMN}' column")
        missing = missing_core_names(list(df.columns))
        if missing:
            logger.warning("Metadata missing core columns, filled as NA: %s", missing)

        meta = df.reindex(columns=CORE_METADATA_NAMES)
        meta = meta.replace(NA_TOKEN, np.nan)
        for col in NUMERIC_METADATA_NAMES:
            meta[col] = pd.to_numeric(meta[col], errors="coerce").astype(float)
        return meta.reset_index(drop=True)

    def parse_data(self, df: pd.DataFrame) -> pd.DataFrame:
        if DATETIME_COLUMN not in df.columns:
            raise IngestError(f"Data missing '{DATETIME_COLUMN}' column")
        data = df.copy()
        try:
            data[DATETIME_COLUMN] = pd.to_datetime(data[DATETIME_COLUMN], utc=True)
        except (ValueError, TypeError) as exc:
            raise IngestError(f"Unparseable '{DATETIME_COLUMN}' values: {exc}") from exc

        data = data.sort_values(DATETIME_COLUMN)
        data = data.drop_duplicates(subset=[DATETIME_COLUMN], keep="first")
        data = data.reset_index(drop=True)

        result = apply_value_qc(data, self.config.negative_values)
        negatives = sum(r.get("negative", 0) for r in result.reasons.values())
        if negatives:
            logger.warning("Negative values (%d) handled with mode '%s'", negatives, self.config.negative_values)

        # Series order follows the data file; datetime stays first.
        value_cols = [c for c in result.clean.columns if c != DATETIME_COLUMN]
        return result.clean[[DATETIME_COLUMN, *value_cols]]

    def _build(self, meta_raw: pd.DataFrame, data_raw: pd.DataFrame) -> Monitor:
        meta = self.parse_meta(meta_raw)
        data = self.parse_data(data_raw)

        meta_ids = meta[ID_COLUMN].tolist()
        data_ids = [c for c in data.columns if c != DATETIME_COLUMN]
        shared = set(meta_ids) & set(data_ids)
        if len(shared) != len(meta_ids) or len(shared) != len(data_ids):
            logger.warning(
                "Dropping %d metadata rows and %d data columns without a counterpart",
                len(meta_ids) - len(shared),
                len(data_ids) - len(shared),
            )
            meta = meta.loc[meta[ID_COLUMN].isin(shared)].reset_index(drop=True)
            data = data[[DATETIME_COLUMN, *[c for c in data_ids if c in shared]]]
        return Monitor(meta=meta, data=data.reset_index(drop=True))
