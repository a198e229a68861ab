from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Literal
import yaml


DEFAULT_ARCHIVE_BASE_URL = "https://airfire-data-exports.s3.us-west-2.amazonaws.com/monitoring/v2"


@dataclass
class LoadConfig:
    archive_base_url: str = DEFAULT_ARCHIVE_BASE_URL
    parameter: str = "PM2.5"
    negative_values: Literal["zero", "na", "keep"] = "zero"
    timeout: float = 30.0
    providers: list[str] = field(default_factory=lambda: ["airnow", "airsis", "wrcc"])
    timespans: list[str] = field(default_factory=lambda: ["latest", "daily"])

    def __post_init__(self) -> None:
        if self.negative_values not in ("zero", "na", "keep"):
            raise ValueError(f"Invalid negative_values mode: {self.negative_values!r}")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        self.archive_base_url = self.archive_base_url.rstrip("/")


def load_config(path: Path) -> LoadConfig:
    data = yaml.safe_load(Path(path).read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    known = {f.name for f in fields(LoadConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    return LoadConfig(**data)
