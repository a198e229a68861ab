from __future__ import annotations

import logging
import os


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    level_name = (level or os.environ.get("AIRMONITOR_LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger("airmonitor")
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # Repeated calls must not stack handlers.
    root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
