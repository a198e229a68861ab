from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
import yaml

from airmonitor.core.config import LoadConfig, load_config
from airmonitor.core.errors import IngestError
from airmonitor.core.logging import setup_logging
from airmonitor.data.importer import MonitorLoader
from airmonitor.export.geojson import create_geojson, dumps_geojson, write_geojson


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="airmonitor",
        description="Load PM2.5 monitoring data and write current status as GeoJSON.",
    )
    parser.add_argument("--provider", required=True, help="Data provider, e.g. airnow, airsis, wrcc")
    parser.add_argument("--timespan", default="latest", choices=["latest", "daily"])
    parser.add_argument("--config", type=Path, default=None, help="YAML file with loader settings")
    parser.add_argument("--output", type=Path, default=None, help="GeoJSON output path (stdout if omitted)")
    parser.add_argument("--drop-empty", action="store_true", help="Skip series with no valid readings")
    parser.add_argument("--log-level", default=None)
    return parser


def run_app(argv: list[str] | None = None, loader: MonitorLoader | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args.config) if args.config else LoadConfig()
    except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
        logger.error("Invalid config %s: %s", args.config, exc)
        return 1
    loader = loader or MonitorLoader(config)

    try:
        monitor = loader.load(args.provider, args.timespan)
    except IngestError as exc:
        logger.error("%s", exc)
        return 1

    if args.drop_empty:
        monitor = monitor.drop_empty()

    geojson = create_geojson(monitor)
    if args.output:
        write_geojson(geojson, args.output)
        logger.info("Wrote %d features to %s", len(geojson["features"]), args.output)
    else:
        sys.stdout.write(dumps_geojson(geojson).decode("utf-8") + "\n")
    return 0


def main() -> None:
    sys.exit(run_app())
