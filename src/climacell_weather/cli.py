#!/usr/bin/env python3
"""Command line access to the ClimaCell weather endpoints.

Example:
    $ export CLIMACELL_API_KEY=...
    $ climacell-weather historical-climacell --lat 42.3826 --lon -71.146 \\
        --unit-system si --fields temp,no2,road_risk,fire_index --timestep 5
"""
from __future__ import annotations
import argparse
import datetime as dt
import logging
import sys
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from climacell_weather.client import ClimaCellClient
from climacell_weather.constants import WEATHER_ENDPOINTS
from climacell_weather.exceptions import ClimaCellError
from climacell_weather.frames import record_to_row, records_to_dataframe
from climacell_weather.parsers import parse_time_or_date
from climacell_weather.query import ForecastArgs, LatLon, Location, LocationID
from climacell_weather.utils.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)

_LOCATION_KEYS = ("lat", "lon", "location_id")
_EXTREME_SUFFIXES = ("_min", "_max")


def _parse_datetime(value: Optional[str]) -> Optional[dt.datetime]:
    """Parse an RFC 3339 timestamp or a YYYY-MM-DD date (midnight UTC)."""
    if value is None:
        return None
    try:
        return parse_time_or_date(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid time '{value}'. Expected RFC 3339 timestamp or YYYY-MM-DD."
        ) from exc


def _parse_fields(value: str) -> List[str]:
    """Split a comma-separated field list, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser for the weather CLI."""
    parser = argparse.ArgumentParser(
        prog="climacell-weather",
        description="Fetch weather data from the ClimaCell API and print it.",
    )
    parser.add_argument(
        "endpoint",
        choices=list(WEATHER_ENDPOINTS),
        help="Which weather endpoint to call",
    )
    parser.add_argument("--lat", type=float, help="Latitude in decimal degrees")
    parser.add_argument("--lon", type=float, help="Longitude in decimal degrees")
    parser.add_argument("--location-id", help="Stored location ID (instead of --lat/--lon)")
    parser.add_argument(
        "--start",
        type=_parse_datetime,
        help="Start time, RFC 3339 or YYYY-MM-DD",
    )
    parser.add_argument(
        "--end",
        type=_parse_datetime,
        help="End time, RFC 3339 or YYYY-MM-DD",
    )
    parser.add_argument(
        "--timestep",
        type=int,
        default=0,
        help="Minutes between samples (nowcast and historical-climacell only)",
    )
    parser.add_argument(
        "--unit-system",
        choices=["si", "us"],
        default="",
        help="Unit system (API default: si)",
    )
    parser.add_argument(
        "--fields",
        type=_parse_fields,
        default=[],
        help="Comma-separated fields to request, e.g. temp,humidity",
    )
    parser.add_argument(
        "--api-key",
        help="Override API key (default: CLIMACELL_API_KEY from environment or .env)",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Write a CSV table instead of one line per sample",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def build_location(args: argparse.Namespace) -> Optional[Location]:
    if args.location_id:
        return LocationID(location_id=args.location_id)
    if args.lat is not None and args.lon is not None:
        return LatLon(lat=args.lat, lon=args.lon)
    return None


def build_forecast_args(args: argparse.Namespace) -> ForecastArgs:
    return ForecastArgs(
        location=build_location(args),
        start=args.start,
        end=args.end,
        timestep=args.timestep,
        unit_system=args.unit_system,
        fields=args.fields,
    )


def _format_value(value: Any) -> str:
    if value is None:
        return "unavailable"
    if isinstance(value, dt.datetime):
        return value.isoformat()
    return str(value)


def format_record(record: BaseModel) -> str:
    """Render one sample as ``<time> field=value units ...``."""
    row: Dict[str, Any] = record_to_row(record)
    when = row.pop("observation_time", None)
    for key in _LOCATION_KEYS:
        row.pop(key, None)

    parts = [_format_value(when)]
    for key, value in row.items():
        if key.endswith(("_units", "_time")):
            continue
        units = row.get(f"{key}_units")
        if units is None and key.endswith(_EXTREME_SUFFIXES):
            units = row.get(f"{key[:-4]}_units")
        text = f"{key}={_format_value(value)}"
        if units and value is not None:
            text = f"{text} {units}"
        parts.append(text)
    return "  ".join(parts)


def run_cli(argv: Optional[List[str]] = None) -> int:
    """Execute CLI with given arguments.

    Args:
        argv: Command-line arguments (uses sys.argv if None).

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    forecast_args = build_forecast_args(args)
    if forecast_args.location is None:
        parser.error("a location is required: pass --location-id or both --lat and --lon")

    try:
        if args.api_key:
            client = ClimaCellClient(args.api_key)
        else:
            client = ClimaCellClient.from_settings()
    except ValidationError as e:
        LOGGER.error("Missing or invalid configuration (set CLIMACELL_API_KEY or pass --api-key): %s", e)
        return 2

    with client:
        try:
            records = client.fetch_records(args.endpoint, forecast_args)
        except ClimaCellError as e:
            LOGGER.error("Request to '%s' failed: %s", args.endpoint, e)
            return 1

    LOGGER.info("Fetched %d samples from '%s'", len(records), args.endpoint)
    if args.csv:
        records_to_dataframe(records).to_csv(sys.stdout, index=False)
    else:
        for record in records:
            print(format_record(record))
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
