"""Parsing and formatting helpers for ClimaCell API payloads.

This module contains the text-level conversions shared by the response
models and the query encoder: timestamp and date parsing for decoded
fields, and the formatting rules for outgoing query parameters.
"""

from __future__ import annotations

import datetime as dt
import re
from decimal import Decimal
from typing import Optional


# ─────────────────────────────────────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────────────────────────────────────

# Zero instant used wherever a timestamp is unset (0001-01-01T00:00:00Z)
ZERO_TIME = dt.datetime(1, 1, 1, tzinfo=dt.timezone.utc)

RFC3339_PATTERN = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# ─────────────────────────────────────────────────────────────────────────────
# Timestamp Parsing
# ─────────────────────────────────────────────────────────────────────────────

def parse_timestamp(value: str) -> dt.datetime:
    """Parse a full RFC 3339 timestamp into a timezone-aware datetime.

    Fractional seconds beyond microsecond precision are truncated.

    Raises:
        ValueError: If the text is not an offset-qualified timestamp.
    """
    match = RFC3339_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Invalid timestamp '{value}'. Expected RFC 3339 format.")

    fraction = (match.group("fraction") or "0")[:6].ljust(6, "0")
    offset = match.group("offset")
    if offset in ("Z", "z"):
        offset = "+00:00"
    try:
        return dt.datetime.fromisoformat(f"{match.group('base')}.{fraction}{offset}")
    except ValueError as exc:
        raise ValueError(f"Invalid timestamp '{value}': {exc}") from exc


def parse_date(value: str) -> dt.datetime:
    """Parse a bare YYYY-MM-DD date as midnight UTC."""
    if not DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date '{value}'. Expected YYYY-MM-DD")
    try:
        day = dt.date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid date '{value}': {exc}") from exc
    return dt.datetime(day.year, day.month, day.day, tzinfo=dt.timezone.utc)


def parse_time_or_date(value: str) -> dt.datetime:
    """Parse text that is either a full timestamp or a bare calendar date.

    The timestamp layout is tried first; a date is interpreted as midnight
    UTC.

    Raises:
        ValueError: If the text matches neither layout.
    """
    try:
        return parse_timestamp(value)
    except ValueError:
        pass
    try:
        return parse_date(value)
    except ValueError as exc:
        raise ValueError(
            f"Invalid observation time '{value}'. Expected RFC 3339 timestamp or YYYY-MM-DD"
        ) from exc


def is_zero_time(value: Optional[dt.datetime]) -> bool:
    """Return True for None or the zero instant."""
    if value is None:
        return True
    if value.tzinfo is None:
        return value == ZERO_TIME.replace(tzinfo=None)
    return value == ZERO_TIME


# ─────────────────────────────────────────────────────────────────────────────
# Query Formatting
# ─────────────────────────────────────────────────────────────────────────────

def format_timestamp(value: dt.datetime) -> str:
    """Format a datetime as RFC 3339 with second precision.

    Naive datetimes are taken as UTC, and a zero UTC offset is written as Z.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    if value.utcoffset() == dt.timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


def format_coordinate(value: float) -> str:
    """Format a float in its shortest round-trip decimal form.

    Uses plain notation and no trailing zeros, e.g. 52.0 -> "52" and
    1e-07 -> "0.0000001".
    """
    return format(Decimal(repr(float(value))).normalize(), "f")


__all__ = [
    "ZERO_TIME",
    "RFC3339_PATTERN",
    "DATE_PATTERN",
    "parse_timestamp",
    "parse_date",
    "parse_time_or_date",
    "is_zero_time",
    "format_timestamp",
    "format_coordinate",
]
