"""ISO8601/RFC3339 parsing and fixed-width UTC formatting."""

from __future__ import annotations

import re
from datetime import datetime

from codec.timestamp import Timestamp, as_timestamp
from infra.errors import (
    InvalidArgumentError,
    NullInputError,
    TimestampError,
    TimestampFormatError,
)

FRACTION_DIGITS = 7

_ISO8601 = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[Tt]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?"
    r"(?:[Zz]|(?P<sign>[+-])(?P<offset_hour>\d{2}):?(?P<offset_minute>\d{2}))",
    re.ASCII,
)


def parse_iso8601(text: str) -> Timestamp:
    """Parse an ISO8601/RFC3339 timestamp and return it at offset zero.

    A UTC designator or numeric offset is required. Fractions finer than
    100ns are truncated.
    """
    if text is None:
        raise NullInputError("text")
    if not isinstance(text, str):
        raise InvalidArgumentError(f"Expected a string, got {type(text).__name__}", value=text)

    stripped = text.strip()
    if not stripped:
        raise TimestampFormatError("Timestamp string cannot be empty or whitespace.", text=text)

    match = _ISO8601.fullmatch(stripped)
    if match is None:
        raise TimestampFormatError(f"Invalid ISO8601/RFC3339 timestamp: {text!r}", text=text)

    offset_minutes = 0
    if match["sign"]:
        offset_minute = int(match["offset_minute"])
        if offset_minute >= 60:
            raise TimestampFormatError(f"Invalid UTC offset in timestamp: {text!r}", text=text)
        offset_minutes = int(match["offset_hour"]) * 60 + offset_minute
        if match["sign"] == "-":
            offset_minutes = -offset_minutes

    fraction = (match["fraction"] or "")[:FRACTION_DIGITS].ljust(FRACTION_DIGITS, "0")
    try:
        parsed = Timestamp.from_fields(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"] or 0),
            tick=int(fraction),
            offset_minutes=offset_minutes,
        )
    except TimestampError as exc:
        raise TimestampFormatError(f"Invalid ISO8601/RFC3339 timestamp: {text!r}", text=text) from exc
    return parsed.to_utc()


def format_iso8601(timestamp: Timestamp | datetime) -> str:
    """Render as ``YYYY-MM-DDTHH:mm:ss.fffffffZ`` after moving to UTC."""
    utc = as_timestamp(timestamp).to_utc()
    wall = utc.to_datetime()
    return (
        f"{wall.year:04d}-{wall.month:02d}-{wall.day:02d}T"
        f"{wall.hour:02d}:{wall.minute:02d}:{wall.second:02d}.{utc.tick:0{FRACTION_DIGITS}d}Z"
    )
