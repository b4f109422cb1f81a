"""Conversion between integer Unix time and calendar timestamps."""

from __future__ import annotations

from datetime import datetime

from codec.timestamp import Timestamp, as_timestamp
from codec.units import (
    NANOSECONDS_PER_TICK,
    TICKS_PER_MICROSECOND,
    TICKS_PER_MILLISECOND,
    TICKS_PER_SECOND,
    UnixTimeUnit,
    checked_mul,
    coerce_unit,
    require_int64,
    trunc_div,
)
from infra.errors import InvalidArgumentError, TimestampRangeError


def from_unix_time(value: int, unit: UnixTimeUnit | str) -> Timestamp:
    """Return the UTC timestamp ``value`` units after the Unix epoch.

    Nanosecond input is truncated toward zero to 100ns ticks, so -50ns maps
    to the epoch itself rather than one tick before it.
    """
    unit = coerce_unit(unit)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"Unix time must be an integer, got {value!r}", value=value, unit=unit)
    require_int64(value, unit=unit)

    if unit is UnixTimeUnit.SECONDS:
        ticks = checked_mul(value, TICKS_PER_SECOND, unit=unit)
    elif unit is UnixTimeUnit.MILLISECONDS:
        ticks = checked_mul(value, TICKS_PER_MILLISECOND, unit=unit)
    elif unit is UnixTimeUnit.MICROSECONDS:
        ticks = checked_mul(value, TICKS_PER_MICROSECOND, unit=unit)
    else:
        ticks = trunc_div(value, NANOSECONDS_PER_TICK)

    try:
        return Timestamp(ticks)
    except TimestampRangeError as exc:
        raise TimestampRangeError(
            f"Unix timestamp {value} {unit.name.lower()} is outside the supported calendar range",
            value=value,
            unit=unit,
        ) from exc


def to_unix_time(timestamp: Timestamp | datetime, unit: UnixTimeUnit | str) -> int:
    """Return the signed count of ``unit`` since the epoch, truncated toward zero."""
    unit = coerce_unit(unit)
    elapsed = as_timestamp(timestamp).to_utc().ticks

    if unit is UnixTimeUnit.SECONDS:
        result = trunc_div(elapsed, TICKS_PER_SECOND)
    elif unit is UnixTimeUnit.MILLISECONDS:
        result = trunc_div(elapsed, TICKS_PER_MILLISECOND)
    elif unit is UnixTimeUnit.MICROSECONDS:
        result = trunc_div(elapsed, TICKS_PER_MICROSECOND)
    else:
        try:
            result = checked_mul(elapsed, NANOSECONDS_PER_TICK, unit=unit)
        except TimestampRangeError as exc:
            raise TimestampRangeError(
                f"Timestamp {timestamp} cannot be represented as Unix nanoseconds within int64 range",
                value=timestamp,
                unit=unit,
            ) from exc
    return require_int64(result, unit=unit)
