"""Unix time units, tick constants and checked integer arithmetic."""

from __future__ import annotations

from enum import Enum

from infra.errors import InvalidArgumentError, TimestampRangeError


class UnixTimeUnit(str, Enum):
    """Resolution of an integer count since the Unix epoch."""

    SECONDS = "s"
    MILLISECONDS = "ms"
    MICROSECONDS = "us"
    NANOSECONDS = "ns"


# One tick is 100ns.
NANOSECONDS_PER_TICK = 100
TICKS_PER_MICROSECOND = 10
TICKS_PER_MILLISECOND = 10_000
TICKS_PER_SECOND = 10_000_000
TICKS_PER_MINUTE = 60 * TICKS_PER_SECOND
TICKS_PER_DAY = 86_400 * TICKS_PER_SECOND

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# 0001-01-01T00:00:00 and 9999-12-31T23:59:59.9999999 relative to the epoch.
MIN_TICKS = -62_135_596_800 * TICKS_PER_SECOND
MAX_TICKS = 253_402_300_800 * TICKS_PER_SECOND - 1


def coerce_unit(unit: object) -> UnixTimeUnit:
    """Return unit as a UnixTimeUnit, accepting its string values."""
    if isinstance(unit, UnixTimeUnit):
        return unit
    if isinstance(unit, str):
        try:
            return UnixTimeUnit(unit)
        except ValueError:
            pass
    raise InvalidArgumentError(f"Unknown unit: {unit!r}", unit=unit)


def require_int64(value: int, *, unit: object = None) -> int:
    if value < INT64_MIN or value > INT64_MAX:
        raise TimestampRangeError(f"{value} is outside the signed 64-bit range", value=value, unit=unit)
    return value


def checked_mul(value: int, factor: int, *, unit: object = None) -> int:
    """Multiply two integers, failing if the product leaves the int64 range."""
    product = value * factor
    if product < INT64_MIN or product > INT64_MAX:
        raise TimestampRangeError(
            f"{value} * {factor} overflows a signed 64-bit integer", value=value, unit=unit
        )
    return product


def trunc_div(value: int, divisor: int) -> int:
    """Integer division truncating toward zero, so trunc_div(-50, 100) == 0."""
    quotient = abs(value) // abs(divisor)
    return quotient if (value < 0) == (divisor < 0) else -quotient
