"""Calendar timestamp with 100ns resolution and a fixed UTC offset."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import total_ordering
from typing import ClassVar

from codec.units import (
    MAX_TICKS,
    MIN_TICKS,
    TICKS_PER_MICROSECOND,
    TICKS_PER_MILLISECOND,
    TICKS_PER_MINUTE,
    TICKS_PER_SECOND,
    trunc_div,
)
from infra.errors import InvalidArgumentError, TimestampRangeError

MAX_OFFSET_MINUTES = 14 * 60

_EPOCH = datetime(1970, 1, 1)
_ONE_MINUTE = timedelta(minutes=1)


def _timedelta_ticks(delta: timedelta) -> int:
    return (delta.days * 86_400 + delta.seconds) * TICKS_PER_SECOND + delta.microseconds * TICKS_PER_MICROSECOND


def _ticks_since_epoch(wall: datetime) -> int:
    return _timedelta_ticks(wall - _EPOCH)


def _check_offset(offset_minutes: object) -> int:
    if isinstance(offset_minutes, bool) or not isinstance(offset_minutes, int):
        raise InvalidArgumentError(f"UTC offset must be whole minutes, got {offset_minutes!r}", value=offset_minutes)
    if abs(offset_minutes) > MAX_OFFSET_MINUTES:
        raise InvalidArgumentError(f"UTC offset {offset_minutes} minutes is beyond +/-14:00", value=offset_minutes)
    return offset_minutes


@dataclass(frozen=True, order=True)
class Duration:
    """Signed span of time counted in 100ns ticks."""

    ticks: int = 0

    ZERO: ClassVar[Duration]

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> Duration:
        return cls(_timedelta_ticks(delta))

    def total_seconds(self) -> float:
        return self.ticks / TICKS_PER_SECOND

    def to_timedelta(self) -> timedelta:
        """Return the span as a timedelta, dropping sub-microsecond ticks."""
        return timedelta(microseconds=trunc_div(self.ticks, TICKS_PER_MICROSECOND))

    def __neg__(self) -> Duration:
        return Duration(-self.ticks)

    def __add__(self, other: object) -> Duration:
        if isinstance(other, Duration):
            return Duration(self.ticks + other.ticks)
        return NotImplemented

    def __sub__(self, other: object) -> Duration:
        if isinstance(other, Duration):
            return Duration(self.ticks - other.ticks)
        return NotImplemented


Duration.ZERO = Duration(0)


@total_ordering
@dataclass(frozen=True, eq=False, repr=False)
class Timestamp:
    """An instant with a UTC offset.

    ``ticks`` counts 100ns units since 1970-01-01T00:00:00Z and fully
    determines the instant; ``offset_minutes`` only affects the wall-clock
    fields. Equality, hashing and ordering compare instants, so the same
    instant at two offsets is equal. Both the instant and its wall-clock
    reading must lie within 0001-01-01 and 9999-12-31.
    """

    ticks: int
    offset_minutes: int = 0

    MIN: ClassVar[Timestamp]
    MAX: ClassVar[Timestamp]
    EPOCH: ClassVar[Timestamp]

    def __post_init__(self) -> None:
        if isinstance(self.ticks, bool) or not isinstance(self.ticks, int):
            raise InvalidArgumentError(f"ticks must be an integer, got {self.ticks!r}", value=self.ticks)
        _check_offset(self.offset_minutes)
        if not MIN_TICKS <= self.ticks <= MAX_TICKS:
            raise TimestampRangeError(
                f"{self.ticks} ticks is outside the supported calendar range", value=self.ticks
            )
        if not MIN_TICKS <= self._local_ticks <= MAX_TICKS:
            raise TimestampRangeError(
                f"{self.ticks} ticks at offset {self.offset_minutes} minutes is outside the supported calendar range",
                value=self.ticks,
            )

    @classmethod
    def from_fields(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        tick: int = 0,
        offset_minutes: int = 0,
    ) -> Timestamp:
        """Build a timestamp from wall-clock fields read at ``offset_minutes``."""
        _check_offset(offset_minutes)
        try:
            wall = datetime(year, month, day, hour, minute, second)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Invalid calendar fields: {exc}") from exc
        if isinstance(tick, bool) or not isinstance(tick, int) or not 0 <= tick < TICKS_PER_SECOND:
            raise InvalidArgumentError(f"tick must be in [0, {TICKS_PER_SECOND}), got {tick!r}", value=tick)
        local_ticks = _ticks_since_epoch(wall) + tick
        return cls(local_ticks - offset_minutes * TICKS_PER_MINUTE, offset_minutes)

    @classmethod
    def from_datetime(cls, value: datetime) -> Timestamp:
        """Convert a timezone-aware datetime, keeping its offset."""
        if not isinstance(value, datetime):
            raise InvalidArgumentError(f"Expected a datetime, got {type(value).__name__}", value=value)
        offset = value.utcoffset()
        if offset is None:
            raise InvalidArgumentError("Naive datetimes have no UTC offset", value=value)
        if offset % _ONE_MINUTE:
            raise InvalidArgumentError(f"UTC offset {offset} is not a whole number of minutes", value=value)
        offset_minutes = offset // _ONE_MINUTE
        local_ticks = _ticks_since_epoch(value.replace(tzinfo=None))
        return cls(local_ticks - offset_minutes * TICKS_PER_MINUTE, offset_minutes)

    @property
    def _local_ticks(self) -> int:
        return self.ticks + self.offset_minutes * TICKS_PER_MINUTE

    def _wall(self) -> datetime:
        return _EPOCH + timedelta(microseconds=self._local_ticks // TICKS_PER_MICROSECOND)

    @property
    def utc_offset(self) -> timedelta:
        return timedelta(minutes=self.offset_minutes)

    @property
    def year(self) -> int:
        return self._wall().year

    @property
    def month(self) -> int:
        return self._wall().month

    @property
    def day(self) -> int:
        return self._wall().day

    @property
    def hour(self) -> int:
        return self._wall().hour

    @property
    def minute(self) -> int:
        return self._wall().minute

    @property
    def second(self) -> int:
        return self._wall().second

    @property
    def tick(self) -> int:
        """Ticks elapsed within the current second, 0 to 9_999_999."""
        return self._local_ticks % TICKS_PER_SECOND

    def to_utc(self) -> Timestamp:
        """Return the same instant at offset zero."""
        if self.offset_minutes == 0:
            return self
        return Timestamp(self.ticks)

    def to_datetime(self) -> datetime:
        """Return an aware datetime at the same offset, truncated to microseconds."""
        tz = timezone.utc if self.offset_minutes == 0 else timezone(self.utc_offset)
        return self._wall().replace(tzinfo=tz)

    def add_ticks(self, ticks: int) -> Timestamp:
        return Timestamp(self.ticks + ticks, self.offset_minutes)

    def add_milliseconds(self, milliseconds: int) -> Timestamp:
        return self.add_ticks(milliseconds * TICKS_PER_MILLISECOND)

    def add_seconds(self, seconds: int) -> Timestamp:
        return self.add_ticks(seconds * TICKS_PER_SECOND)

    def isoformat(self) -> str:
        """Render the wall-clock reading with its numeric offset."""
        wall = self._wall()
        sign = "-" if self.offset_minutes < 0 else "+"
        hours, minutes = divmod(abs(self.offset_minutes), 60)
        return (
            f"{wall.year:04d}-{wall.month:02d}-{wall.day:02d}T"
            f"{wall.hour:02d}:{wall.minute:02d}:{wall.second:02d}.{self.tick:07d}"
            f"{sign}{hours:02d}:{minutes:02d}"
        )

    def __add__(self, other: object) -> Timestamp:
        if isinstance(other, Duration):
            return self.add_ticks(other.ticks)
        if isinstance(other, timedelta):
            return self.add_ticks(Duration.from_timedelta(other).ticks)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: object) -> Timestamp | Duration:
        if isinstance(other, Timestamp):
            return Duration(self.ticks - other.ticks)
        if isinstance(other, Duration):
            return self.add_ticks(-other.ticks)
        if isinstance(other, timedelta):
            return self.add_ticks(-Duration.from_timedelta(other).ticks)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Timestamp):
            return self.ticks == other.ticks
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Timestamp):
            return self.ticks < other.ticks
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.ticks)

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f"Timestamp({self.isoformat()!r})"


Timestamp.MIN = Timestamp(MIN_TICKS)
Timestamp.MAX = Timestamp(MAX_TICKS)
Timestamp.EPOCH = Timestamp(0)


def as_timestamp(value: Timestamp | datetime) -> Timestamp:
    """Accept a Timestamp or an aware datetime."""
    if isinstance(value, Timestamp):
        return value
    if isinstance(value, datetime):
        return Timestamp.from_datetime(value)
    raise InvalidArgumentError(f"Expected a Timestamp or datetime, got {type(value).__name__}", value=value)
