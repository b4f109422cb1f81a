import re
from datetime import datetime, timedelta, timezone

import pytest

from codec.iso8601 import format_iso8601, parse_iso8601
from codec.timestamp import Timestamp
from codec.unix import to_unix_time
from codec.units import UnixTimeUnit
from infra.errors import (
    InvalidArgumentError,
    NullInputError,
    TimestampFormatError,
    TimestampRangeError,
)

KNOWN = Timestamp.from_fields(2009, 2, 13, 23, 31, 30)
FORMAT_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{7}Z")


def test_parse_utc_timestamp() -> None:
    parsed = parse_iso8601("2009-02-13T23:31:30Z")
    assert parsed == KNOWN
    assert parsed.offset_minutes == 0


def test_parse_fractional_seconds() -> None:
    parsed = parse_iso8601("2009-02-13T23:31:30.123Z")
    assert to_unix_time(parsed, UnixTimeUnit.MILLISECONDS) == 1234567890123
    assert parsed.tick == 1_230_000


@pytest.mark.parametrize(
    "text",
    [
        "2009-02-13T18:31:30-05:00",
        "2009-02-14T05:01:30+05:30",
        "2009-02-14T05:01:30+0530",
        "2009-02-13T23:31:30+00:00",
        "2009-02-13T23:31:30-00:00",
        "2009-02-13t23:31:30z",
        "  2009-02-13T23:31:30Z\n",
    ],
)
def test_parse_normalizes_to_utc(text: str) -> None:
    parsed = parse_iso8601(text)
    assert parsed == KNOWN
    assert parsed.offset_minutes == 0
    assert parsed.hour == 23


def test_parse_without_seconds() -> None:
    assert parse_iso8601("2009-02-13T23:31Z") == KNOWN.add_seconds(-30)


def test_parse_truncates_fraction_beyond_100ns() -> None:
    assert parse_iso8601("1970-01-01T00:00:00.123456789Z") == Timestamp(1_234_567)
    assert parse_iso8601("1969-12-31T23:59:59.99999999Z") == Timestamp(-1)


def test_parse_null_raises_null_input() -> None:
    with pytest.raises(NullInputError):
        parse_iso8601(None)  # type: ignore[arg-type]


def test_parse_non_string_raises_invalid_argument() -> None:
    with pytest.raises(InvalidArgumentError):
        parse_iso8601(1234567890)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "not a timestamp",
        "2009-02-13",
        "2009-02-13T23:31:30",
        "2009-02-13 23:31:30Z",
        "2009-02-30T00:00:00Z",
        "2009-02-13T24:00:00Z",
        "2009-02-13T23:59:60Z",
        "2009-02-13T23:31:30+15:00",
        "2009-02-13T23:31:30+01:75",
        "2009-02-13T23:31:30.Z",
        "٢٠٠٩-02-13T23:31:30Z",
        "0000-12-31T23:59:59Z",
    ],
)
def test_parse_invalid_text_raises_format_error(text: str) -> None:
    with pytest.raises(TimestampFormatError) as excinfo:
        parse_iso8601(text)
    assert excinfo.value.text == text


def test_parse_outside_calendar_range_raises_format_error() -> None:
    with pytest.raises(TimestampFormatError) as excinfo:
        parse_iso8601("0001-01-01T00:00:00+01:00")
    assert isinstance(excinfo.value.__cause__, TimestampRangeError)


def test_format_known_values() -> None:
    assert format_iso8601(Timestamp.EPOCH) == "1970-01-01T00:00:00.0000000Z"
    assert format_iso8601(KNOWN) == "2009-02-13T23:31:30.0000000Z"
    assert format_iso8601(KNOWN.add_ticks(1_234_560)) == "2009-02-13T23:31:30.1234560Z"
    assert format_iso8601(Timestamp(-1)) == "1969-12-31T23:59:59.9999999Z"


def test_format_extremes() -> None:
    assert format_iso8601(Timestamp.MIN) == "0001-01-01T00:00:00.0000000Z"
    assert format_iso8601(Timestamp.MAX) == "9999-12-31T23:59:59.9999999Z"


def test_format_normalizes_offsets() -> None:
    eastern = Timestamp.from_fields(2009, 2, 13, 18, 31, 30, offset_minutes=-300)
    assert format_iso8601(eastern) == format_iso8601(KNOWN) == "2009-02-13T23:31:30.0000000Z"


def test_format_accepts_aware_datetime() -> None:
    value = datetime(2009, 2, 13, 18, 31, 30, 123000, tzinfo=timezone(timedelta(hours=-5)))
    assert format_iso8601(value) == "2009-02-13T23:31:30.1230000Z"


@pytest.mark.parametrize(
    "ts",
    [
        Timestamp.EPOCH,
        Timestamp.MIN,
        Timestamp.MAX,
        Timestamp(-1),
        KNOWN.add_ticks(1_234_567),
        Timestamp.from_fields(2024, 2, 29, 6, 7, 8, tick=9, offset_minutes=-570),
    ],
)
def test_format_then_parse_preserves_instant(ts: Timestamp) -> None:
    text = format_iso8601(ts)
    assert FORMAT_SHAPE.fullmatch(text)
    assert parse_iso8601(text) == ts
