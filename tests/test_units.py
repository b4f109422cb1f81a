import pytest

from codec.units import (
    INT64_MAX,
    INT64_MIN,
    UnixTimeUnit,
    checked_mul,
    coerce_unit,
    require_int64,
    trunc_div,
)
from infra.errors import InvalidArgumentError, TimestampRangeError


def test_coerce_unit_accepts_members_and_string_values() -> None:
    assert coerce_unit(UnixTimeUnit.NANOSECONDS) is UnixTimeUnit.NANOSECONDS
    assert coerce_unit("ms") is UnixTimeUnit.MILLISECONDS
    assert coerce_unit("us") is UnixTimeUnit.MICROSECONDS


@pytest.mark.parametrize("unit", ["minutes", "S", 3, None])
def test_coerce_unit_rejects_unknown_units(unit: object) -> None:
    with pytest.raises(InvalidArgumentError) as excinfo:
        coerce_unit(unit)
    assert excinfo.value.unit == unit


def test_checked_mul_detects_int64_overflow() -> None:
    assert checked_mul(-(2**62), 2) == INT64_MIN
    with pytest.raises(TimestampRangeError):
        checked_mul(INT64_MAX, 2)
    with pytest.raises(TimestampRangeError):
        checked_mul(INT64_MIN, 10)


def test_require_int64_bounds() -> None:
    assert require_int64(INT64_MAX) == INT64_MAX
    assert require_int64(INT64_MIN) == INT64_MIN
    with pytest.raises(TimestampRangeError):
        require_int64(INT64_MAX + 1)
    with pytest.raises(TimestampRangeError):
        require_int64(INT64_MIN - 1)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(150, 1), (-150, -1), (-50, 0), (50, 0), (-100, -1), (0, 0)],
)
def test_trunc_div_rounds_toward_zero(value: int, expected: int) -> None:
    assert trunc_div(value, 100) == expected
