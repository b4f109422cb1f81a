"""Custom exceptions for timestamp conversion."""

from __future__ import annotations


class TimestampError(Exception):
    """Base class for timestamp conversion errors."""


class InvalidArgumentError(TimestampError, ValueError):
    """Raised for arguments of the wrong kind, such as an unknown unit."""

    def __init__(self, message: str, *, value: object = None, unit: object = None) -> None:
        super().__init__(message)
        self.value = value
        self.unit = unit


class TimestampRangeError(TimestampError, OverflowError):
    """Raised when a conversion leaves the int64 or calendar range."""

    def __init__(self, message: str, *, value: object = None, unit: object = None) -> None:
        super().__init__(message)
        self.value = value
        self.unit = unit


class NullInputError(TimestampError, TypeError):
    """Raised when required text is None."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument} must not be None")
        self.argument = argument


class TimestampFormatError(TimestampError, ValueError):
    """Raised when text is not a valid ISO8601/RFC3339 timestamp."""

    def __init__(self, message: str, *, text: str) -> None:
        super().__init__(message)
        self.text = text
