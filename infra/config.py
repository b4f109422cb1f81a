"""Configuration loading and validation for the timestamp tool."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from codec.units import UnixTimeUnit

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Tool settings loaded from environment variables."""

    default_unit: str = "s"
    log_level: str = "INFO"
    log_path: str = ""
    fail_on_backward_jump: bool = True

    @property
    def unit(self) -> UnixTimeUnit:
        return UnixTimeUnit(self.default_unit)


def load_dotenv(path: str = ".env") -> None:
    """Load .env key-value pairs into environment without overriding existing values."""
    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text().splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Load and validate tool settings from environment."""
    source = os.environ if env is None else env
    settings = Settings(
        default_unit=source.get("TIMESTAMP_DEFAULT_UNIT", "s").strip().lower(),
        log_level=source.get("TIMESTAMP_LOG_LEVEL", "INFO").strip().upper(),
        log_path=source.get("TIMESTAMP_LOG_PATH", "").strip(),
        fail_on_backward_jump=_parse_bool(
            source.get("TIMESTAMP_FAIL_ON_BACKWARD_JUMP", "true"), name="TIMESTAMP_FAIL_ON_BACKWARD_JUMP"
        ),
    )
    _validate(settings)
    return settings


def _parse_bool(value: str, *, name: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got '{value}'")


def _validate(settings: Settings) -> None:
    if settings.default_unit not in {unit.value for unit in UnixTimeUnit}:
        raise ValueError("TIMESTAMP_DEFAULT_UNIT must be one of s, ms, us, ns")
    if settings.log_level not in _LOG_LEVELS:
        raise ValueError("TIMESTAMP_LOG_LEVEL must be DEBUG, INFO, WARNING or ERROR")
