"""Structured logging utilities for the timestamp tool."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from codec.iso8601 import format_iso8601


class JsonFormatter(logging.Formatter):
    """Emit logs as JSON objects with a stable schema."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": format_iso8601(datetime.fromtimestamp(record.created, tz=timezone.utc)),
            "level": record.levelname,
            "module": record.name,
            "event_type": getattr(record, "event_type", "log"),
            "message": record.getMessage(),
            "metadata": getattr(record, "metadata", {}),
        }
        return json.dumps(payload, ensure_ascii=False)


def get_logger(name: str = "timestamp", path: str = "", level: str = "INFO") -> logging.Logger:
    """Configure and return a structured logger writing to path, or stderr when path is empty."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if logger.handlers:
        return logger

    if path:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path)
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger
