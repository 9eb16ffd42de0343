"""Structured console logging shared by the CLI and the HTTP service."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import IO, Any

from .redaction import sanitize_text

# Optional ``extra=`` attributes copied into the JSON event when present.
EVENT_FIELDS = ("stage", "status_code", "request_type")

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JsonConsoleFormatter(logging.Formatter):
    """One JSON object per line; message and traceback text are redacted."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        for field in EVENT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                event[field] = value
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str, ensure_ascii=False)


def setup_logger(
    name: str = "weather_advisor",
    level: int | str = logging.INFO,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Return ``name`` configured with a single JSON handler at ``level``.

    Safe to call repeatedly: the level is updated, the handler is added once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonConsoleFormatter())
        logger.addHandler(handler)
    return logger


def route_uvicorn_logs(level: int | str = logging.INFO) -> None:
    """Send uvicorn's server and access logs through the same JSON handler."""
    for name in UVICORN_LOGGERS:
        setup_logger(name, level)
