from __future__ import annotations
"""Logging setup: JSON structured output or plain console lines."""

import json
import logging
from datetime import datetime, timezone


_STANDARD_RECORD_KEYS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
}

SUPPORTED_LOG_FORMATS = {"json", "text"}


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record, extra fields included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_KEYS and not key.startswith("_"):
                payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class ConsoleLogFormatter(logging.Formatter):
    """Print only the human message; warnings and errors get a level prefix."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.WARNING:
            message = f"{record.levelname}: {message}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger with a single stream handler."""
    normalized_format = fmt.strip().lower()
    if normalized_format not in SUPPORTED_LOG_FORMATS:
        valid = ", ".join(sorted(SUPPORTED_LOG_FORMATS))
        raise ValueError(f"Unsupported log format '{fmt}'. Allowed values: {valid}")

    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter() if normalized_format == "json" else ConsoleLogFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper())
