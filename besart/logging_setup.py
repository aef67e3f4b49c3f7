"""Structured JSON logging for the service."""

from __future__ import annotations

import json
import logging
from typing import Any

SERVICE_NAME = "job-portal"
LOGGER_NAME = "besart"

_RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname.lower(),
            "ts": record.created,
            "caller": f"{record.filename}:{record.lineno}",
            "msg": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED and not key.startswith("_")
        )
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class _FieldAdapter(logging.LoggerAdapter):
    """Adds fixed fields to every record while keeping per-call extras."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def load_logger() -> logging.LoggerAdapter:
    """Return the service logger: JSON lines at INFO level, tagged with the service name."""
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h.formatter, _JsonFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return _FieldAdapter(logger, {"service": SERVICE_NAME})