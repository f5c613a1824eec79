"""Logging setup: JSON lines by default, plain text for local development."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .correlation import get_request_id

# Attributes every LogRecord carries; anything else was passed through ``extra``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
    "request_id",
}

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"

# Third-party loggers that only get through at WARNING or above.
_QUIET_LOGGERS = ("pymongo", "passlib")


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonLogFormatter(logging.Formatter):
    """Render each record as a single JSON object.

    ``static_fields`` (service, environment) are written first; fields passed
    through ``extra`` are appended unless they clash with a core key.
    """

    def __init__(self, *, static_fields: dict[str, Any] | None = None, datefmt: str | None = None) -> None:
        super().__init__(datefmt=datefmt)
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            **self.static_fields,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None) or get_request_id(),
        }
        for key, value in vars(record).items():
            if key not in _STANDARD_ATTRS and key not in entry:
                entry[key] = _jsonable(value)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp records with the correlation id bound to the current request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def build_logging_config(settings: Settings) -> dict[str, Any]:
    """Return the ``dictConfig`` mapping for ``settings``."""

    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    formatters: dict[str, Any] = {
        "json": {
            "()": JsonLogFormatter,
            "static_fields": {"service": settings.project_name, "environment": settings.environment},
        },
        "text": {"format": TEXT_FORMAT},
    }
    handler = {
        "class": "logging.StreamHandler",
        "stream": "ext://sys.stdout",
        "formatter": settings.log_format,
        "filters": ["request_context"],
        "level": level,
    }

    loggers: dict[str, Any] = {
        name: {"handlers": ["console"], "level": level, "propagate": False}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    }
    for name in _QUIET_LOGGERS:
        loggers[name] = {"level": max(level, logging.WARNING)}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": {"request_context": {"()": RequestContextFilter}},
        "handlers": {"console": handler},
        "root": {"handlers": ["console"], "level": level},
        "loggers": loggers,
    }


def configure_logging(settings: Settings) -> None:
    """Install the logging configuration derived from ``settings``."""

    logging.captureWarnings(True)
    logging.config.dictConfig(build_logging_config(settings))


__all__ = [
    "JsonLogFormatter",
    "RequestContextFilter",
    "build_logging_config",
    "configure_logging",
]
