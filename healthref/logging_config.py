"""Root logger setup with JSON and text formatters."""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

from healthref.services.request_context import get_request_id, short_request_id

SERVICE_NAME = "healthref"

# LogRecord attributes that are not user-supplied ``extra`` fields.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
    | {"message", "asctime", "taskName"}
)

# uvicorn's own access log duplicates RequestLoggingMiddleware output.
_QUIET_LOGGERS: dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "asyncpg": logging.WARNING,
}


def _utc(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": _utc(record).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            payload["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = "".join(
                traceback.format_exception(*record.exc_info)
            )

        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """``<ts> LEVEL [request-id] logger - message`` for local development."""

    def format(self, record: logging.LogRecord) -> str:
        ts = _utc(record).strftime("%Y-%m-%d %H:%M:%S")
        rid = short_request_id()
        prefix = f"[{rid}] " if rid else ""

        line = f"{ts} {record.levelname:<8} {prefix}{record.name} - {record.getMessage()}"

        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return line


def setup_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Install a single stderr handler on the root logger. Idempotent."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    root.addHandler(handler)

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
