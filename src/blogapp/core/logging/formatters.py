# src/blogapp/core/logging/formatters.py
"""
Log formatters.

  - JsonFormatter: one JSON object per line for log collectors: service, env,
    version, request_id, plus anything passed through `extra={...}`.
  - ColorFormatter: `TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE` with the
    level colored, for a developer terminal.

Secrets must be masked (RedactFilter) before a record reaches a formatter.
"""

import json
import logging
from logging import LogRecord
from typing import Any

from ...utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# Attributes every LogRecord carries; anything else on a record came from `extra`.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter. Never raises on odd extras: values that are not
    JSON-serializable are written with str().
    """

    def __init__(self, *, env: str | None = None, service: str | None = None, datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service or "blogapp"

    def extras(self, record: LogRecord) -> dict[str, Any]:
        return {
            key: _jsonable(value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }

    def format(self, record: LogRecord) -> str:
        payload: dict[str, Any] = self.extras(record)
        payload.update(
            timestamp=self.formatTime(record, self.datefmt),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
            pathname=record.pathname,
            lineno=record.lineno,
            request_id=getattr(record, "request_id", "-"),
            service=self.service,
            env=self.env,
            version=PROJECT_VERSION,
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """Only the level name is colored; a traceback follows on the next lines."""

    COLORS = {
        "DEBUG": "\033[36m",        # cyan
        "INFO": "\033[32m",         # green
        "WARNING": "\033[33m",      # yellow
        "ERROR": "\033[31m",        # red
        "CRITICAL": "\033[1;41m",   # bold on red
    }
    RESET = "\033[0m"

    def format(self, record: LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        line = " | ".join(
            (
                self.formatTime(record, self.datefmt),
                f"{color}{record.levelname:<8}{self.RESET}",
                f"{record.name:<30}",
                f"{getattr(record, 'request_id', '-'):<10}",
                record.getMessage(),
            )
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
