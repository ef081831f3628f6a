# src/blogapp/core/logging/filters.py
"""
Logging filters.

  - The request id lives in a `contextvars.ContextVar`: it follows a request
    across `await`s and into worker threads started for it, and never leaks into
    a concurrent request. middleware.py sets and resets it.
  - `RequestIdFilter` gives every record a `request_id` (the real id or "-"),
    so `%(request_id)s` always resolves.
  - `RedactFilter` masks secret-looking attributes passed through `extra`,
    also one level down inside dict values (e.g. `extra={"headers": {...}}`).

Both filters annotate and return True; they never drop a record.
"""

import contextvars
import logging
from logging import LogRecord

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

REDACTED = "***REDACTED***"


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Set the id for the current context; keep the token for `reset_request_id`."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Precedence: an explicit `extra={"request_id": ...}`, then the context
    value, then "-".
    """

    def filter(self, record: LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = get_request_id() or "-"
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = frozenset(
        {"password", "secret", "token", "access_token", "refresh_token", "authorization", "cookie"}
    )

    def _mask(self, value):
        if isinstance(value, dict):
            return {k: REDACTED if str(k).lower() in self.SENSITIVE else v for k, v in value.items()}
        return value

    def filter(self, record: LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
            else:
                record.__dict__[key] = self._mask(value)
        return True
