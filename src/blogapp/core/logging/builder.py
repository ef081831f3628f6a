# src/blogapp/core/logging/builder.py
"""
Logging builder: create and apply the dictConfig configuration.

    from blogapp.config import get_settings
    from blogapp.core.logging import setup_logging

    setup_logging(get_settings())

`make_dict_config(settings)` is pure, so tests assert on the mapping;
`setup_logging(settings)` applies it. Nothing here reads the environment
itself: the settings object is always passed in.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from ...config.settings import Settings
from ...utils.logging import get_project_name
from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def _writes_files(settings: Settings) -> bool:
    return not settings.LOG_TO_STDOUT and bool(settings.LOG_DIR)


def _handlers(settings: Settings) -> dict[str, dict]:
    handlers = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)
    return handlers


def _logger(level: str, handlers: list[str], propagate: bool = False) -> dict:
    return {"level": level, "handlers": handlers, "propagate": propagate}


def make_dict_config(settings: Settings) -> dict:
    """
    Formatters "standard" (colored when LOG_FORMAT=text) and "json"; filters
    "request_id" and "redact"; handlers from handlers.py; loggers root,
    uvicorn.error, uvicorn.access and sqlalchemy.engine.
    """
    handlers = _handlers(settings)
    every_handler = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
                "format": TEXT_FORMAT,
            },
            "json": {
                "()": JsonFormatter,
                "env": settings.ENV,
                "service": get_project_name(default="blogapp"),
            },
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": {
            "": _logger(settings.LOG_LEVEL, every_handler, propagate=True),
            "uvicorn.error": _logger(settings.LOG_LEVEL, every_handler),
            "uvicorn.access": _logger("INFO", ["console"]),
            # SQL statements can carry post contents; off unless asked for
            "sqlalchemy.engine": _logger(
                "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING", ["console"]
            ),
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Create LOG_DIR when writing files, apply the configuration, and put a
    RequestIdFilter on the root logger so `%(request_id)s` always resolves.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for f in root.filters):
        root.addFilter(RequestIdFilter())
