"""
Handler factories for logging.dictConfig.

Each function returns one handler configuration dict; builder.py decides which
are active. Every handler carries the "request_id" and "redact" filters.

| Name            | Destination    | Level         | Active when                         |
| --------------- | -------------- | ------------- | ----------------------------------- |
| `console`       | stderr         | >= LOG_LEVEL  | always                              |
| `file`          | `app.log`      | >= LOG_LEVEL  | LOG_TO_STDOUT=false and LOG_DIR set |
| `error_file`    | `errors.log`   | >= ERROR      | LOG_TO_STDOUT=false and LOG_DIR set |
| `error_console` | stderr (JSON)  | >= ERROR      | otherwise                           |

Error handlers always write JSON so failures stay machine-readable.
"""

from pathlib import Path

from ...config.settings import Settings

FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def _stream(formatter: str, level: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": formatter,
        "level": level,
        "filters": list(FILTERS),
    }


def _rotating_file(settings: Settings, filename: str, formatter: str, level: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": str(Path(settings.LOG_DIR) / filename),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "formatter": formatter,
        "level": level,
        "filters": list(FILTERS),
    }


def get_console_handler(settings: Settings) -> dict:
    return _stream(_formatter_name(settings), settings.LOG_LEVEL)


def get_error_console_handler(settings: Settings) -> dict:
    return _stream("json", "ERROR")


def get_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, "app.log", _formatter_name(settings), settings.LOG_LEVEL)


def get_error_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, "errors.log", "json", "ERROR")
