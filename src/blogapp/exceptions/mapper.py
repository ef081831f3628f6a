import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base import RepositoryError

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

_NOT_NULL_PATTERNS = (
    # Postgres: 'null value in column "title" violates not-null constraint'
    re.compile(r'null value in column "(?P<cols>[^"]+)"', flags=re.IGNORECASE),
    # SQLite: 'NOT NULL constraint failed: posts.title'
    re.compile(r'NOT NULL constraint failed: (?P<cols>.+)$', flags=re.IGNORECASE),
)


def extract_not_null_columns(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of the column names named in a NOT NULL violation.
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    for pattern in _NOT_NULL_PATTERNS:
        m = pattern.search(msg)
        if m:
            return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]
    return None


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """
    Map a SQLAlchemy IntegrityError to a RepositoryError and raise it.
    The raw DB message is only ever logged at DEBUG.
    """
    model_part = model_name or "Record"
    columns = extract_not_null_columns(exc)

    if columns:
        logger.info(
            "mapper.not_null_violation",
            extra={"model": model_part, "fields": columns},
        )
        raise RepositoryError(
            f"Missing required field(s): {', '.join(columns)} for {model_part}", fields=columns
        ) from exc

    raw = str(exc.orig) if exc.orig is not None else str(exc)
    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part})
    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": raw})

    raise RepositoryError(f"{model_part} database integrity error.") from exc


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... DB ops that may raise ...
    Rolls back on error and raises a sanitized RepositoryError.
    """
    try:
        yield
    except RepositoryError:
        await db.rollback()
        raise
    except IntegrityError as exc:
        await db.rollback()
        raise_mapped_integrity_error(exc, model_name)
    except Exception as exc:
        await db.rollback()
        # Unexpected exceptions are logged with stack trace for diagnostics.
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc
