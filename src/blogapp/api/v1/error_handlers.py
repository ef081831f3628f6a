# blogapp/api/v1/error_handlers.py
"""
FastAPI exception handlers.

Repository errors carry their own payload (`to_payload()`) and status
(`http_status()`), so the handlers for them stay tiny. Anything else that
escapes a route reaches `unhandled_exception_handler`: it is logged with its
stack and answered with a 500 and `{"message": str(exc)}`.

    from blogapp.api.v1.error_handlers import register_exception_handlers
    register_exception_handlers(app)
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from ...exceptions.base import RepositoryError, InvalidFieldError, NotFoundError

logger = logging.getLogger(__name__)


# Most specific first
async def invalid_field_handler(request: Request, exc: InvalidFieldError) -> JSONResponse:
    """422 Unprocessable Entity for unexpected fields."""
    logger.info("InvalidFieldError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    Fallback for other repository errors: 400 unless the error code maps elsewhere.
    The message is client-safe; DB internals were already logged by the mapper.
    """
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    500 for anything no other handler claimed.

    `create_app` hands it to RequestIDMiddleware, which answers route errors
    while the request id is still set. Registered for `Exception` it also
    covers errors raised outside that middleware; there Starlette's
    ServerErrorMiddleware re-raises after this response is sent, so test
    clients are built with `raise_server_exceptions=False`.
    """
    logger.exception(
        "unhandled.exception",
        extra={"method": request.method, "path": request.url.path},
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"message": str(exc)})


def register_exception_handlers(app) -> None:
    app.add_exception_handler(InvalidFieldError, invalid_field_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
