# src/blogapp/core/logging/middleware.py
"""
Request ID middleware for FastAPI / Starlette.

Each request gets an id that RequestIdFilter stamps on every log record
emitted while handling it, and that is echoed in the `X-Request-ID` response
header so clients can correlate a response with server logs.

  - An incoming `X-Request-ID` is reused when it is a well-formed UUID; anything
    else is replaced by a fresh uuid4 (no log injection through the header).
  - The contextvar is reset in `finally`, also when the handler raised.
  - With an `error_handler`, an exception escaping the route is answered inside
    the request context, so the error log and the 500 carry the same id.
    Without one it propagates to Starlette's ServerErrorMiddleware.

Register it early:
    app.add_middleware(RequestIDMiddleware, error_handler=unhandled_exception_handler)
"""

import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"

ErrorHandler = Callable[[Request, Exception], Awaitable[Response]]


def _accept_or_generate(incoming: str | None) -> str:
    if incoming:
        try:
            return str(uuid.UUID(incoming))
        except ValueError:
            pass
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Starlette / FastAPI middleware that sets a request id for each incoming request.
    """

    def __init__(self, app: ASGIApp, error_handler: ErrorHandler | None = None):
        super().__init__(app)
        self.error_handler = error_handler

    async def dispatch(self, request: Request, call_next):
        rid = _accept_or_generate(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                if self.error_handler is None:
                    raise
                response = await self.error_handler(request, exc)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
