"""
Repository-level errors.

Every error knows how it is shown to a client: `to_payload()` for the JSON body
and `http_status()` for the status code. The API error handlers only forward
those two, so adding an error type never touches the handlers.
"""

from http import HTTPStatus
from typing import Iterable


class RepositoryError(Exception):
    """
    Base class for errors raised by repositories.

    message: client-safe text; never carries raw database output.
    fields: names of the offending fields, when there are any.
    error_code: short machine-readable code; subclasses set a default.
    """

    default_code: str | None = None
    status: HTTPStatus = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code or self.default_code

    def __str__(self) -> str:
        details = []
        if self.fields:
            details.append("fields: " + ", ".join(self.fields))
        if self.error_code:
            details.append("code: " + self.error_code)
        return f"{self.message} ({'; '.join(details)})" if details else self.message

    def to_payload(self) -> dict:
        """`{"detail": ..., "code"?: ..., "fields"?: [...]}`"""
        payload: dict = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        return int(self.status)


class NotFoundError(RepositoryError):
    default_code = "not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)


class InvalidFieldError(RepositoryError):
    """The caller passed fields the model does not have."""

    default_code = "invalid_field"
    status = HTTPStatus.UNPROCESSABLE_ENTITY


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "InvalidFieldError",
]
