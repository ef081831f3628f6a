"""
Errors raised while configuring or opening a persistent store.

Both are fatal for whoever asked for the store: a test group whose disposable
store cannot be opened does not run, and there is no retry.
"""


class StoreError(Exception):
    """Base class for store lifecycle failures."""


class StoreConfigError(StoreError):
    """
    The store configuration is unusable, e.g. the disposable test store is
    missing or points at the production store.
    """


class StoreConnectionError(StoreError):
    """The store could not be reached while opening it."""

    def __init__(self, message: str, *, url: str | None = None):
        super().__init__(message)
        self.url = url  # already sanitized, never carries credentials


__all__ = ["StoreError", "StoreConfigError", "StoreConnectionError"]
