"""
Persistent-store lifecycle.

`StoreLifecycle` owns one async SQLAlchemy engine for the lifetime of a
"group": the running application (FastAPI lifespan) or a group of tests.

    config = ephemeral_store_config(settings.TEST_DATABASE_URL, settings.DATABASE_URL)
    async with StoreLifecycle(config) as store:
        async with store.session() as session:
            ...

Rules:
  - `open()` connects and checks the connection with `SELECT 1` before anything
    else. A failure raises StoreConnectionError; there is no retry.
  - Missing tables are created on open (`create_all` never drops or alters).
  - Only an ephemeral store has its tables dropped on `close()`.
  - `ephemeral_store_config()` refuses a test URL that resolves to the
    production store, so a disposable store can never be the production one.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from sqlalchemy import MetaData, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .base import Base
from .. import models  # noqa: F401 – import to register models with Base.metadata
from ..exceptions.store import StoreError, StoreConfigError, StoreConnectionError

logger = logging.getLogger(__name__)

# server ports assumed when a URL leaves the port out
_DEFAULT_PORTS = {"postgresql": 5432, "mysql": 3306, "mariadb": 3306, "mssql": 1433}


@dataclass(frozen=True)
class StoreConfig:
    """
    Where the store lives and whether it may be thrown away.

    connection_string: SQLAlchemy async URL, e.g. "sqlite+aiosqlite:///./blog.db"
    is_ephemeral: True for disposable (test) stores; their tables are dropped on close.
    """

    connection_string: str
    is_ephemeral: bool = False

    @property
    def safe_url(self) -> str:
        return safe_db_url(self.connection_string)


def safe_db_url(db_url: str) -> str:
    """
    Return the URL without username and password, for logs and error messages.
    """
    try:
        url = make_url(db_url)
    except ArgumentError:
        return "<invalid database url>"
    return url.set(username=None, password=None).render_as_string(hide_password=True)


def _store_identity(url: URL) -> tuple:
    """
    Identify the physical store a URL points at, ignoring driver and credentials.

    `sqlite+aiosqlite:///./blog.db` and `sqlite:///blog.db` name the same file;
    two in-memory SQLite URLs never do. A missing port means the backend default
    and a missing host means localhost, so `postgresql:///blog` and
    `postgresql://localhost:5432/blog` are the same server.
    """
    backend = url.get_backend_name()
    database = url.database
    if backend == "sqlite":
        if not database or database == ":memory:":
            return (backend, None, None, id(url))
        database = os.path.normcase(os.path.abspath(database))
    host = (url.host or "localhost").lower()
    port = url.port or _DEFAULT_PORTS.get(backend)
    return (backend, host, port, database)


def ephemeral_store_config(test_url: str | None, production_url: str | None) -> StoreConfig:
    """
    Build the configuration of a disposable test store.

    Raises:
        StoreConfigError: if no test URL is configured, if it cannot be parsed, or
            if it resolves to the same store as `production_url`.
    """
    if not test_url:
        raise StoreConfigError("TEST_DATABASE_URL must be set to run against a disposable store")

    try:
        test = make_url(test_url)
    except ArgumentError as exc:
        raise StoreConfigError(f"Invalid test database URL: {safe_db_url(test_url)}") from exc

    if production_url:
        try:
            production = make_url(production_url)
        except ArgumentError as exc:
            raise StoreConfigError("Invalid production database URL") from exc
        if _store_identity(test) == _store_identity(production):
            raise StoreConfigError(
                f"Test store {safe_db_url(test_url)} is the production store; refusing to use it"
            )

    return StoreConfig(connection_string=test_url, is_ephemeral=True)


class StoreLifecycle:
    """
    Open / close wrapper around one async engine.

    Args:
        config: which store to use and whether it is disposable.
        echo: forwarded to `create_async_engine` (SQL echo).
        metadata: schema to create (and drop, for ephemeral stores). Defaults to
            the application's `Base.metadata`.
    """

    def __init__(self, config: StoreConfig, *, echo: bool = False, metadata: MetaData | None = None):
        self.config = config
        self.echo = echo
        self.metadata = metadata if metadata is not None else Base.metadata
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StoreError("Store is not open")
        return self._engine

    async def open(self) -> None:
        """
        Connect, verify the connection and create missing tables.
        Calling open() on an already open store is a no-op.
        """
        if self.is_open:
            return

        engine = create_async_engine(
            self.config.connection_string,
            echo=self.echo,
            pool_pre_ping=True,
        )
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                await conn.run_sync(self.metadata.create_all)
        except (OSError, SQLAlchemyError) as exc:
            await engine.dispose()
            logger.error(
                "store.open.failed",
                extra={"url": self.config.safe_url, "error": type(exc).__name__},
            )
            raise StoreConnectionError(
                f"Could not open store at {self.config.safe_url}", url=self.config.safe_url
            ) from exc

        self._engine = engine
        self._sessionmaker = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(
            "store.open",
            extra={"url": self.config.safe_url, "ephemeral": self.config.is_ephemeral},
        )

    def session(self) -> AsyncSession:
        """Return a new session bound to this store (use as `async with`)."""
        if self._sessionmaker is None:
            raise StoreError("Store is not open")
        return self._sessionmaker()

    async def close(self) -> None:
        """
        Drop the schema of an ephemeral store, then dispose of the engine.
        Closing a store that is not open is a no-op.
        """
        engine = self._engine
        if engine is None:
            return

        try:
            if self.config.is_ephemeral:
                async with engine.begin() as conn:
                    await conn.run_sync(self.metadata.drop_all)
        finally:
            await engine.dispose()
            self._engine = None
            self._sessionmaker = None
            logger.info(
                "store.close",
                extra={"url": self.config.safe_url, "ephemeral": self.config.is_ephemeral},
            )

    async def __aenter__(self) -> "StoreLifecycle":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
