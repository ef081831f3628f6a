"""
Core pytest configuration for the entire test suite.

This module provides only the essential setup needed across ALL test groups:
logging for the session and the registration of shared fixtures.

Domain-specific fixtures are located in:
- tests/test_fixtures/store_fixtures.py   (disposable store, sessions, request harness)
- tests/test_fixtures/post_fixtures.py    (Faker data, repositories, created posts)

Each store fixture points at a SQLite file under pytest's tmp directory, so
the production DATABASE_URL is never opened by the suite.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging
# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Silence noisy third-party loggers before importing modules that might
# initialize them (Faker, SQLAlchemy, ...). Keep this block at the top.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
    "urllib3",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest

from blogapp.core.logging.builder import setup_logging

from .test_fixtures.store_fixtures import make_test_settings

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------------------------
# Logging: install application logging once
# ------------------------------------------------------------------------------------------------


# `autouse=True`: pytest applies this fixture without it being requested.
@pytest.fixture(scope="session", autouse=True)
def configure_logging(tmp_path_factory):
    """
    Install application logging for the entire test session.

    pytest attaches its capture handlers per test phase, after this fixture
    ran, so `caplog.records` keeps working on top of the dictConfig setup.
    """
    setup_logging(make_test_settings(tmp_path_factory.mktemp("logging")))
    yield


# Shared fixtures from test_fixtures/ registered globally
from .test_fixtures.store_fixtures import (  # noqa: E402
    store_settings,
    store,
    db_session,
    app,
    harness,
)
from .test_fixtures.post_fixtures import (  # noqa: E402
    faker_seeded,
    sample_post_data,
    post_repository,
    create_post,
    created_post,
    multiple_posts,
)
