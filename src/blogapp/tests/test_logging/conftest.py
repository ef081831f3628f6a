import pytest

from blogapp.core.logging.builder import setup_logging

from ..test_fixtures.store_fixtures import make_test_settings


@pytest.fixture(autouse=True)
def restore_logging(tmp_path_factory):
    """Tests here reconfigure logging; put the session configuration back afterwards."""
    yield
    setup_logging(make_test_settings(tmp_path_factory.mktemp("logging")))
