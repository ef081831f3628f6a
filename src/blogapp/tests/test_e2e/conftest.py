"""
Fixtures for the browser suite.

`live_server` serves the application on a free local port from a background
thread, against its own disposable store. Set E2E_BASE_URL in the environment
to point the suite at an already running instance instead.

The suite is skipped when no Chromium build is installed for Playwright
(`playwright install chromium`).
"""

import os
import socket
import threading
import time

import pytest
import uvicorn
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from blogapp.main import create_app

from ..test_fixtures.store_fixtures import make_test_settings

STARTUP_TIMEOUT_S = 10


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture(scope="module")
def live_server(tmp_path_factory):
    if external := os.getenv("E2E_BASE_URL"):
        yield external
        return

    port = _free_port()
    settings = make_test_settings(tmp_path_factory.mktemp("e2e"), PORT=port)
    server = uvicorn.Server(
        uvicorn.Config(create_app(settings), host="127.0.0.1", port=port, log_config=None)
    )
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    deadline = time.monotonic() + STARTUP_TIMEOUT_S
    while not server.started:
        if time.monotonic() > deadline or not thread.is_alive():
            server.should_exit = True
            pytest.fail("live server did not start")
        time.sleep(0.05)

    yield f"http://127.0.0.1:{port}"

    server.should_exit = True
    thread.join(timeout=STARTUP_TIMEOUT_S)


@pytest.fixture(scope="module")
def browser():
    with sync_playwright() as p:
        try:
            chromium = p.chromium.launch(headless=True)
        except PlaywrightError as exc:
            pytest.skip(f"Chromium is not available for Playwright: {exc}")
        yield chromium
        chromium.close()


@pytest.fixture
def page(browser):
    context = browser.new_context()
    page = context.new_page()
    yield page
    context.close()
