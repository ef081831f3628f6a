"""
Test support shipped with the package.

`harness` is importable anywhere; `e2e` needs Playwright (test extra) and is
imported directly by the browser suite.
"""

from .harness import (
    CapturedResponse,
    HarnessError,
    HarnessTimeoutError,
    RequestHarness,
    SyntheticRequest,
)

__all__ = [
    "CapturedResponse",
    "HarnessError",
    "HarnessTimeoutError",
    "RequestHarness",
    "SyntheticRequest",
]
