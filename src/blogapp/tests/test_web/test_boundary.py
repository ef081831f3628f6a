import logging

import pytest

from blogapp.web.boundary import DEFAULT_FALLBACK, ErrorBoundary, Failed, Ok, render_safely

pytestmark = pytest.mark.unit


def broken_component() -> str:
    raise ValueError("Test error")


class TestRenderSafely:

    def test_success_is_ok(self):
        assert render_safely(lambda: "<p>fine</p>") == Ok("<p>fine</p>")

    def test_exception_becomes_failed_and_is_logged(self, caplog):
        """
        Behavior:
            - A component that raises produces Failed(reason) instead of propagating.
            - The error is logged with its stack trace.

        Importance:
            - A single broken component must not take the whole page down.
        """
        with caplog.at_level(logging.ERROR, logger="blogapp.web.boundary"):
            result = render_safely(broken_component)

        assert result == Failed(reason="Test error")
        record = next(r for r in caplog.records if r.getMessage() == "render.failed")
        assert record.exc_info is not None
        assert record.component == "broken_component"


class TestErrorBoundary:

    def test_renders_children_when_healthy(self):
        boundary = ErrorBoundary()

        assert boundary.html(lambda: "<p>child</p>") == "<p>child</p>"
        assert boundary.has_error is False

    def test_renders_fallback_when_child_raises(self):
        """
        Behavior:
            - A descendant raising during render shows the fallback heading.
        """
        boundary = ErrorBoundary()

        html = boundary.html(broken_component)

        assert html == DEFAULT_FALLBACK
        assert "Something went wrong." in html
        assert boundary.has_error is True

    def test_failure_is_sticky(self):
        """
        Behavior:
            - After a failure the boundary never calls its children again,
              even when the next render would succeed.
        """
        # Arrange
        boundary = ErrorBoundary(fallback="<p>oops</p>")
        calls = []

        def healthy():
            calls.append(1)
            return "<p>child</p>"

        # Act
        boundary.html(broken_component)
        second = boundary.render(healthy)

        # Assert
        assert isinstance(second, Failed)
        assert boundary.html(healthy) == "<p>oops</p>"
        assert calls == []

    def test_new_boundary_starts_healthy(self):
        ErrorBoundary().html(broken_component)

        assert ErrorBoundary().html(lambda: "ok") == "ok"
