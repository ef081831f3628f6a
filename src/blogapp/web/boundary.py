"""
Error boundary for server-side rendering.

A render is a zero-argument callable returning HTML. `render_safely` runs it
and captures the outcome as a value:

    Ok(content)     the render succeeded
    Failed(reason)  the render raised; the exception was logged with its stack

`ErrorBoundary` adds the sticky behaviour: after the first failure it stays
failed for its whole lifetime and never calls its children again. A fresh
boundary (one per page render) is the only way back.
"""

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = "<h1>Something went wrong.</h1>"


@dataclass(frozen=True)
class Ok:
    content: str


@dataclass(frozen=True)
class Failed:
    reason: str


RenderResult = Ok | Failed


def render_safely(render: Callable[[], str]) -> RenderResult:
    """Run `render`, turning any exception into Failed. Never raises."""
    try:
        return Ok(render())
    except Exception as exc:
        logger.exception(
            "render.failed",
            extra={"component": getattr(render, "__name__", repr(render))},
        )
        return Failed(reason=str(exc) or type(exc).__name__)


class ErrorBoundary:
    """
    Wrap renders of descendant components.

        boundary = ErrorBoundary()
        page = boundary.html(lambda: components.post_list(posts))
    """

    def __init__(self, fallback: str = DEFAULT_FALLBACK):
        self.fallback = fallback
        self._failure: Failed | None = None

    @property
    def has_error(self) -> bool:
        return self._failure is not None

    def render(self, render: Callable[[], str]) -> RenderResult:
        if self._failure is not None:
            return self._failure
        result = render_safely(render)
        if isinstance(result, Failed):
            self._failure = result
        return result

    def html(self, render: Callable[[], str]) -> str:
        """The rendered content, or the static fallback once the boundary has failed."""
        result = self.render(render)
        if isinstance(result, Ok):
            return result.content
        return self.fallback
