"""
Per-request context threaded through the pipeline.

A stage never mutates the context it receives: `annotate()` returns a new
context, and the next stage gets that one. Nothing outlives the dispatch of
one request, so concurrent requests cannot see each other's annotations.
"""

import json
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from starlette.requests import Request


@dataclass(frozen=True)
class RequestContext:
    method: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    annotations: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # read-only copies: callers keep no handle that could mutate this context
        for name in ("query", "headers", "annotations"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def annotate(self, **values: Any) -> "RequestContext":
        """Return a copy of this context with `values` added to its annotations."""
        return replace(self, annotations={**self.annotations, **values})

    @classmethod
    async def from_request(cls, request: Request) -> "RequestContext":
        """
        Snapshot a Starlette request. JSON bodies are parsed; other bodies are
        kept as text (also JSON that fails to parse); empty bodies become None.
        """
        raw = await request.body()
        body: Any = None
        if raw:
            text = raw.decode("utf-8", errors="replace")
            body = text
            if request.headers.get("content-type", "").startswith("application/json"):
                try:
                    body = json.loads(text)
                except json.JSONDecodeError:
                    body = text
        return cls(
            method=request.method,
            path=request.url.path,
            query=dict(request.query_params),
            headers=dict(request.headers),
            body=body,
        )
