"""
Socket-free request harness.

Drives an ASGI application in-process through `httpx.ASGITransport`: no
listener is opened, and the application's own middleware, handlers and
lifespan-free routes run exactly as they would behind a server.

    async with RequestHarness(create_app(settings, store=store)) as harness:
        response = await harness.get("/test")
        assert response.body == {"logged": True}

The lifespan is not run; pass an already-open store to `create_app`.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

logger = logging.getLogger(__name__)


class HarnessError(Exception):
    """Base class for harness failures."""


class HarnessTimeoutError(HarnessError):
    """The application did not answer within the harness timeout."""


@dataclass(frozen=True)
class SyntheticRequest:
    method: str
    path: str
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CapturedResponse:
    status_code: int
    body: Any
    headers: Mapping[str, str]

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "CapturedResponse":
        body: Any = response.text
        if response.headers.get("content-type", "").startswith("application/json") and response.content:
            body = response.json()
        return cls(status_code=response.status_code, body=body, headers=dict(response.headers))


class RequestHarness:
    """
    Issue synthetic requests against an app and capture status, body and headers.

    Exceptions raised inside the app propagate to the caller while
    `raise_app_exceptions` is true; set it to False to observe the 500 the
    app answered instead.
    """

    def __init__(
        self,
        app,
        *,
        base_url: str = "http://testserver",
        timeout: float = 5.0,
        raise_app_exceptions: bool = True,
    ):
        self.timeout = timeout
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        self._client = httpx.AsyncClient(transport=transport, base_url=base_url)

    async def send(self, request: SyntheticRequest) -> CapturedResponse:
        kwargs: dict[str, Any] = {"headers": dict(request.headers)}
        if request.body is not None:
            if isinstance(request.body, (str, bytes)):
                kwargs["content"] = request.body
            else:
                kwargs["content"] = json.dumps(request.body)
                kwargs["headers"].setdefault("content-type", "application/json")

        try:
            response = await asyncio.wait_for(
                self._client.request(request.method, request.path, **kwargs),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.warning(
                "harness.timeout",
                extra={"method": request.method, "path": request.path, "timeout": self.timeout},
            )
            raise HarnessTimeoutError(
                f"{request.method} {request.path} did not complete within {self.timeout}s"
            ) from exc

        return CapturedResponse.from_httpx(response)

    async def get(self, path: str, *, headers: Mapping[str, str] | None = None) -> CapturedResponse:
        return await self.send(SyntheticRequest("GET", path, headers=headers or {}))

    async def post(
        self, path: str, body: Any = None, *, headers: Mapping[str, str] | None = None
    ) -> CapturedResponse:
        return await self.send(SyntheticRequest("POST", path, body=body, headers=headers or {}))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RequestHarness":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
