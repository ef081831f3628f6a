"""
Ordered request pipeline.

    endpoint: async (ctx) -> Response
    stage:    async (ctx, call_next) -> Response

A stage either continues with `await call_next(ctx)` (usually an annotated
copy) or ends the pipeline by returning its own response. Stages run in the
order they were added.
"""

import logging
from typing import Awaitable, Callable, Sequence

from starlette.requests import Request
from starlette.responses import Response

from .context import RequestContext

logger = logging.getLogger(__name__)

Endpoint = Callable[[RequestContext], Awaitable[Response]]
Stage = Callable[[RequestContext, Endpoint], Awaitable[Response]]


class PipelineError(Exception):
    """A stage or the endpoint finished without producing a response."""


class Pipeline:
    def __init__(self, endpoint: Endpoint, stages: Sequence[Stage] = ()):
        self.endpoint = endpoint
        self.stages: tuple[Stage, ...] = tuple(stages)

    def use(self, stage: Stage) -> "Pipeline":
        """Return a new pipeline with `stage` appended; this one is unchanged."""
        return Pipeline(self.endpoint, self.stages + (stage,))

    async def __call__(self, ctx: RequestContext) -> Response:
        return await self._chain(0)(ctx)

    def _chain(self, index: int) -> Endpoint:
        if index == len(self.stages):
            step = self.endpoint
            name = getattr(step, "__name__", repr(step))

            async def run_endpoint(ctx: RequestContext) -> Response:
                return _checked(await step(ctx), name)

            return run_endpoint

        stage = self.stages[index]
        name = getattr(stage, "__name__", repr(stage))
        call_next = self._chain(index + 1)

        async def run_stage(ctx: RequestContext) -> Response:
            return _checked(await stage(ctx, call_next), name)

        return run_stage

    def as_endpoint(self):
        """Adapt the pipeline to a FastAPI/Starlette route endpoint."""

        async def endpoint(request: Request) -> Response:
            ctx = await RequestContext.from_request(request)
            return await self(ctx)

        return endpoint


def _checked(response, name: str) -> Response:
    if response is None:
        raise PipelineError(f"{name} produced no response")
    return response
