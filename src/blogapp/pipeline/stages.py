import logging

from starlette.responses import JSONResponse, Response

from .context import RequestContext
from .dispatcher import Endpoint, Pipeline

logger = logging.getLogger(__name__)


async def logging_stage(ctx: RequestContext, call_next: Endpoint) -> Response:
    """Log the request, mark it as logged and always continue."""
    logger.info("pipeline.request", extra={"method": ctx.method, "path": ctx.path})
    return await call_next(ctx.annotate(logged=True))


async def echo_logged(ctx: RequestContext) -> Response:
    """Terminal stage: report what the earlier stages recorded."""
    return JSONResponse({"logged": bool(ctx.annotations.get("logged", False))})


def diagnostics_pipeline() -> Pipeline:
    return Pipeline(echo_logged).use(logging_stage)
