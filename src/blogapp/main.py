"""
Application factory and entry point.

    uvicorn --factory blogapp.main:create_app
    blogapp            # console script: logging + uvicorn from settings
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .api.v1 import diagnostics_router, posts_router
from .api.v1.error_handlers import register_exception_handlers, unhandled_exception_handler
from .config import Settings, get_settings
from .core.logging import RequestIDMiddleware, setup_logging
from .database.lifecycle import StoreLifecycle
from .utils.logging import get_project_version
from .web.pages import router as pages_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, *, store: StoreLifecycle | None = None) -> FastAPI:
    """
    Build the application.

    The lifespan opens the store on startup and closes it on shutdown, but only
    a store it opened itself: an already-open `store` passed in belongs to the
    caller (a test fixture, usually) and is left untouched.
    """
    settings = settings or get_settings()
    if store is None:
        store = StoreLifecycle(settings.store_config, echo=settings.SQLALCHEMY_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = not store.is_open
        if owns_store:
            await store.open()
        logger.info("app.startup", extra={"env": settings.ENV, "store": store.config.safe_url})
        try:
            yield
        finally:
            if owns_store:
                await store.close()
            logger.info("app.shutdown")

    app = FastAPI(
        title="Blog",
        version=get_project_version(default="0.0.0"),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(RequestIDMiddleware, error_handler=unhandled_exception_handler)

    app.include_router(posts_router)
    app.include_router(diagnostics_router)
    app.include_router(pages_router)

    register_exception_handlers(app)
    return app


def run() -> None:
    settings = get_settings()
    setup_logging(settings)
    uvicorn.run(
        "blogapp.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
