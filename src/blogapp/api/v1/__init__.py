from .diagnostics import router as diagnostics_router
from .posts import router as posts_router

__all__ = ["diagnostics_router", "posts_router"]
