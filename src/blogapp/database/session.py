from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from .lifecycle import StoreLifecycle


def get_store(request: Request) -> StoreLifecycle:
    """Return the store owned by the running application."""
    return request.app.state.store


# Dependency to get DB session
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_db_session)):
            await db.execute(...)
    """
    async with get_store(request).session() as session:
        yield session
