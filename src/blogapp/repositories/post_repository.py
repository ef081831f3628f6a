import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.base import NotFoundError
from ..models.post import Post
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class PostRepository(BaseRepository[Post]):
    """
    Repository for blog posts.

    A created post stays retrievable until the store it lives in is reset
    (for the disposable test store: when the test group closes it).
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Post, db)

    async def create_post(self, title: str, body: str) -> Post:
        """Persist a new post and return it with id and created_at populated."""
        return await self.create(title=title, body=body)

    async def list_posts(self, offset: int = 0, limit: int = 100) -> list[Post]:
        """
        Newest first. The order is deterministic, so two listings with no
        write in between are identical.
        """
        return await self.get_all(offset=offset, limit=limit)

    async def get_post(self, post_id: UUID | str) -> Post:
        """
        `post_id` may come straight from a URL; text that is not a UUID names
        no post.

        Raises:
            NotFoundError: no post with this id.
        """
        if not isinstance(post_id, UUID):
            try:
                post_id = UUID(post_id)
            except ValueError:
                raise NotFoundError(f"Post with ID {post_id} not found") from None
        return await self.get_by_id_or_raise(post_id)
