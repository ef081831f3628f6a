import uuid

import pytest

from blogapp.exceptions.base import NotFoundError

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestPostRepository:

    async def test_create_then_get(self, post_repository, sample_post_data):
        """
        Behavior:
            - A created post can be fetched back by id with the same content.

        Importance:
            - A created record stays retrievable until the store is reset.
        """
        # Arrange / Act
        created = await post_repository.create_post(**sample_post_data)
        fetched = await post_repository.get_post(created.id)

        # Assert
        assert fetched.id == created.id
        assert fetched.title == "New Post"
        assert fetched.body == "Blog content"

    async def test_get_unknown_post_raises(self, post_repository):
        with pytest.raises(NotFoundError):
            await post_repository.get_post(uuid.uuid4())

    async def test_get_post_accepts_text_id(self, post_repository, created_post):
        assert (await post_repository.get_post(str(created_post.id))).id == created_post.id

    async def test_get_post_with_malformed_id_raises(self, post_repository):
        with pytest.raises(NotFoundError, match="not-a-post"):
            await post_repository.get_post("not-a-post")

    async def test_list_posts_contains_every_post(self, post_repository, multiple_posts):
        listed = await post_repository.list_posts()

        assert {p.id for p in listed} == {p.id for p in multiple_posts}

    async def test_list_posts_is_empty_on_fresh_store(self, post_repository):
        assert await post_repository.list_posts() == []
