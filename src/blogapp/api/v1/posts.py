"""
JSON API for posts.

    GET  /api/posts        200, array of posts (newest first)
    POST /api/posts        201, the created post
    GET  /api/posts/{id}   200, one post; 404 when unknown

Repository errors are not caught here; the handlers registered in
`error_handlers` turn them into responses.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...database.session import get_db_session
from ...repositories.post_repository import PostRepository
from ...schemas.post import PostCreate, PostRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts", tags=["posts"])


def get_post_repository(db: AsyncSession = Depends(get_db_session)) -> PostRepository:
    return PostRepository(db)


@router.get("", response_model=list[PostRead])
async def list_posts(
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    repo: PostRepository = Depends(get_post_repository),
):
    return await repo.list_posts(offset=offset, limit=limit)


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(payload: PostCreate, repo: PostRepository = Depends(get_post_repository)):
    post = await repo.create_post(title=payload.title, body=payload.body)
    # repositories only flush; the request decides when to commit
    await repo.db.commit()
    logger.info("api.posts.created", extra={"id": str(post.id)})
    return post


@router.get("/{post_id}", response_model=PostRead)
async def get_post(post_id: str, repo: PostRepository = Depends(get_post_repository)):
    return await repo.get_post(post_id)
