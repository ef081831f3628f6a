"""
HTML pages of the blog.

    GET  /             heading "Posts", creation form, links to every post
    POST /posts        form submission; 303 back to / on success
    GET  /posts/{id}   detail page

Page content is rendered inside a fresh ErrorBoundary per request, so a failing
component turns into the static fallback instead of a 500.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.session import get_db_session
from ..exceptions.base import NotFoundError
from ..repositories.post_repository import PostRepository
from ..schemas.post import PostCreate
from . import components
from .boundary import ErrorBoundary

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)


def render_page(title: str, render: Callable[[], str], status_code: int = status.HTTP_200_OK) -> HTMLResponse:
    content = ErrorBoundary().html(render)
    return HTMLResponse(components.layout(title, content), status_code=status_code)


def _home(posts, *, title: str = "", body: str = "", error: str | None = None) -> str:
    return (
        "<h1>Posts</h1>"
        + components.post_form(title=title, body=body, error=error)
        + components.post_list(posts)
    )


def _form_error(exc: ValidationError) -> str:
    """One line for the form: blank fields first, then fields that are too long."""
    missing: set[str] = set()
    too_long: dict[str, int] = {}
    for err in exc.errors():
        if not err["loc"]:
            continue
        field = str(err["loc"][0])
        if err["type"] == "string_too_long":
            too_long[field] = err["ctx"]["max_length"]
        else:
            missing.add(field)

    parts = []
    if missing:
        parts.append(f"Please fill in: {', '.join(sorted(missing))}")
    parts.extend(
        f"{field.capitalize()} must be at most {limit} characters" for field, limit in sorted(too_long.items())
    )
    return ". ".join(parts)


@router.get("/", response_class=HTMLResponse)
async def home(db: AsyncSession = Depends(get_db_session)):
    posts = await PostRepository(db).list_posts()
    return render_page("Posts", lambda: _home(posts))


@router.post("/posts")
async def submit_post(
    title: str = Form(""),
    body: str = Form(""),
    db: AsyncSession = Depends(get_db_session),
):
    repo = PostRepository(db)
    try:
        payload = PostCreate(title=title, body=body)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        logger.info("pages.submit.invalid", extra={"fields": fields})
        posts = await repo.list_posts()
        message = _form_error(exc)
        return render_page(
            "Posts",
            lambda: _home(posts, title=title, body=body, error=message),
            status_code=422,
        )

    post = await repo.create_post(title=payload.title, body=payload.body)
    await db.commit()
    logger.info("pages.submit.created", extra={"id": str(post.id)})
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/posts/{post_id}", response_class=HTMLResponse)
async def post_page(post_id: str, db: AsyncSession = Depends(get_db_session)):
    try:
        post = await PostRepository(db).get_post(post_id)
    except NotFoundError:
        return render_page(
            "Post not found",
            lambda: '<h1>Post not found</h1><a href="/">Back to posts</a>',
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return render_page(post.title, lambda: components.post_detail(post))
