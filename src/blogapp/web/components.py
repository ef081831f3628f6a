"""
Server-rendered HTML components.

Each component is a plain function returning an HTML fragment. All text that
comes from users goes through `html.escape`.
"""

import html
from dataclasses import dataclass
from typing import Iterable


def _e(value) -> str:
    return html.escape(str(value), quote=True)


def button(text: str, *, type: str = "button", name: str | None = None) -> str:
    name_attr = f' name="{_e(name)}"' if name else ""
    return f'<button type="{_e(type)}"{name_attr}>{_e(text)}</button>'


@dataclass
class Counter:
    """Small piece of component state: a count with increment/decrement/reset."""

    count: int = 0
    initial: int = 0

    def increment(self) -> int:
        self.count += 1
        return self.count

    def decrement(self) -> int:
        self.count -= 1
        return self.count

    def reset(self) -> int:
        self.count = self.initial
        return self.count


def use_counter(initial: int = 0) -> Counter:
    """Return a fresh counter starting at `initial`."""
    return Counter(count=initial, initial=initial)


def post_form(*, title: str = "", body: str = "", error: str | None = None) -> str:
    """
    Creation form. Field names are part of the browser contract:
    input[name=title], textarea[name=body], button[type=submit].
    """
    error_html = f'<p class="error" role="alert">{_e(error)}</p>' if error else ""
    return (
        '<form method="post" action="/posts" class="post-form">'
        f"{error_html}"
        '<label for="title">Title</label>'
        f'<input id="title" name="title" type="text" maxlength="200" value="{_e(title)}">'
        '<label for="body">Body</label>'
        f'<textarea id="body" name="body" rows="6">{_e(body)}</textarea>'
        f'{button("Create post", type="submit")}'
        "</form>"
    )


def post_list(posts: Iterable) -> str:
    """Links to each post's detail page, in the given order."""
    items = [
        f'<li><a href="/posts/{_e(post.id)}">{_e(post.title)}</a></li>'
        for post in posts
    ]
    if not items:
        return '<p class="empty">No posts yet.</p>'
    return '<ul class="posts">' + "".join(items) + "</ul>"


def post_detail(post) -> str:
    return (
        '<article class="post">'
        f"<h2>{_e(post.title)}</h2>"
        f"<p>{_e(post.body)}</p>"
        '<a href="/">Back to posts</a>'
        "</article>"
    )


def layout(title: str, content: str) -> str:
    """Full HTML document around an already-rendered fragment."""
    return (
        "<!doctype html>"
        '<html lang="en">'
        "<head>"
        '<meta charset="utf-8">'
        f"<title>{_e(title)}</title>"
        "</head>"
        "<body>"
        '<header><a href="/">Blog</a></header>'
        f"<main>{content}</main>"
        "</body>"
        "</html>"
    )
