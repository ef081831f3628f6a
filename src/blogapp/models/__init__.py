r"""
Centralized access to all database models.

Importing this package registers every model with `Base.metadata`, which is
what `StoreLifecycle` creates and drops.

    from blogapp.models import Post
"""

from .post import Post

__all__ = [
    "Post",
]
