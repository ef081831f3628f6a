"""
Repository layer.

    from blogapp.repositories import PostRepository
"""

from .base_repository import BaseRepository
from .post_repository import PostRepository

__all__ = [
    "BaseRepository",
    "PostRepository",
]
