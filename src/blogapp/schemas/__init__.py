from .post import PostCreate, PostRead

__all__ = ["PostCreate", "PostRead"]
