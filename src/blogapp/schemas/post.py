from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..validators.config_validators import strip_or_none


class PostCreate(BaseModel):
    """Payload of `POST /api/posts`."""

    title: str = Field(min_length=1, max_length=200)
    body: str = Field(min_length=1)

    # Blank values become None, which fails the `str` type check with a 422.
    @field_validator("title", "body", mode="before")
    def strip_text(cls, v):
        if isinstance(v, str):
            return strip_or_none(v)
        return v


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    body: str
    created_at: datetime
