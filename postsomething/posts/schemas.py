"""Pydantic schemas for posts."""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator


if TYPE_CHECKING:
    from postsomething.posts.models import Post


class PostRequest(BaseModel):
    """Request to create a post."""

    title: str = Field(..., min_length=1, max_length=200, description="Post title")
    body: str = Field(..., min_length=1, max_length=50000, description="Post body")

    @field_validator("title", "body")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank")
        return v


class PostResponse(BaseModel):
    """Post returned to clients."""

    id: int
    title: str
    description: str
    author_id: str
    created_at: datetime

    @classmethod
    def from_post(cls, post: "Post") -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            description=post.description,
            author_id=post.author_id,
            created_at=post.created_at,
        )
