"""Pydantic schemas for comments."""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

from postsomething.core.ids import BIGINT_MAX


if TYPE_CHECKING:
    from .models import Comment


# ==============================================================================
# Request Schemas
# ==============================================================================


class CommentRequest(BaseModel):
    """Request to create a comment on a post."""

    content: str = Field(..., min_length=1, max_length=10000)
    parent_id: int | None = Field(
        None, ge=0, le=BIGINT_MAX, description="Comment being replied to"
    )

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Strip whitespace and validate content."""
        v = v.strip()
        if not v:
            msg = "Content cannot be empty"
            raise ValueError(msg)
        return v


# ==============================================================================
# Response Schemas
# ==============================================================================


class CommentResponse(BaseModel):
    """Comment returned to clients."""

    id: int
    content: str
    author_id: str
    post_id: int
    parent_id: int | None = None
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: "Comment") -> "CommentResponse":
        return cls(
            id=comment.id,
            content=comment.content,
            author_id=comment.author_id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            created_at=comment.created_at,
        )
