"""Database models for threaded comments.

Cassandra table definitions for:
- comments: lookup by comment id
- comments_by_post: all comments of a post, in creation order

Architecture: adjacency list, ``parent_id`` references the parent comment
(NULL for top-level comments). Both tables are written on create and
cleared on delete.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from postsomething.core.ids import next_id


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

COMMENT_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.comments (
    id BIGINT PRIMARY KEY,
    post_id BIGINT,
    parent_id BIGINT,
    author_id TEXT,
    content TEXT,
    created_at TIMESTAMP
)
"""

# Partition by post_id, ids are time ordered so clustering gives creation order
COMMENT_BY_POST_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.comments_by_post (
    post_id BIGINT,
    id BIGINT,
    parent_id BIGINT,
    author_id TEXT,
    content TEXT,
    created_at TIMESTAMP,
    PRIMARY KEY ((post_id), id)
) WITH CLUSTERING ORDER BY (id ASC)
"""

COMMENT_AUTHOR_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS comments_author_idx ON {keyspace}.comments (author_id)
"""

COMMENTS_TABLES_CQL = [
    COMMENT_TABLE_CQL,
    COMMENT_BY_POST_TABLE_CQL,
    COMMENT_AUTHOR_INDEX_CQL,
]


# ==============================================================================
# Entity
# ==============================================================================


@dataclass
class Comment:
    """Comment on a post, optionally replying to another comment."""

    id: int
    content: str
    author_id: str
    post_id: int
    parent_id: int | None
    created_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "Comment":
        """Create Comment from Cassandra row."""
        created_at = row.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        return cls(
            id=row.id,
            content=row.content or "",
            author_id=row.author_id,
            post_id=row.post_id,
            parent_id=row.parent_id,
            created_at=created_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "content": self.content,
            "author_id": self.author_id,
            "post_id": self.post_id,
            "parent_id": self.parent_id,
            "created_at": self.created_at.isoformat(),
        }


def create_comment(
    content: str,
    author_id: str,
    post_id: int,
    parent_id: int | None = None,
) -> Comment:
    """Create a new comment with a fresh id."""
    return Comment(
        id=next_id(),
        content=content,
        author_id=author_id,
        post_id=post_id,
        parent_id=parent_id,
        created_at=datetime.now(UTC),
    )
