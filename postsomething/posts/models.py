"""Database models for posts.

Cassandra table definitions and the Post entity.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from postsomething.core.ids import next_id


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

POST_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.posts (
    id BIGINT PRIMARY KEY,
    title TEXT,
    description TEXT,
    author_id TEXT,
    created_at TIMESTAMP
)
"""

POST_AUTHOR_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS posts_author_idx ON {keyspace}.posts (author_id)
"""

POSTS_TABLES_CQL = [
    POST_TABLE_CQL,
    POST_AUTHOR_INDEX_CQL,
]


# ==============================================================================
# Entity
# ==============================================================================


@dataclass
class Post:
    """Blog post. Immutable once stored, except for deletion."""

    id: int
    title: str
    description: str
    author_id: str
    created_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "Post":
        """Create Post from Cassandra row."""
        created_at = row.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        return cls(
            id=row.id,
            title=row.title or "",
            description=row.description or "",
            author_id=row.author_id,
            created_at=created_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "author_id": self.author_id,
            "created_at": self.created_at.isoformat(),
        }


def create_post(title: str, description: str, author_id: str) -> Post:
    """Create a new post with a fresh id."""
    return Post(
        id=next_id(),
        title=title,
        description=description,
        author_id=author_id,
        created_at=datetime.now(UTC),
    )
