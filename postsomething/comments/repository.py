"""Comment store backed by Cassandra.

Writes go to both ``comments`` (lookup by id) and ``comments_by_post``
(listing per post). The insert into ``comments`` is conditional and
claims the id; the listing row is written only once that succeeds.
"""

from dataclasses import replace
from typing import TYPE_CHECKING

from postsomething.core.exceptions import ConflictError
from postsomething.core.ids import next_id
from postsomething.core.logging import get_logger
from postsomething.core.query import Filter, by_id

from .models import Comment, create_comment


if TYPE_CHECKING:
    from cassandra.cluster import Session

    from postsomething.auth.models import User
    from postsomething.posts.models import Post

    from .schemas import CommentRequest


logger = get_logger(__name__)

# Fresh ids tried before giving up on an insert that keeps colliding
MAX_INSERT_ATTEMPTS = 3


class CommentIdCollisionError(ConflictError):
    """No free comment id could be allocated."""

    def __init__(self, message: str = "Could not allocate a comment id"):
        super().__init__(message, "comment_id_collision")


class CommentRepository:
    """CRUD operations for comments."""

    # Columns usable in ``find``; each has a primary key or index
    LOOKUP_COLUMNS = ("id", "author_id")

    def __init__(self, session: "Session", keyspace: str):
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for better performance."""
        self._select_by = {
            column: self.session.prepare(
                f"SELECT * FROM {self.keyspace}.comments WHERE {column} = ?"
            )
            for column in self.LOOKUP_COLUMNS
        }
        self._select_by_post = self.session.prepare(
            f"SELECT * FROM {self.keyspace}.comments_by_post WHERE post_id = ?"
        )
        self._insert_comment = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.comments
            (id, post_id, parent_id, author_id, content, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            IF NOT EXISTS
        """)
        self._insert_comment_by_post = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.comments_by_post
            (post_id, id, parent_id, author_id, content, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """)
        self._delete_comment = self.session.prepare(
            f"DELETE FROM {self.keyspace}.comments WHERE id = ?"
        )
        self._delete_comment_by_post = self.session.prepare(
            f"DELETE FROM {self.keyspace}.comments_by_post WHERE post_id = ? AND id = ?"
        )

    async def find(self, query: Filter) -> Comment | None:
        """Return the first comment matching the filter, or None.

        Raises:
            ValueError: If the filter targets a column that cannot be queried
        """
        statement = self._select_by.get(query.field)
        if statement is None:
            msg = f"Unsupported comment lookup column: {query.field}"
            raise ValueError(msg)

        result = await self.session.aexecute(statement, [query.value])
        for row in result:
            comment = Comment.from_row(row)
            if query(comment):
                return comment
        return None

    async def get_comment(self, comment_id: int) -> Comment | None:
        return await self.find(by_id(comment_id))

    async def get_comments_from_post(self, post_id: int) -> list[Comment]:
        """List the comments of a post in creation order."""
        result = await self.session.aexecute(self._select_by_post, [post_id])
        return [Comment.from_row(row) for row in result]

    async def create_comment(
        self,
        request: "CommentRequest",
        author: "User",
        post: "Post",
        parent: Comment | None = None,
    ) -> Comment:
        """Persist a new comment linking post, author and optional parent.

        Raises:
            CommentIdCollisionError: If every attempted id was taken
        """
        comment = create_comment(
            content=request.content,
            author_id=author.id,
            post_id=post.id,
            parent_id=parent.id if parent else None,
        )
        values = [
            comment.parent_id,
            comment.author_id,
            comment.content,
            comment.created_at,
        ]

        for _attempt in range(MAX_INSERT_ATTEMPTS):
            result = await self.session.aexecute(
                self._insert_comment, [comment.id, comment.post_id, *values]
            )
            if result.was_applied:
                break
            logger.warning("comment_id_collision", comment_id=comment.id)
            comment = replace(comment, id=next_id())
        else:
            raise CommentIdCollisionError()

        await self.session.aexecute(
            self._insert_comment_by_post, [comment.post_id, comment.id, *values]
        )
        return comment

    async def delete(self, comment: Comment) -> None:
        await self.session.aexecute(self._delete_comment, [comment.id])
        await self.session.aexecute(
            self._delete_comment_by_post, [comment.post_id, comment.id]
        )
