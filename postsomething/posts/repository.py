"""Post store backed by Cassandra."""

from dataclasses import replace
from typing import TYPE_CHECKING

from postsomething.core.exceptions import ConflictError, NotFoundError
from postsomething.core.ids import next_id
from postsomething.core.logging import get_logger
from postsomething.core.query import Filter
from postsomething.posts.models import Post, create_post


if TYPE_CHECKING:
    from cassandra.cluster import Session

    from postsomething.posts.schemas import PostRequest


logger = get_logger(__name__)

# Fresh ids tried before giving up on an insert that keeps colliding
MAX_INSERT_ATTEMPTS = 3


class PostNotFoundError(NotFoundError):
    """Post not found."""

    def __init__(self, message: str = "Post not found"):
        super().__init__(message, "post_not_found")


class PostIdCollisionError(ConflictError):
    """No free post id could be allocated."""

    def __init__(self, message: str = "Could not allocate a post id"):
        super().__init__(message, "post_id_collision")


class PostRepository:
    """CRUD operations for posts."""

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
                f"SELECT * FROM {self.keyspace}.posts WHERE {column} = ?"
            )
            for column in self.LOOKUP_COLUMNS
        }
        self._select_all = self.session.prepare(
            f"SELECT * FROM {self.keyspace}.posts"
        )
        self._insert_post = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.posts
            (id, title, description, author_id, created_at)
            VALUES (?, ?, ?, ?, ?)
            IF NOT EXISTS
        """)
        self._delete_post = self.session.prepare(
            f"DELETE FROM {self.keyspace}.posts WHERE id = ?"
        )

    async def find(self, query: Filter) -> Post | None:
        """Return the first post matching the filter, or None.

        Raises:
            ValueError: If the filter targets a column that cannot be queried
        """
        statement = self._select_by.get(query.field)
        if statement is None:
            msg = f"Unsupported post lookup column: {query.field}"
            raise ValueError(msg)

        result = await self.session.aexecute(statement, [query.value])
        for row in result:
            post = Post.from_row(row)
            if query(post):
                return post
        return None

    async def get_list(self) -> list[Post]:
        """List all posts, newest first."""
        result = await self.session.aexecute(self._select_all)
        posts = [Post.from_row(row) for row in result]
        return sorted(posts, key=lambda p: p.id, reverse=True)

    async def create_post(self, request: "PostRequest", author_id: str) -> Post:
        """Persist a new post.

        The insert is conditional so an id already in use is never
        overwritten; a collision is retried with a fresh id.

        Raises:
            PostIdCollisionError: If every attempted id was taken
        """
        post = create_post(
            title=request.title, description=request.body, author_id=author_id
        )
        for _attempt in range(MAX_INSERT_ATTEMPTS):
            result = await self.session.aexecute(
                self._insert_post,
                [
                    post.id,
                    post.title,
                    post.description,
                    post.author_id,
                    post.created_at,
                ],
            )
            if result.was_applied:
                logger.info("post_created", post_id=post.id, author_id=author_id)
                return post

            logger.warning("post_id_collision", post_id=post.id)
            post = replace(post, id=next_id())

        raise PostIdCollisionError()

    async def delete(self, post: Post) -> None:
        await self.session.aexecute(self._delete_post, [post.id])
        logger.info("post_deleted", post_id=post.id)
