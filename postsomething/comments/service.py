"""Comment service.

Validates and orchestrates comment creation and deletion against a post
and an optional parent comment. Collaborators are injected; lookups run
one after another and nothing is written until every check has passed.
"""

from typing import TYPE_CHECKING

import structlog

from postsomething.auth.service import UserNotFoundError
from postsomething.core.exceptions import ConflictError, ValidationError
from postsomething.core.query import by_id, is_missing
from postsomething.posts.repository import PostNotFoundError

from .models import Comment


if TYPE_CHECKING:
    from postsomething.auth.service import AuthService
    from postsomething.posts.repository import PostRepository

    from .repository import CommentRepository
    from .schemas import CommentRequest


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class ParentCommentNotFoundError(ValidationError):
    """Parent comment id does not reference an existing comment."""

    def __init__(self, message: str = "Parent comment not found"):
        super().__init__(message, "parent_comment_not_found")


class ParentPostMismatchError(ConflictError):
    """Parent comment belongs to a different post."""

    def __init__(
        self, message: str = "Parent comment belongs to a different post"
    ):
        super().__init__(message, "parent_post_mismatch")


class CommentDoesNotExistError(ValidationError):
    """Comment id does not reference an existing comment."""

    def __init__(self, message: str = "Comment does not exist"):
        super().__init__(message, "comment_does_not_exist")


# ==============================================================================
# Comments Service
# ==============================================================================


class CommentsService:
    """Service for comment management."""

    def __init__(
        self,
        comment_repository: "CommentRepository",
        post_repository: "PostRepository",
        user_directory: "AuthService",
    ):
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.user_directory = user_directory

    async def create_comment_from_post(
        self,
        post_id: int,
        request: "CommentRequest",
        author_id: str,
        parent_id: int | None = None,
    ) -> Comment:
        """Create a comment on a post.

        Performs, in order:
        - Post lookup
        - Author lookup
        - Parent lookup and same-post check (replies only)
        - Write

        Raises:
            PostNotFoundError: If the post does not exist
            UserNotFoundError: If the author does not exist
            ParentCommentNotFoundError: If the parent comment does not exist
            ParentPostMismatchError: If the parent belongs to another post
        """
        post = await self.post_repository.find(by_id(post_id))
        if is_missing(post):
            logger.info("comment_rejected", reason="post_not_found", post_id=post_id)
            raise PostNotFoundError

        author = await self.user_directory.get_user_by_id(author_id)
        if is_missing(author):
            logger.info(
                "comment_rejected", reason="author_not_found", author_id=author_id
            )
            raise UserNotFoundError

        parent = None
        if parent_id is not None:
            parent = await self.comment_repository.find(by_id(parent_id))
            if is_missing(parent):
                logger.info(
                    "comment_rejected",
                    reason="parent_not_found",
                    post_id=post_id,
                    parent_id=parent_id,
                )
                raise ParentCommentNotFoundError
            if parent.post_id != post.id:
                logger.info(
                    "comment_rejected",
                    reason="parent_post_mismatch",
                    post_id=post_id,
                    parent_id=parent_id,
                    parent_post_id=parent.post_id,
                )
                raise ParentPostMismatchError

        comment = await self.comment_repository.create_comment(
            request, author, post, parent
        )
        logger.info(
            "comment_created",
            comment_id=comment.id,
            post_id=post.id,
            author_id=author.id,
            parent_id=comment.parent_id,
        )
        return comment

    async def get_comments_from_post(self, post_id: int) -> list[Comment]:
        """List comments of a post. The post itself is not checked."""
        return await self.comment_repository.get_comments_from_post(post_id)

    async def get_comment(self, comment_id: int) -> Comment | None:
        comment = await self.comment_repository.get_comment(comment_id)
        if is_missing(comment):
            return None
        return comment

    async def delete(self, comment_id: int) -> None:
        """Delete a comment. Replies to it are left in place.

        Raises:
            CommentDoesNotExistError: If no comment has this id
        """
        comment = await self.comment_repository.find(by_id(comment_id))
        if is_missing(comment):
            logger.info("comment_delete_rejected", comment_id=comment_id)
            raise CommentDoesNotExistError

        await self.comment_repository.delete(comment)
        logger.info("comment_deleted", comment_id=comment_id, post_id=comment.post_id)
