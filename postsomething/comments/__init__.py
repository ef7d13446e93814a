"""Comment system module.

Provides threaded comments on posts (parent/child replies).

Note: Router is not exported here to avoid circular imports.
Import directly from postsomething.comments.router when needed.
"""

from .models import COMMENTS_TABLES_CQL, Comment
from .repository import CommentRepository
from .service import (
    CommentDoesNotExistError,
    CommentsService,
    ParentCommentNotFoundError,
    ParentPostMismatchError,
)


__all__ = [
    "COMMENTS_TABLES_CQL",
    "Comment",
    "CommentDoesNotExistError",
    "CommentRepository",
    "CommentsService",
    "ParentCommentNotFoundError",
    "ParentPostMismatchError",
]
