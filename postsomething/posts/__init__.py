"""Posts module.

Note: Router is not exported here to avoid circular imports.
Import directly from postsomething.posts.router when needed.
"""

from .models import POSTS_TABLES_CQL, Post
from .repository import PostNotFoundError, PostRepository


__all__ = ["POSTS_TABLES_CQL", "Post", "PostNotFoundError", "PostRepository"]
