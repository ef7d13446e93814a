"""Tests for CommentsService.

Covers:
- create_comment_from_post (post, author and parent checks, ordering)
- get_comments_from_post
- get_comment
- delete
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fakes import CommentFactory, PostFactory, UserFactory

from postsomething.auth.models import User
from postsomething.auth.service import UserNotFoundError
from postsomething.comments.models import Comment
from postsomething.comments.schemas import CommentRequest
from postsomething.comments.service import (
    CommentDoesNotExistError,
    CommentsService,
    ParentCommentNotFoundError,
    ParentPostMismatchError,
)
from postsomething.core.exceptions import ErrorKind
from postsomething.core.query import Filter
from postsomething.posts.models import Post
from postsomething.posts.repository import PostNotFoundError


@pytest.fixture
def post() -> Post:
    return PostFactory(id=42)


@pytest.fixture
def author() -> User:
    return UserFactory(id="u1")


@pytest.fixture
def comment_repository():
    repository = Mock()
    repository.find = AsyncMock(return_value=None)
    repository.get_comment = AsyncMock(return_value=None)
    repository.get_comments_from_post = AsyncMock(return_value=[])
    repository.delete = AsyncMock()

    async def _create(request, author, post, parent=None):
        return CommentFactory(
            content=request.content,
            author_id=author.id,
            post_id=post.id,
            parent_id=parent.id if parent else None,
        )

    repository.create_comment = AsyncMock(side_effect=_create)
    return repository


@pytest.fixture
def post_repository(post):
    repository = Mock()
    repository.find = AsyncMock(return_value=post)
    return repository


@pytest.fixture
def user_directory(author):
    directory = Mock()
    directory.get_user_by_id = AsyncMock(return_value=author)
    return directory


@pytest.fixture
def service(comment_repository, post_repository, user_directory) -> CommentsService:
    return CommentsService(
        comment_repository=comment_repository,
        post_repository=post_repository,
        user_directory=user_directory,
    )


@pytest.fixture
def request_body() -> CommentRequest:
    return CommentRequest(content="hello")


# ==============================================================================
# create_comment_from_post
# ==============================================================================


class TestCreateCommentFromPost:
    @pytest.mark.asyncio
    async def test_creates_top_level_comment(
        self, service, request_body, comment_repository, post, author
    ) -> None:
        comment = await service.create_comment_from_post(42, request_body, "u1")

        assert comment.post_id == 42
        assert comment.author_id == "u1"
        assert comment.parent_id is None
        assert comment.content == "hello"
        comment_repository.create_comment.assert_awaited_once_with(
            request_body, author, post, None
        )

    @pytest.mark.asyncio
    async def test_looks_up_post_and_author_by_id(
        self, service, request_body, post_repository, user_directory
    ) -> None:
        await service.create_comment_from_post(42, request_body, "u1")

        post_repository.find.assert_awaited_once_with(Filter("id", 42))
        user_directory.get_user_by_id.assert_awaited_once_with("u1")

    @pytest.mark.asyncio
    async def test_creates_reply_on_same_post(
        self, service, request_body, comment_repository, post, author
    ) -> None:
        parent = CommentFactory(id=7, post_id=42)
        comment_repository.find.return_value = parent

        comment = await service.create_comment_from_post(
            42, request_body, "u1", parent_id=7
        )

        assert comment.parent_id == 7
        assert comment.post_id == 42
        comment_repository.find.assert_awaited_once_with(Filter("id", 7))
        comment_repository.create_comment.assert_awaited_once_with(
            request_body, author, post, parent
        )

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found_without_write(
        self, service, request_body, post_repository, user_directory, comment_repository
    ) -> None:
        post_repository.find.return_value = None

        with pytest.raises(PostNotFoundError) as exc_info:
            await service.create_comment_from_post(99, request_body, "u1")

        assert exc_info.value.kind == ErrorKind.NOT_FOUND
        user_directory.get_user_by_id.assert_not_awaited()
        comment_repository.create_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_placeholder_post_counts_as_missing(
        self, service, request_body, post_repository, comment_repository
    ) -> None:
        post_repository.find.return_value = Mock(spec=Post, id=None)

        with pytest.raises(PostNotFoundError):
            await service.create_comment_from_post(42, request_body, "u1")

        comment_repository.create_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_author_raises_not_found_without_write(
        self, service, request_body, user_directory, comment_repository
    ) -> None:
        user_directory.get_user_by_id.return_value = None

        with pytest.raises(UserNotFoundError) as exc_info:
            await service.create_comment_from_post(42, request_body, "ghost")

        assert exc_info.value.kind == ErrorKind.NOT_FOUND
        comment_repository.find.assert_not_awaited()
        comment_repository.create_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_parent_raises_validation_error(
        self, service, request_body, comment_repository
    ) -> None:
        comment_repository.find.return_value = None

        with pytest.raises(ParentCommentNotFoundError) as exc_info:
            await service.create_comment_from_post(
                42, request_body, "u1", parent_id=1000
            )

        assert exc_info.value.kind == ErrorKind.VALIDATION
        comment_repository.create_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_parent_on_other_post_raises_conflict(
        self, service, request_body, comment_repository, post_repository
    ) -> None:
        post_repository.find.return_value = PostFactory(id=2)
        comment_repository.find.return_value = CommentFactory(id=7, post_id=1)

        with pytest.raises(ParentPostMismatchError) as exc_info:
            await service.create_comment_from_post(2, request_body, "u1", parent_id=7)

        assert exc_info.value.kind == ErrorKind.CONFLICT
        comment_repository.create_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_parent_id_is_looked_up(
        self, service, request_body, comment_repository
    ) -> None:
        comment_repository.find.return_value = CommentFactory(id=0, post_id=42)

        comment = await service.create_comment_from_post(
            42, request_body, "u1", parent_id=0
        )

        assert comment.parent_id == 0
        comment_repository.find.assert_awaited_once_with(Filter("id", 0))

    @pytest.mark.asyncio
    async def test_lookups_run_in_order(
        self, service, request_body, post_repository, user_directory, comment_repository
    ) -> None:
        calls: list[str] = []

        def recording(name, result):
            def _record(*_args):
                calls.append(name)
                return result

            return _record

        post_repository.find.side_effect = recording("post", PostFactory(id=42))
        user_directory.get_user_by_id.side_effect = recording(
            "user", UserFactory(id="u1")
        )
        comment_repository.find.side_effect = recording(
            "parent", CommentFactory(id=7, post_id=42)
        )
        original_create = comment_repository.create_comment.side_effect

        async def _create(*args):
            calls.append("write")
            return await original_create(*args)

        comment_repository.create_comment.side_effect = _create

        await service.create_comment_from_post(42, request_body, "u1", parent_id=7)

        assert calls == ["post", "user", "parent", "write"]


# ==============================================================================
# Reads
# ==============================================================================


class TestReads:
    @pytest.mark.asyncio
    async def test_get_comments_from_post_delegates(
        self, service, comment_repository, post_repository
    ) -> None:
        comments = CommentFactory.build_batch(3, post_id=42)
        comment_repository.get_comments_from_post.return_value = comments

        result = await service.get_comments_from_post(42)

        assert result == comments
        comment_repository.get_comments_from_post.assert_awaited_once_with(42)
        post_repository.find.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_comments_from_post_empty(self, service) -> None:
        assert await service.get_comments_from_post(12345) == []

    @pytest.mark.asyncio
    async def test_get_comment_returns_comment(
        self, service, comment_repository
    ) -> None:
        comment = CommentFactory(id=5)
        comment_repository.get_comment.return_value = comment

        assert await service.get_comment(5) is comment

    @pytest.mark.asyncio
    async def test_get_comment_absent_is_none(self, service) -> None:
        assert await service.get_comment(5) is None

    @pytest.mark.asyncio
    async def test_get_comment_placeholder_is_none(
        self, service, comment_repository
    ) -> None:
        comment_repository.get_comment.return_value = Mock(spec=Comment, id=None)

        assert await service.get_comment(5) is None


# ==============================================================================
# delete
# ==============================================================================


class TestDelete:
    @pytest.mark.asyncio
    async def test_deletes_existing_comment(self, service, comment_repository) -> None:
        comment = CommentFactory(id=9)
        comment_repository.find.return_value = comment

        await service.delete(9)

        comment_repository.find.assert_awaited_once_with(Filter("id", 9))
        comment_repository.delete.assert_awaited_once_with(comment)

    @pytest.mark.asyncio
    async def test_missing_comment_raises_without_delete(
        self, service, comment_repository
    ) -> None:
        with pytest.raises(CommentDoesNotExistError) as exc_info:
            await service.delete(9)

        assert exc_info.value.kind == ErrorKind.VALIDATION
        comment_repository.delete.assert_not_awaited()
