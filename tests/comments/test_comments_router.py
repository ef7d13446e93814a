"""Tests for comment endpoints."""

from unittest.mock import AsyncMock, Mock

import pytest
from fakes import CommentFactory
from fastapi.testclient import TestClient

from postsomething.auth.service import UserNotFoundError
from postsomething.comments.repository import CommentIdCollisionError
from postsomething.comments.schemas import CommentRequest
from postsomething.comments.service import (
    CommentDoesNotExistError,
    ParentCommentNotFoundError,
    ParentPostMismatchError,
)
from postsomething.core.ids import BIGINT_MAX
from postsomething.posts.repository import PostNotFoundError


@pytest.fixture
def mock_comments_service():
    service = Mock()
    service.get_comments_from_post = AsyncMock(return_value=[])
    service.get_comment = AsyncMock(return_value=None)
    service.create_comment_from_post = AsyncMock()
    service.delete = AsyncMock()
    return service


@pytest.fixture
def comments_client(app, mock_comments_service) -> TestClient:
    app.state.comments_service = mock_comments_service
    return TestClient(app)


@pytest.fixture
def auth_headers(make_auth_headers) -> dict[str, str]:
    return make_auth_headers("u1", "u1@example.com")


class TestListComments:
    def test_lists_comments_of_post(
        self, comments_client, mock_comments_service
    ) -> None:
        mock_comments_service.get_comments_from_post.return_value = (
            CommentFactory.build_batch(2, post_id=42)
        )

        response = comments_client.get("/posts/42/comments")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        assert {c["post_id"] for c in data} == {42}
        mock_comments_service.get_comments_from_post.assert_awaited_once_with(42)

    def test_empty_list(self, comments_client) -> None:
        response = comments_client.get("/posts/42/comments")

        assert response.status_code == 200
        assert response.json() == []


class TestGetComment:
    def test_returns_comment(self, comments_client, mock_comments_service) -> None:
        mock_comments_service.get_comment.return_value = CommentFactory(
            id=5, content="hi"
        )

        response = comments_client.get("/comments/5")

        assert response.status_code == 200
        assert response.json()["id"] == 5
        assert response.json()["content"] == "hi"

    def test_absent_comment_is_404(self, comments_client) -> None:
        response = comments_client.get("/comments/5")

        assert response.status_code == 404
        assert response.json()["error"] is True

    def test_id_outside_bigint_range_is_422(
        self, comments_client, mock_comments_service
    ) -> None:
        response = comments_client.get(f"/comments/{BIGINT_MAX + 1}")

        assert response.status_code == 422
        mock_comments_service.get_comment.assert_not_awaited()


class TestCreateComment:
    def test_creates_comment_as_current_user(
        self, comments_client, mock_comments_service, auth_headers
    ) -> None:
        mock_comments_service.create_comment_from_post.return_value = CommentFactory(
            id=10, post_id=42, author_id="u1", content="hello"
        )

        response = comments_client.post(
            "/posts/42/comments", json={"content": "hello"}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["author_id"] == "u1"
        mock_comments_service.create_comment_from_post.assert_awaited_once_with(
            42, CommentRequest(content="hello"), "u1", None
        )

    def test_passes_parent_id(
        self, comments_client, mock_comments_service, auth_headers
    ) -> None:
        mock_comments_service.create_comment_from_post.return_value = CommentFactory(
            post_id=42, parent_id=7
        )

        response = comments_client.post(
            "/posts/42/comments",
            json={"content": "reply", "parent_id": 7},
            headers=auth_headers,
        )

        assert response.status_code == 201
        args = mock_comments_service.create_comment_from_post.await_args.args
        assert args[3] == 7

    def test_requires_authentication(
        self, comments_client, mock_comments_service
    ) -> None:
        response = comments_client.post("/posts/42/comments", json={"content": "x"})

        assert response.status_code == 401
        mock_comments_service.create_comment_from_post.assert_not_awaited()

    def test_parent_id_outside_bigint_range_is_422(
        self, comments_client, mock_comments_service, auth_headers
    ) -> None:
        response = comments_client.post(
            "/posts/42/comments",
            json={"content": "hello", "parent_id": BIGINT_MAX + 1},
            headers=auth_headers,
        )

        assert response.status_code == 422
        mock_comments_service.create_comment_from_post.assert_not_awaited()

    def test_blank_content_is_rejected(self, comments_client, auth_headers) -> None:
        response = comments_client.post(
            "/posts/42/comments", json={"content": "   "}, headers=auth_headers
        )

        assert response.status_code == 422

    @pytest.mark.parametrize(
        ("error", "expected_status"),
        [
            (PostNotFoundError(), 404),
            (UserNotFoundError(), 404),
            (ParentCommentNotFoundError(), 400),
            (ParentPostMismatchError(), 409),
            (CommentIdCollisionError(), 409),
        ],
    )
    def test_workflow_errors_map_to_status(
        self,
        comments_client,
        mock_comments_service,
        auth_headers,
        error,
        expected_status,
    ) -> None:
        mock_comments_service.create_comment_from_post.side_effect = error

        response = comments_client.post(
            "/posts/42/comments",
            json={"content": "hello", "parent_id": 7},
            headers=auth_headers,
        )

        assert response.status_code == expected_status
        assert response.json()["message"] == error.message


class TestDeleteComment:
    def test_deletes_comment(
        self, comments_client, mock_comments_service, auth_headers
    ) -> None:
        response = comments_client.delete("/comments/9", headers=auth_headers)

        assert response.status_code == 204
        mock_comments_service.delete.assert_awaited_once_with(9)

    def test_missing_comment_is_400(
        self, comments_client, mock_comments_service, auth_headers
    ) -> None:
        mock_comments_service.delete.side_effect = CommentDoesNotExistError()

        response = comments_client.delete("/comments/9", headers=auth_headers)

        assert response.status_code == 400

    def test_requires_authentication(
        self, comments_client, mock_comments_service
    ) -> None:
        response = comments_client.delete("/comments/9")

        assert response.status_code == 401
        mock_comments_service.delete.assert_not_awaited()
