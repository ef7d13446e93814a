"""Tests for PostRepository against a mocked Cassandra session."""

import pytest
from fakes import FakeResultSet, PostFactory, as_row

from postsomething.core.query import by_field, by_id
from postsomething.posts.repository import (
    MAX_INSERT_ATTEMPTS,
    PostIdCollisionError,
    PostRepository,
)
from postsomething.posts.schemas import PostRequest


@pytest.fixture
def repository(mock_session) -> PostRepository:
    return PostRepository(session=mock_session, keyspace="test_keyspace")


@pytest.mark.asyncio
async def test_find_by_id(repository, mock_session) -> None:
    stored = PostFactory(id=42)
    mock_session.aexecute.return_value = FakeResultSet([as_row(stored)])

    post = await repository.find(by_id(42))

    assert post == stored
    statement, params = mock_session.aexecute.await_args.args
    assert "FROM test_keyspace.posts WHERE id = ?" in statement.query_string
    assert params == [42]


@pytest.mark.asyncio
async def test_find_absent_returns_none(repository, mock_session) -> None:
    mock_session.aexecute.return_value = FakeResultSet()

    assert await repository.find(by_id(42)) is None


@pytest.mark.asyncio
async def test_find_by_author(repository, mock_session) -> None:
    stored = PostFactory(author_id="a1")
    mock_session.aexecute.return_value = FakeResultSet([as_row(stored)])

    post = await repository.find(by_field("author_id", "a1"))

    assert post.author_id == "a1"


@pytest.mark.asyncio
async def test_find_unsupported_column_raises(repository, mock_session) -> None:
    with pytest.raises(ValueError, match="title"):
        await repository.find(by_field("title", "x"))

    mock_session.aexecute.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_list_newest_first(repository, mock_session) -> None:
    older = PostFactory(id=1)
    newer = PostFactory(id=2)
    mock_session.aexecute.return_value = FakeResultSet([as_row(older), as_row(newer)])

    posts = await repository.get_list()

    assert [p.id for p in posts] == [2, 1]


@pytest.mark.asyncio
async def test_create_post_stores_body_as_description(
    repository, mock_session
) -> None:
    post = await repository.create_post(
        PostRequest(title=" Title ", body="Body"), author_id="a1"
    )

    assert post.title == "Title"
    assert post.description == "Body"
    assert post.author_id == "a1"
    assert post.id > 0
    params = mock_session.aexecute.await_args.args[1]
    assert params[:4] == [post.id, "Title", "Body", "a1"]


@pytest.mark.asyncio
async def test_delete(repository, mock_session) -> None:
    await repository.delete(PostFactory(id=42))

    assert mock_session.aexecute.await_args.args[1] == [42]


class TestConditionalInsert:
    @pytest.mark.asyncio
    async def test_insert_never_overwrites(self, repository, mock_session) -> None:
        await repository.create_post(PostRequest(title="t", body="b"), author_id="a1")

        statement = mock_session.aexecute.await_args.args[0]
        assert "IF NOT EXISTS" in statement.query_string

    @pytest.mark.asyncio
    async def test_taken_id_is_retried_with_fresh_id(
        self, repository, mock_session
    ) -> None:
        mock_session.aexecute.side_effect = [
            FakeResultSet(was_applied=False),
            FakeResultSet(was_applied=True),
        ]

        post = await repository.create_post(
            PostRequest(title="t", body="b"), author_id="a1"
        )

        first, second = mock_session.aexecute.await_args_list
        assert first.args[1][0] != second.args[1][0]
        assert post.id == second.args[1][0]

    @pytest.mark.asyncio
    async def test_gives_up_after_repeated_collisions(
        self, repository, mock_session
    ) -> None:
        mock_session.aexecute.return_value = FakeResultSet(was_applied=False)

        with pytest.raises(PostIdCollisionError):
            await repository.create_post(
                PostRequest(title="t", body="b"), author_id="a1"
            )

        assert mock_session.aexecute.await_count == MAX_INSERT_ATTEMPTS
