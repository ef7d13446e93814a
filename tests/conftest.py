"""Shared fixtures."""

from collections.abc import Iterator
from unittest.mock import AsyncMock, Mock

import pytest
from cassandra.cluster import Session
from fastapi import FastAPI
from fastapi.testclient import TestClient

from postsomething.auth.security import create_access_token
from postsomething.main import app as main_app


@pytest.fixture
def mock_session():
    """Mock Cassandra session (cassandra-asyncio-driver API)."""
    session = Mock(spec=Session)
    session.prepare = Mock(side_effect=lambda query: Mock(query_string=query))
    session.aexecute = AsyncMock()
    return session


@pytest.fixture
def app() -> Iterator[FastAPI]:
    """Application with app.state services cleared after each test."""
    yield main_app
    for name in ("post_repository", "comments_service"):
        if hasattr(main_app.state, name):
            delattr(main_app.state, name)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_auth_headers():
    """Build an Authorization header for a user id and email."""

    def _make(user_id: str, email: str) -> dict[str, str]:
        token = create_access_token(user_id, email)
        return {"Authorization": f"Bearer {token}"}

    return _make
