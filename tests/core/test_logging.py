"""Tests for structlog processors and request context."""

from postsomething.core.context import (
    clear_context,
    get_context,
    set_request_id,
    set_user_id,
)
from postsomething.core.logging import add_context_processor, filter_sensitive_data


def test_sensitive_values_are_masked() -> None:
    event = filter_sensitive_data(
        None,
        "info",
        {"event": "login", "password": "P@ssw0rd1", "access_token": "abc", "ok": "x"},
    )

    assert event["password"] == "P@*****d1"
    assert event["access_token"] == "***"
    assert event["ok"] == "x"


def test_nested_dicts_are_masked() -> None:
    event = filter_sensitive_data(None, "info", {"body": {"secret": "hunter22"}})

    assert event["body"]["secret"] != "hunter22"


def test_context_is_added_and_cleared() -> None:
    set_request_id("req-1")
    set_user_id("u1")

    event = add_context_processor(None, "info", {"event": "x"})
    assert event["request_id"] == "req-1"
    assert event["user_id"] == "u1"

    clear_context()
    assert get_context() == {}
