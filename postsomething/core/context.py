"""Per-request context stored in contextvars.

Every request gets a request id; authenticated requests also carry the
user id. Both are merged into log events by the structlog processors.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4


request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_request_id() -> str:
    """Get the current request ID."""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """Set the request ID, generating one when not provided.

    Returns:
        The request ID that was set.
    """
    rid = request_id or str(uuid4())
    request_id_var.set(rid)
    return rid


def get_user_id() -> str | None:
    """Get the authenticated user ID for the current request."""
    return user_id_var.get()


def set_user_id(user_id: str | None) -> None:
    """Bind the authenticated user ID to the current request."""
    user_id_var.set(str(user_id) if user_id is not None else None)


def get_correlation_id() -> str | None:
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None) -> None:
    correlation_id_var.set(correlation_id)


def get_context() -> dict[str, Any]:
    """Get the non-empty context values as a dictionary."""
    values = {
        "request_id": get_request_id(),
        "user_id": get_user_id(),
        "correlation_id": get_correlation_id(),
    }
    return {key: value for key, value in values.items() if value}


def clear_context() -> None:
    """Reset all context variables at the end of a request."""
    request_id_var.set("")
    user_id_var.set(None)
    correlation_id_var.set(None)
