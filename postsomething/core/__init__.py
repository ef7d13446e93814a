# Core infrastructure
from postsomething.core.context import (
    clear_context,
    get_context,
    get_request_id,
    get_user_id,
    set_request_id,
    set_user_id,
)
from postsomething.core.exceptions import (
    AppError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    UnprocessableError,
    ValidationError,
    to_http_exception,
)
from postsomething.core.logging import configure_structlog, get_logger
from postsomething.core.middleware import RequestContextMiddleware


__all__ = [
    "AppError",
    "ConflictError",
    "NotFoundError",
    "RequestContextMiddleware",
    "UnauthorizedError",
    "UnprocessableError",
    "ValidationError",
    "clear_context",
    "configure_structlog",
    "get_context",
    "get_logger",
    "get_request_id",
    "get_user_id",
    "set_request_id",
    "set_user_id",
    "to_http_exception",
]
