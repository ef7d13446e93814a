"""Error taxonomy shared by services and routers.

Services raise ``AppError`` subclasses; routers convert them with
``to_http_exception`` so each kind maps to one HTTP status.
"""

from enum import Enum
from typing import Any

from fastapi import HTTPException, status


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    UNPROCESSABLE = "unprocessable"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNPROCESSABLE: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class AppError(Exception):
    """Base application error."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str, code: str = "app_error"):
        self.message = message
        self.code = code
        super().__init__(message)

    def extra(self) -> dict[str, Any]:
        """Additional fields to include in the error response."""
        return {}


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT


class UnauthorizedError(AppError):
    kind = ErrorKind.UNAUTHORIZED


class UnprocessableError(AppError):
    kind = ErrorKind.UNPROCESSABLE


def to_http_exception(error: AppError) -> HTTPException:
    """Convert an AppError to an HTTPException.

    The detail is the plain message unless the error carries extra fields,
    in which case it is a dict with ``message``, ``code`` and those fields.
    """
    extra = error.extra()
    detail: str | dict[str, Any] = error.message
    if extra:
        detail = {"message": error.message, "code": error.code, **extra}

    return HTTPException(
        status_code=STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST),
        detail=detail,
    )
