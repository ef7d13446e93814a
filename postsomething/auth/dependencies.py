"""FastAPI dependencies for authentication.

Provides dependency injection for:
- Bearer token extraction
- Current identity resolution from the JWT
- User directory and email sender access
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError

from postsomething.auth.security import decode_access_token
from postsomething.auth.service import AuthService
from postsomething.core.context import set_user_id
from postsomething.email.service import EmailSender


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, resolved once per request."""

    user_id: str
    email: str


def get_token_from_header(request: Request) -> str | None:
    """Extract Bearer token from Authorization header.

    Returns:
        Token string or None if not present
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    expected_parts = 2
    parts = auth_header.split()
    if len(parts) != expected_parts or parts[0].lower() != "bearer":
        return None

    return parts[1]


async def get_current_identity(
    token: Annotated[str | None, Depends(get_token_from_header)],
) -> Identity:
    """Resolve the caller from the access token.

    Raises:
        HTTPException(401): If token is missing, invalid, or expired
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token not provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Set user_id in context for logging
    set_user_id(user_id)

    return Identity(user_id=user_id, email=email)


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


# ==============================================================================
# Service Getters
# ==============================================================================

# Module-level references overridden by main.py
_auth_service_getter: Callable[[], AuthService] | None = None
_email_sender_getter: Callable[[], EmailSender] | None = None


def set_auth_service_getter(getter: Callable[[], AuthService]) -> None:
    """Set the auth service getter function.

    Called by main.py during app initialization.
    """
    global _auth_service_getter  # noqa: PLW0603 - Required for DI pattern
    _auth_service_getter = getter


def get_auth_service() -> AuthService:
    """Get AuthService instance."""
    if _auth_service_getter is None:
        raise RuntimeError(
            "AuthService not configured - call set_auth_service_getter first"
        )
    return _auth_service_getter()


def set_email_sender_getter(getter: Callable[[], EmailSender]) -> None:
    global _email_sender_getter  # noqa: PLW0603 - Required for DI pattern
    _email_sender_getter = getter


def get_email_sender() -> EmailSender:
    if _email_sender_getter is None:
        raise RuntimeError(
            "EmailSender not configured - call set_email_sender_getter first"
        )
    return _email_sender_getter()


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
EmailSenderDep = Annotated[EmailSender, Depends(get_email_sender)]
