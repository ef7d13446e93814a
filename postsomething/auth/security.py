"""Security utilities for authentication.

Provides:
- Password hashing with Argon2id
- JWT access tokens for API authentication
- JWT email confirmation tokens bound to a user id and email
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import JWTError, jwt

from postsomething.config.settings import get_settings


ACCESS_TOKEN_TYPE = "access"
EMAIL_CONFIRMATION_TOKEN_TYPE = "email_confirmation"  # noqa: S105

# Argon2id with OWASP recommended parameters
_password_hasher = PasswordHasher(
    time_cost=2,
    memory_cost=19456,
    parallelism=1,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Example:
        >>> hash_password("P@ssw0rd").startswith("$argon2id$")
        True
    """
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> tuple[bool, str | None]:
    """Verify a password against its hash.

    Returns:
        Tuple of (is_valid, new_hash); new_hash is set when the stored hash
        was produced with outdated parameters and should be replaced.
    """
    try:
        _password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False, None

    if _password_hasher.check_needs_rehash(password_hash):
        return True, hash_password(password)
    return True, None


def _encode(claims: dict[str, Any], token_type: str, lifetime: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(UTC)

    to_encode = claims.copy()
    to_encode.update(
        {
            "exp": now + lifetime,
            "iat": now,
            "iss": settings.auth_issuer,
            "aud": settings.auth_audience,
            "type": token_type,
        }
    )
    return jwt.encode(
        to_encode,
        settings.auth_secret_key,
        algorithm=settings.auth_algorithm,
    )


def _decode(token: str, token_type: str) -> dict[str, Any]:
    settings = get_settings()

    payload = jwt.decode(
        token,
        settings.auth_secret_key,
        algorithms=[settings.auth_algorithm],
        audience=settings.auth_audience,
        issuer=settings.auth_issuer,
    )
    if payload.get("type") != token_type:
        msg = f"Invalid token type: expected '{token_type}'"
        raise JWTError(msg)
    return payload


def create_access_token(
    user_id: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token.

    Claims: ``sub`` (user id), ``email``, ``exp``, ``iat``, ``iss``, ``aud``
    and ``type`` = "access".
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(
        minutes=settings.auth_access_token_expire_minutes
    )
    return _encode({"sub": user_id, "email": email}, ACCESS_TOKEN_TYPE, lifetime)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate an access token.

    Raises:
        JWTError: If token is invalid, expired, or not an access token
    """
    return _decode(token, ACCESS_TOKEN_TYPE)


def create_email_confirmation_token(
    user_id: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a token proving ownership of ``email`` for ``user_id``."""
    settings = get_settings()
    lifetime = expires_delta or timedelta(hours=settings.auth_email_token_expire_hours)
    return _encode(
        {"sub": user_id, "email": email}, EMAIL_CONFIRMATION_TOKEN_TYPE, lifetime
    )


def decode_email_confirmation_token(token: str) -> dict[str, Any]:
    """Decode and validate an email confirmation token.

    Raises:
        JWTError: If token is invalid, expired, or of another type
    """
    return _decode(token, EMAIL_CONFIRMATION_TOKEN_TYPE)
