"""User directory service.

Business logic for:
- Account creation with password policy and uniqueness checks
- Credential verification
- Email confirmation tokens
- User lookups by id and email
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog
from jose import JWTError

from postsomething.auth.models import User
from postsomething.auth.security import (
    create_email_confirmation_token,
    decode_email_confirmation_token,
    hash_password,
    verify_password,
)
from postsomething.auth.validators import validate_password, validate_username
from postsomething.core.exceptions import (
    NotFoundError,
    UnauthorizedError,
    UnprocessableError,
    ValidationError,
)


if TYPE_CHECKING:
    from cassandra.cluster import Session


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


@dataclass(frozen=True)
class IdentityIssue:
    """One reason a user directory operation failed."""

    code: str
    description: str


class IdentityOperationError(UnprocessableError):
    """Account creation rejected by the directory rules."""

    def __init__(self, issues: list[IdentityIssue]):
        super().__init__("User could not be created", "identity_operation_failed")
        self.issues = issues

    def extra(self) -> dict[str, Any]:
        return {
            "errors": [
                {"code": issue.code, "description": issue.description}
                for issue in self.issues
            ]
        }


class PasswordsMismatchError(ValidationError):
    """Password and confirmation password differ."""

    def __init__(self, message: str = "The password must match the one above"):
        super().__init__(message, "PasswordsMismatch")

    def extra(self) -> dict[str, Any]:
        return {"field": "confirmation_password"}


class InvalidCredentialsError(UnauthorizedError):
    """Unknown email, wrong password or unconfirmed account."""

    def __init__(self, message: str = "Wrong credentials."):
        super().__init__(message, "invalid_credentials")


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, "user_not_found")


class InvalidConfirmationTokenError(ValidationError):
    """Email confirmation token rejected."""

    def __init__(self, message: str = "Invalid or expired confirmation token"):
        super().__init__(message, "invalid_confirmation_token")


# ==============================================================================
# Auth Service
# ==============================================================================


class AuthService:
    """User directory backed by the ``users`` table."""

    def __init__(self, session: "Session", keyspace: str):
        """Initialize with Cassandra session.

        Args:
            session: Cassandra driver session (with aexecute)
            keyspace: Keyspace name for queries
        """
        self.session = session
        self.keyspace = keyspace
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        """Prepare CQL statements for better performance."""
        self._get_user_by_id = self.session.prepare(
            f"SELECT * FROM {self.keyspace}.users WHERE id = ?"
        )
        self._get_user_by_email = self.session.prepare(
            f"SELECT * FROM {self.keyspace}.users WHERE email = ?"
        )
        self._get_user_by_username = self.session.prepare(
            f"SELECT * FROM {self.keyspace}.users WHERE username = ?"
        )
        self._insert_user = self.session.prepare(f"""
            INSERT INTO {self.keyspace}.users
            (id, username, email, password_hash, email_confirmed, address,
             created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """)
        self._update_password = self.session.prepare(f"""
            UPDATE {self.keyspace}.users
            SET password_hash = ?, updated_at = ?
            WHERE id = ?
        """)
        self._confirm_email = self.session.prepare(f"""
            UPDATE {self.keyspace}.users
            SET email_confirmed = true, updated_at = ?
            WHERE id = ?
        """)

    async def _fetch_one(self, statement: Any, params: list[Any]) -> User | None:
        result = await self.session.aexecute(statement, params)
        row = result.one()
        return User.from_row(row) if row else None

    # ==========================================================================
    # Lookups
    # ==========================================================================

    async def get_user_by_id(self, user_id: str) -> User | None:
        """Find user by ID."""
        return await self._fetch_one(self._get_user_by_id, [user_id])

    async def get_user_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive)."""
        return await self._fetch_one(self._get_user_by_email, [email.lower().strip()])

    async def get_user_by_username(self, username: str) -> User | None:
        return await self._fetch_one(self._get_user_by_username, [username])

    # ==========================================================================
    # Account Operations
    # ==========================================================================

    async def create_user(self, user: User, password: str) -> User:
        """Validate and store a new account.

        Every failing rule is reported, not only the first one.

        Raises:
            IdentityOperationError: If the password is weak, the username is
                invalid, or the email/username is already taken
        """
        issues = [
            IdentityIssue(result.code, result.message)
            for result in validate_password(password)
        ]

        username_result = validate_username(user.username)
        if not username_result.valid:
            issues.append(
                IdentityIssue(username_result.code, username_result.message)
            )
        elif await self.get_user_by_username(user.username):
            issues.append(
                IdentityIssue(
                    "DuplicateUserName",
                    f"Username '{user.username}' is already taken.",
                )
            )

        if await self.get_user_by_email(user.email):
            issues.append(
                IdentityIssue(
                    "DuplicateEmail", f"Email '{user.email}' is already taken."
                )
            )

        if issues:
            logger.info(
                "user_creation_rejected",
                email=user.email,
                codes=[issue.code for issue in issues],
            )
            raise IdentityOperationError(issues)

        user.password_hash = hash_password(password)
        await self.session.aexecute(
            self._insert_user,
            [
                user.id,
                user.username,
                user.email,
                user.password_hash,
                user.email_confirmed,
                user.address,
                user.created_at,
                user.updated_at,
            ],
        )
        logger.info("user_created", user_id=user.id, email=user.email)
        return user

    async def check_password(self, user: User, password: str) -> bool:
        """Verify a password, upgrading the stored hash when needed."""
        is_valid, new_hash = verify_password(password, user.password_hash)
        if not is_valid:
            return False

        if new_hash:
            await self.session.aexecute(
                self._update_password,
                [new_hash, datetime.now(UTC), user.id],
            )
            user.password_hash = new_hash

        return True

    async def generate_email_confirmation_token(self, user: User) -> str:
        return create_email_confirmation_token(user.id, user.email)

    async def confirm_email(self, user: User, token: str) -> bool:
        """Mark the user's email as confirmed if the token matches.

        Returns:
            True when the token was issued for this user and email
        """
        try:
            payload = decode_email_confirmation_token(token)
        except JWTError:
            logger.info("email_confirmation_rejected", user_id=user.id)
            return False

        if payload.get("sub") != user.id or payload.get("email") != user.email:
            logger.info("email_confirmation_rejected", user_id=user.id)
            return False

        await self.session.aexecute(
            self._confirm_email,
            [datetime.now(UTC), user.id],
        )
        user.email_confirmed = True
        logger.info("email_confirmed", user_id=user.id)
        return True
