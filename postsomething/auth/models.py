"""Database models for the user directory.

Uses cassandra-driver directly (not an ORM). Tables are created from the
CQL statements below when the application starts.
"""

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4


USER_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.users (
    id TEXT PRIMARY KEY,
    username TEXT,
    email TEXT,
    password_hash TEXT,
    email_confirmed BOOLEAN,
    address TEXT,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
)
"""

USER_EMAIL_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS users_email_idx ON {keyspace}.users (email)
"""

USER_USERNAME_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS users_username_idx ON {keyspace}.users (username)
"""

AUTH_TABLES_CQL = [
    USER_TABLE_CQL,
    USER_EMAIL_INDEX_CQL,
    USER_USERNAME_INDEX_CQL,
]


def ensure_utc_aware(dt: datetime | None) -> datetime | None:
    """Ensure datetime is UTC-aware (Cassandra returns naive datetimes)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


class User:
    """Registered account.

    Attributes:
        id: Unique identifier (UUID string)
        username: Public display name, unique
        email: Unique email address, stored lower-cased
        password_hash: Argon2id hash
        email_confirmed: Whether the confirmation link was followed
        address: Optional postal address
        created_at: Account creation timestamp
        updated_at: Last update timestamp
    """

    def __init__(
        self,
        id: str | None = None,
        username: str = "",
        email: str = "",
        password_hash: str = "",
        email_confirmed: bool = False,
        address: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self.id = str(uuid4()) if id is None else id
        self.username = username.strip()
        self.email = email.lower().strip()
        self.password_hash = password_hash
        self.email_confirmed = email_confirmed
        self.address = address
        self.created_at = ensure_utc_aware(created_at) or datetime.now(UTC)
        self.updated_at = ensure_utc_aware(updated_at)

    @classmethod
    def from_row(cls, row: Any) -> "User":
        """Create User instance from Cassandra row."""
        return cls(
            id=row.id,
            username=row.username or "",
            email=row.email or "",
            password_hash=row.password_hash or "",
            email_confirmed=bool(row.email_confirmed),
            address=getattr(row, "address", None),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def to_dict(self, include_password: bool = False) -> dict[str, Any]:
        """Convert to dictionary (excludes password_hash by default)."""
        data = {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "email_confirmed": self.email_confirmed,
            "address": self.address,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if include_password:
            data["password_hash"] = self.password_hash
        return data

    def __repr__(self) -> str:
        return f"<User {self.email}>"
