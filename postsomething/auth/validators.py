"""Validation rules applied by the user directory when creating accounts.

Each rule returns a ``ValidationResult`` instead of raising, so the
directory can report every failing rule at once.
"""

import re
from typing import NamedTuple


PASSWORD_MIN_LENGTH = 8
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 32

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


class ValidationResult(NamedTuple):
    """Result of a validation check."""

    valid: bool
    code: str | None = None
    message: str | None = None


def validate_password(password: str) -> list[ValidationResult]:
    """Check password strength.

    Requirements:
    - Minimum 8 characters
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one non-alphanumeric character

    Returns:
        One failed ValidationResult per unmet requirement (empty when valid)

    Examples:
        >>> validate_password("P@ssw0rd")
        []
        >>> [r.code for r in validate_password("password")]
        ['PasswordRequiresUpper', 'PasswordRequiresDigit', 'PasswordRequiresNonAlphanumeric']
    """
    failures: list[ValidationResult] = []

    if len(password) < PASSWORD_MIN_LENGTH:
        failures.append(
            ValidationResult(
                False,
                "PasswordTooShort",
                f"Passwords must be at least {PASSWORD_MIN_LENGTH} characters.",
            )
        )
    if not re.search(r"[A-Z]", password):
        failures.append(
            ValidationResult(
                False,
                "PasswordRequiresUpper",
                "Passwords must have at least one uppercase ('A'-'Z').",
            )
        )
    if not re.search(r"[a-z]", password):
        failures.append(
            ValidationResult(
                False,
                "PasswordRequiresLower",
                "Passwords must have at least one lowercase ('a'-'z').",
            )
        )
    if not re.search(r"\d", password):
        failures.append(
            ValidationResult(
                False,
                "PasswordRequiresDigit",
                "Passwords must have at least one digit ('0'-'9').",
            )
        )
    if not re.search(r"[^A-Za-z0-9]", password):
        failures.append(
            ValidationResult(
                False,
                "PasswordRequiresNonAlphanumeric",
                "Passwords must have at least one non alphanumeric character.",
            )
        )

    return failures


def validate_username(username: str) -> ValidationResult:
    """Check that a username is 3-32 characters of letters, digits, ``._-``."""
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return ValidationResult(
            False,
            "InvalidUserName",
            f"Username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters.",
        )
    if not USERNAME_PATTERN.match(username):
        return ValidationResult(
            False,
            "InvalidUserName",
            f"Username '{username}' is invalid, can only contain letters, digits, "
            "'.', '_' or '-'.",
        )
    return ValidationResult(True)
