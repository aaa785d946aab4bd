"""Security utilities for principal passwords.

Provides the password strength policy plus hashing and verification.
Uses bcrypt with automatic salt generation.
"""

import re

import bcrypt

from iam.domain.exceptions import WeakPasswordError

MIN_PASSWORD_LENGTH = 8

# bcrypt only considers the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72

_STRENGTH_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).+$")

# Verified against when an email is unknown, so that sign-in takes the same
# time whether or not the account exists.
_DUMMY_HASH = bcrypt.hashpw(b"brandhouse-timing-equalizer", bcrypt.gensalt()).decode()


def validate_password_strength(password: str) -> None:
    """Check a new principal password against the strength policy.

    Args:
        password: The plaintext password chosen at sign-up

    Raises:
        WeakPasswordError: If the password is too short, too long, or lacks
            an upper-case letter, a lower-case letter or a digit
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise WeakPasswordError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )
    if not _STRENGTH_PATTERN.match(password):
        raise WeakPasswordError(
            "Password must contain an upper-case letter, a lower-case letter and a digit"
        )


def hash_password(password: str) -> str:
    """Hash a principal password using bcrypt.

    Args:
        password: The plaintext password to hash

    Returns:
        The bcrypt hash as a string
    """
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash using constant-time comparison.

    Args:
        password: The plaintext password to verify
        password_hash: The bcrypt hash to verify against

    Returns:
        True if the password matches the hash, False otherwise
    """
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed hash or over-long input
        return False


def burn_verification_time(password: str) -> None:
    """Spend one bcrypt verification without a real hash.

    Called when the account does not exist, so the response time does not
    reveal which emails are registered.
    """
    verify_password(password, _DUMMY_HASH)
