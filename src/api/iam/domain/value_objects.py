"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID

from iam.domain.exceptions import InvalidEmailError

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class PrincipalId:
    """Identifier for a Principal aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> PrincipalId:
        """Generate a new PrincipalId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> PrincipalId:
        """Create PrincipalId from string value.

        Args:
            value: ULID string

        Returns:
            PrincipalId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid PrincipalId: {value}") from e

        return cls(value=value)


class PrincipalRole(StrEnum):
    """System-level roles held by a principal.

    SuperAdmin may manage every brand; User manages only the brands it owns.
    """

    SUPER_ADMIN = "SuperAdmin"
    USER = "User"


@dataclass(frozen=True)
class EmailAddress:
    """A normalized (trimmed, lower-cased) email address."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def parse(cls, raw: str) -> EmailAddress:
        """Normalize and validate an email address.

        Raises:
            InvalidEmailError: If the address is empty or malformed
        """
        normalized = (raw or "").strip().lower()
        if len(normalized) > 255 or not _EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError("Invalid email address")
        return cls(value=normalized)
