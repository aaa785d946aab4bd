"""Value objects for the brands domain.

A brand's schema and database role names derive from its UUID, never from
its display name, so two brands may share a name but never a namespace.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from enum import StrEnum

from brands.domain.exceptions import InvalidBrandNameError, InvalidEntryError

SCHEMA_PREFIX = "brand_"
DATABASE_USER_PREFIX = "brand_user_"

# Info key holding the brand's display name
BRAND_NAME_INFO_KEY = "Brand Name"

DEFAULT_NAME_MAX_LENGTH = 100
ENTRY_KEY_MAX_LENGTH = 255
ENTRY_VALUE_MAX_LENGTH = 10_000

_NAME_PATTERN = re.compile(r"^[\w .,&'()\-]+$")


@dataclass(frozen=True)
class BrandId:
    """Identifier for a Brand aggregate.

    Uses UUID4 so that derived schema names are unpredictable and never
    reused.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> BrandId:
        """Generate a new BrandId."""
        return cls(value=str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str) -> BrandId:
        """Create BrandId from string value.

        Args:
            value: UUID string

        Returns:
            BrandId instance in canonical lower-case form

        Raises:
            ValueError: If value is not a valid UUID
        """
        try:
            parsed = uuid.UUID(value)
        except (ValueError, AttributeError, TypeError) as e:
            raise ValueError(f"Invalid BrandId: {value}") from e

        return cls(value=str(parsed))

    @property
    def schema_name(self) -> str:
        """Schema (namespace) holding this brand's tables."""
        return f"{SCHEMA_PREFIX}{uuid.UUID(self.value).hex}"

    @property
    def database_user(self) -> str:
        """Login role scoped to this brand's schema."""
        return f"{DATABASE_USER_PREFIX}{uuid.UUID(self.value).hex}"

    @property
    def confirmation_phrase(self) -> str:
        """Phrase a caller must echo to delete this brand."""
        return f"DELETE {self.value}"


@dataclass(frozen=True)
class BrandName:
    """A validated brand display name.

    Display names are not unique. The policy only bounds length and the
    permitted characters: letters, digits, spaces and ``- _ . , & ' ( )``.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def parse(cls, raw: str | None, max_length: int = DEFAULT_NAME_MAX_LENGTH) -> BrandName:
        """Validate and normalize a requested brand name.

        Raises:
            InvalidBrandNameError: If the name is empty, too long, or
                contains characters outside the permitted set
        """
        name = " ".join((raw or "").split())
        if not name:
            raise InvalidBrandNameError("Brand name must not be empty")
        if len(name) > max_length:
            raise InvalidBrandNameError(
                f"Brand name must be at most {max_length} characters"
            )
        if not _NAME_PATTERN.match(name):
            raise InvalidBrandNameError(
                "Brand name may only contain letters, digits, spaces and - _ . , & ' ( )"
            )
        return cls(value=name)


class BrandRole(StrEnum):
    """Roles of a brand-local user."""

    OWNER = "Owner"
    OPERATOR = "Operator"


class EntryStore(StrEnum):
    """The two key-value stores inside every brand schema."""

    INFO = "info"
    CONFIG = "config"


def validate_entry(key: str, value: str) -> tuple[str, str]:
    """Check bounds of an info/config entry and return the trimmed key.

    Raises:
        InvalidEntryError: If the key is empty or either part is too long
    """
    key = (key or "").strip()
    if not key:
        raise InvalidEntryError("Key must not be empty")
    if len(key) > ENTRY_KEY_MAX_LENGTH:
        raise InvalidEntryError(f"Key must be at most {ENTRY_KEY_MAX_LENGTH} characters")
    if value is None or len(value) > ENTRY_VALUE_MAX_LENGTH:
        raise InvalidEntryError(
            f"Value must be at most {ENTRY_VALUE_MAX_LENGTH} characters"
        )
    return key, value
