"""Brand-local user and key-value entry records."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from brands.domain.value_objects import BrandRole


@dataclass
class BrandUser:
    """A user that lives inside one brand's schema.

    Brand users sign in with an API key and API password. They have no
    relationship to principals; the only link is that provisioning seeds
    the first owner user.
    """

    id: str
    api_key: str
    api_password_hash: str = field(repr=False)
    display_name: str
    is_active: bool = True
    roles: frozenset[BrandRole] = frozenset()
    last_login_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create_owner(
        cls, api_key: str, api_password_hash: str, display_name: str
    ) -> BrandUser:
        """Factory method for the owner user seeded at provisioning."""
        return cls(
            id=str(uuid.uuid4()),
            api_key=api_key,
            api_password_hash=api_password_hash,
            display_name=display_name,
            roles=frozenset({BrandRole.OWNER}),
        )

    def has_role(self, role: BrandRole) -> bool:
        return role in self.roles

    def sorted_roles(self) -> list[str]:
        """Role names in a stable order, for tokens and responses."""
        return sorted(role.value for role in self.roles)


@dataclass(frozen=True)
class BrandEntry:
    """One row of a brand's info or config store."""

    key: str
    value: str
    created_at: datetime
    updated_at: datetime
