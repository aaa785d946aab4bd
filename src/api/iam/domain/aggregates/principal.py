"""Principal aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from iam.domain.value_objects import EmailAddress, PrincipalId, PrincipalRole


@dataclass
class Principal:
    """Principal aggregate representing a system-level account.

    Principals authenticate with email and password and own zero or more
    brands. They never act inside a brand schema directly; brand-scoped work
    requires a separate Brand sign-in.

    Business rules:
    - Email addresses are unique system-wide (enforced by the repository)
    - Every principal holds at least one role
    - Deleting a principal deletes every brand it owns first
    """

    id: PrincipalId
    email: EmailAddress
    password_hash: str = field(repr=False)
    full_name: str
    roles: frozenset[PrincipalRole] = frozenset({PrincipalRole.USER})
    last_login_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        email: str,
        password_hash: str,
        full_name: str,
        roles: frozenset[PrincipalRole] | None = None,
    ) -> Principal:
        """Factory method for registering a new principal.

        Args:
            email: Raw email address (normalized here)
            password_hash: bcrypt hash of the chosen password
            full_name: Display name of the account holder
            roles: Roles to grant (default: User)

        Returns:
            A new Principal aggregate

        Raises:
            InvalidEmailError: If the email is malformed
        """
        return cls(
            id=PrincipalId.generate(),
            email=EmailAddress.parse(email),
            password_hash=password_hash,
            full_name=full_name.strip(),
            roles=roles or frozenset({PrincipalRole.USER}),
        )

    @property
    def is_super_admin(self) -> bool:
        """Whether the principal may manage every brand."""
        return PrincipalRole.SUPER_ADMIN in self.roles

    def has_role(self, role: PrincipalRole) -> bool:
        """Check whether the principal holds a role."""
        return role in self.roles

    def record_login(self, at: datetime | None = None) -> None:
        """Record a successful sign-in."""
        self.last_login_at = at or datetime.now(UTC)
        self.updated_at = self.last_login_at

    def sorted_roles(self) -> list[str]:
        """Role names in a stable order, for tokens and responses."""
        return sorted(role.value for role in self.roles)
