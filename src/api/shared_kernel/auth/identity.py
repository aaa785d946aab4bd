"""Request identity variants.

Every request resolves to exactly one of three identities. Downstream code
matches on the concrete type (or ``kind``) instead of probing optional
fields, so a Principal can never be mistaken for a Brand or the reverse.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class TokenType(StrEnum):
    """Value of the ``token_type`` claim."""

    PRINCIPAL = "Principal"
    BRAND = "Brand"


class IdentityKind(StrEnum):
    """Discriminator for the identity variants."""

    PRINCIPAL = "Principal"
    BRAND = "Brand"
    ANONYMOUS = "Anonymous"


@dataclass(frozen=True)
class PrincipalIdentity:
    """A system-level account authenticated with email and password.

    Carries no brand information. Principal identities may manage the
    brands they own but can never read or write brand-scoped data.
    """

    principal_id: str
    email: str
    roles: tuple[str, ...] = ()
    kind: IdentityKind = field(default=IdentityKind.PRINCIPAL, init=False)

    def has_role(self, role: str) -> bool:
        """Check whether the principal holds the given role."""
        return role in self.roles


@dataclass(frozen=True)
class BrandIdentity:
    """A brand-local user authenticated with API key and password.

    Scoped to exactly one brand: every brand-scoped operation acts on
    ``brand_id`` and ``brand_schema`` and nothing else.
    """

    brand_id: str
    brand_schema: str
    user_id: str
    roles: tuple[str, ...] = ()
    display_name: str | None = None
    kind: IdentityKind = field(default=IdentityKind.BRAND, init=False)

    def has_role(self, role: str) -> bool:
        """Check whether the brand user holds the given role."""
        return role in self.roles


@dataclass(frozen=True)
class AnonymousIdentity:
    """No token, or a token that failed verification."""

    reason: str | None = None
    kind: IdentityKind = field(default=IdentityKind.ANONYMOUS, init=False)


Identity = PrincipalIdentity | BrandIdentity | AnonymousIdentity
