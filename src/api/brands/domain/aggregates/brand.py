"""Brand aggregate for the brands context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from brands.domain.value_objects import BrandId, BrandName
from iam.domain.value_objects import PrincipalId


@dataclass
class Brand:
    """Brand aggregate: the registry view of one isolated tenant.

    The row in the registry is the system of record for where a brand's data
    lives (``schema_name``) and which database role may touch it
    (``database_user``). Both names derive from the brand id and never
    change after creation.

    Business rules:
    - A brand is owned by exactly one principal
    - A brand only becomes active after provisioning completed
    - Inactive brands are never routed to
    """

    id: BrandId
    name: str
    owner_id: PrincipalId
    schema_name: str
    database_user: str
    encrypted_password: str = field(repr=False)
    is_active: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        name: BrandName,
        owner_id: PrincipalId,
        encrypted_password: str,
        brand_id: BrandId | None = None,
    ) -> Brand:
        """Factory method for reserving a new, still inactive brand.

        Args:
            name: Validated display name
            owner_id: Principal who owns the brand
            encrypted_password: Cipher text of the brand role's password
            brand_id: Optional pre-generated id

        Returns:
            A new inactive Brand aggregate
        """
        brand_id = brand_id or BrandId.generate()
        return cls(
            id=brand_id,
            name=name.value,
            owner_id=owner_id,
            schema_name=brand_id.schema_name,
            database_user=brand_id.database_user,
            encrypted_password=encrypted_password,
        )

    def activate(self) -> None:
        """Mark provisioning as complete."""
        self.is_active = True
        self.updated_at = datetime.now(UTC)

    def deactivate(self) -> None:
        """Stop routing to this brand."""
        self.is_active = False
        self.updated_at = datetime.now(UTC)

    def rename(self, name: BrandName) -> None:
        """Change the display name."""
        self.name = name.value
        self.updated_at = datetime.now(UTC)

    def is_owned_by(self, principal_id: PrincipalId) -> bool:
        return self.owner_id == principal_id

    @property
    def confirmation_phrase(self) -> str:
        """Phrase a caller must send to delete this brand."""
        return self.id.confirmation_phrase
