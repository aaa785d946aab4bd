"""Repository and gateway protocols (ports) for the brands context.

``IBrandRepository`` covers the registry tables in the administrative
database. ``IBrandSchemaManager`` performs DDL with administrative
privileges. ``IBrandDataStore`` reads and writes inside one brand's schema
using that brand's own database role.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from brands.domain.aggregates import Brand, BrandEntry, BrandUser
from brands.domain.value_objects import BrandId, EntryStore
from iam.domain.value_objects import PrincipalId


@runtime_checkable
class IBrandRepository(Protocol):
    """Registry of brands.

    Every method runs in its own committed transaction so that multi-step
    workflows can rely on each change being durable once it returns.
    """

    async def save(self, brand: Brand) -> None:
        """Insert or update a brand.

        Raises:
            BrandConflictError: If the schema name or database user is taken
            BrandOwnerNotFoundError: If the owner no longer exists
        """
        ...

    async def get_by_id(self, brand_id: BrandId) -> Brand | None:
        """Retrieve a brand by ID, active or not."""
        ...

    async def list_by_owner(self, owner_id: PrincipalId) -> list[Brand]:
        """List the brands of one owner, oldest first."""
        ...

    async def delete(self, brand_id: BrandId) -> bool:
        """Delete the registry row.

        Returns:
            True if deleted, False if not found
        """
        ...

    async def rename(self, brand_id: BrandId, name: str) -> bool:
        """Change the display name.

        Returns:
            True if a row was updated
        """
        ...


@runtime_checkable
class IBrandSchemaManager(Protocol):
    """Administrative DDL for brand namespaces and roles.

    Drop operations are idempotent so they can serve as compensations for
    half-finished creations.
    """

    async def create_schema(self, schema_name: str) -> None:
        ...

    async def drop_schema(self, schema_name: str) -> None:
        ...

    async def create_role(self, role_name: str, password: str, schema_name: str) -> None:
        """Create a login role confined to ``schema_name``."""
        ...

    async def drop_role(self, role_name: str) -> None:
        ...

    async def create_tables(self, schema_name: str, role_name: str) -> None:
        """Create the brand tables and grant DML on them to ``role_name``."""
        ...

    async def seed_owner(self, schema_name: str, owner: BrandUser, brand_name: str) -> None:
        """Insert the owner user, its role and the brand name info entry."""
        ...

    async def schema_exists(self, schema_name: str) -> bool:
        ...

    async def role_exists(self, role_name: str) -> bool:
        ...


@runtime_checkable
class IBrandDataStore(Protocol):
    """Data access inside one brand's schema."""

    async def get_user_by_api_key(self, api_key: str) -> BrandUser | None:
        ...

    async def record_login(self, user_id: str, at: datetime) -> None:
        ...

    async def list_entries(self, store: EntryStore) -> list[BrandEntry]:
        ...

    async def get_entry(self, store: EntryStore, key: str) -> BrandEntry | None:
        ...

    async def upsert_entry(self, store: EntryStore, key: str, value: str) -> BrandEntry:
        ...

    async def ping(self) -> bool:
        """Run a trivial query through the brand role."""
        ...


@runtime_checkable
class IBrandConnection(Protocol):
    """A resolved route to one brand's schema."""

    brand_id: BrandId
    schema_name: str

    def store(self) -> IBrandDataStore:
        ...


@runtime_checkable
class IBrandConnectionRouter(Protocol):
    """Maps a brand id to a connection bound to that brand's namespace."""

    async def resolve(self, brand_id: BrandId) -> IBrandConnection:
        """Return a connection for an active brand.

        Raises:
            BrandNotFoundError: If the brand is missing or inactive
        """
        ...

    async def invalidate(self, brand_id: BrandId) -> None:
        """Evict any cached connection and close its pool."""
        ...

    async def verify(self, brand_id: BrandId) -> bool:
        ...
