"""Cascade deletion of brands and of principals that own brands.

A brand is deleted from the inside out: it stops being routable, its schema
and role are dropped, and only then does its registry row go away. If a drop
fails, the row stays behind (inactive) so the deletion can be retried and
nothing is silently orphaned.
"""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from brands.application.observability import (
    CascadeDeletionProbe,
    DefaultCascadeDeletionProbe,
)
from brands.domain.aggregates import Brand
from brands.domain.value_objects import BrandId
from brands.ports.exceptions import (
    BrandDeprovisioningError,
    BrandNotFoundError,
    OwnerDeletionError,
)
from brands.ports.repositories import (
    IBrandConnectionRouter,
    IBrandRepository,
    IBrandSchemaManager,
)
from iam.domain.value_objects import PrincipalId
from iam.ports.repositories import IOwnedBrandsCleaner, IPrincipalRepository
from shared_kernel.errors import InfrastructureError

PrincipalRepositoryFactory = Callable[[AsyncSession], IPrincipalRepository]


class CascadeDeletionService(IOwnedBrandsCleaner):
    """Deletes brands, and principals together with the brands they own."""

    def __init__(
        self,
        brand_repository: IBrandRepository,
        schema_manager: IBrandSchemaManager,
        connection_router: IBrandConnectionRouter,
        session_factory: async_sessionmaker[AsyncSession],
        principal_repository_factory: PrincipalRepositoryFactory,
        probe: CascadeDeletionProbe | None = None,
    ) -> None:
        """Initialize CascadeDeletionService with dependencies.

        Args:
            brand_repository: Registry of brands
            schema_manager: DDL for dropping schemas and roles
            connection_router: Router whose cached connections get evicted
            session_factory: Sessions for the principal deletion transaction
            principal_repository_factory: Builds a principal repository on a session
            probe: Optional domain probe for observability
        """
        self._brand_repository = brand_repository
        self._schema_manager = schema_manager
        self._connection_router = connection_router
        self._session_factory = session_factory
        self._principal_repository_factory = principal_repository_factory
        self._probe = probe or DefaultCascadeDeletionProbe()

    async def delete_brand(self, brand_id: BrandId) -> Brand:
        """Delete one brand with its schema, role and registry row.

        Returns:
            The deleted brand as it was last stored

        Raises:
            BrandNotFoundError: If the brand does not exist
            BrandDeprovisioningError: If the schema or role could not be
                dropped; the registry row is kept, inactive
        """
        brand = await self._brand_repository.get_by_id(brand_id)
        if brand is None:
            raise BrandNotFoundError(f"Brand {brand_id} not found")

        self._probe.brand_deletion_started(brand_id.value)

        if brand.is_active:
            brand.deactivate()
            await self._brand_repository.save(brand)

        await self._connection_router.invalidate(brand_id)

        try:
            await self._schema_manager.drop_schema(brand.schema_name)
        except Exception as e:
            self._probe.brand_deletion_failed(brand_id.value, "drop_schema", type(e).__name__)
            raise BrandDeprovisioningError(f"Could not drop schema of brand {brand_id}") from e

        try:
            await self._schema_manager.drop_role(brand.database_user)
        except Exception as e:
            self._probe.brand_deletion_failed(brand_id.value, "drop_role", type(e).__name__)
            raise BrandDeprovisioningError(f"Could not drop role of brand {brand_id}") from e

        await self._brand_repository.delete(brand_id)
        self._probe.brand_deleted(brand_id.value, brand.schema_name)
        return brand

    async def delete_owner(self, owner_id: PrincipalId) -> int:
        """Delete every brand of a principal, then the principal.

        Returns:
            Number of brands deleted

        Raises:
            OwnerDeletionError: If any brand could not be deleted, or the
                principal row could not be removed afterwards
        """
        brands = await self._brand_repository.list_by_owner(owner_id)
        deleted = 0
        failed: list[str] = []

        for brand in brands:
            try:
                await self.delete_brand(brand.id)
            except BrandNotFoundError:
                # Deleted concurrently; nothing left to do for this one
                continue
            except (InfrastructureError, SQLAlchemyError):
                failed.append(brand.id.value)
                continue
            deleted += 1

        if failed:
            self._probe.owner_deletion_aborted(owner_id.value, failed)
            raise OwnerDeletionError(
                f"{len(failed)} brand(s) could not be deleted; account kept"
            )

        try:
            async with self._session_factory() as session, session.begin():
                await self._principal_repository_factory(session).delete(owner_id)
        except SQLAlchemyError as e:
            # The owner foreign key refuses while brands remain
            self._probe.owner_deletion_aborted(owner_id.value, [])
            raise OwnerDeletionError("Account could not be deleted") from e

        self._probe.owner_deleted(owner_id.value, deleted)
        return deleted
