"""PostgreSQL implementation of IBrandRepository.

Unlike the IAM repositories, this repository opens a short transaction per
call from a session factory. Provisioning and deletion span DDL that cannot
share the registry transaction, so every registry change has to be durable
on its own before the next step runs.
"""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from brands.domain.aggregates import Brand
from brands.domain.value_objects import BrandId
from brands.infrastructure.models import BrandModel
from brands.infrastructure.observability import (
    BrandRepositoryProbe,
    DefaultBrandRepositoryProbe,
)
from brands.ports.exceptions import BrandConflictError, BrandOwnerNotFoundError
from brands.ports.repositories import IBrandRepository
from iam.domain.value_objects import PrincipalId

_UNIQUE_CONSTRAINTS = ("brands_pkey", "ix_brands_schema_name", "ix_brands_database_user")


class BrandRepository(IBrandRepository):
    """Repository managing the brands registry table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: BrandRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory for sessions on the administrative engine
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._probe = probe or DefaultBrandRepositoryProbe()

    async def save(self, brand: Brand) -> None:
        """Insert or update a brand in its own transaction.

        Raises:
            BrandConflictError: If id, schema name or database user is taken
            BrandOwnerNotFoundError: If the owner row is gone
        """
        try:
            async with self._session_factory() as session, session.begin():
                model = await session.get(BrandModel, brand.id.value)
                if model is None:
                    session.add(
                        BrandModel(
                            id=brand.id.value,
                            name=brand.name,
                            schema_name=brand.schema_name,
                            owner_id=brand.owner_id.value,
                            database_user=brand.database_user,
                            encrypted_password=brand.encrypted_password,
                            is_active=brand.is_active,
                            created_at=brand.created_at,
                            updated_at=brand.updated_at,
                        )
                    )
                else:
                    model.name = brand.name
                    model.is_active = brand.is_active
                    model.encrypted_password = brand.encrypted_password
                    model.updated_at = brand.updated_at
        except IntegrityError as e:
            message = str(e)
            constraint = next((c for c in _UNIQUE_CONSTRAINTS if c in message), None)
            if constraint is not None:
                self._probe.brand_conflict(brand.id.value, constraint)
                raise BrandConflictError("Brand namespace already exists") from e
            if "owner_id" in message or "foreign key" in message.lower():
                raise BrandOwnerNotFoundError("Brand owner does not exist") from e
            raise

        self._probe.brand_saved(brand.id.value, brand.is_active)

    async def get_by_id(self, brand_id: BrandId) -> Brand | None:
        """Fetch a brand by ID.

        Returns:
            The Brand aggregate, or None if not found
        """
        async with self._session_factory() as session:
            model = await session.get(BrandModel, brand_id.value)

        if model is None:
            self._probe.brand_not_found(brand_id.value)
            return None
        return self._to_domain(model)

    async def list_by_owner(self, owner_id: PrincipalId) -> list[Brand]:
        """List an owner's brands, oldest first."""
        stmt = (
            select(BrandModel)
            .where(BrandModel.owner_id == owner_id.value)
            .order_by(BrandModel.created_at, BrandModel.id)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            models = result.scalars().all()

        return [self._to_domain(model) for model in models]

    async def delete(self, brand_id: BrandId) -> bool:
        """Delete the registry row.

        Returns:
            True if deleted, False if not found
        """
        stmt = delete(BrandModel).where(BrandModel.id == brand_id.value)
        async with self._session_factory() as session, session.begin():
            result = await session.execute(stmt)

        if result.rowcount == 0:
            self._probe.brand_not_found(brand_id.value)
            return False

        self._probe.brand_deleted(brand_id.value)
        return True

    async def rename(self, brand_id: BrandId, name: str) -> bool:
        """Change the display name of a brand.

        Returns:
            True if a row was updated
        """
        stmt = (
            update(BrandModel)
            .where(BrandModel.id == brand_id.value)
            .values(name=name)
        )
        async with self._session_factory() as session, session.begin():
            result = await session.execute(stmt)

        if result.rowcount == 0:
            self._probe.brand_not_found(brand_id.value)
            return False

        self._probe.brand_renamed(brand_id.value)
        return True

    @staticmethod
    def _to_domain(model: BrandModel) -> Brand:
        return Brand(
            id=BrandId(value=model.id),
            name=model.name,
            owner_id=PrincipalId(value=model.owner_id),
            schema_name=model.schema_name,
            database_user=model.database_user,
            encrypted_password=model.encrypted_password,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
