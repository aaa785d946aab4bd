"""Data access inside one brand schema, as that brand's database role."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select, text, update
from sqlalchemy.dialects.postgresql import insert

from brands.domain.aggregates import BrandEntry, BrandUser
from brands.domain.value_objects import BrandRole, EntryStore
from brands.ports.repositories import IBrandDataStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Row
    from sqlalchemy.ext.asyncio import AsyncEngine

    from brands.infrastructure.brand_tables import BrandTables


_KNOWN_ROLES = frozenset(role.value for role in BrandRole)


class BrandDataStore(IBrandDataStore):
    """Reads and writes brand tables through a brand-scoped engine."""

    def __init__(self, engine: AsyncEngine, tables: BrandTables) -> None:
        self._engine = engine
        self._tables = tables

    async def get_user_by_api_key(self, api_key: str) -> BrandUser | None:
        users = self._tables.users
        user_roles = self._tables.user_roles
        async with self._engine.connect() as conn:
            result = await conn.execute(select(users).where(users.c.api_key == api_key))
            row = result.one_or_none()
            if row is None:
                return None
            roles = await conn.execute(
                select(user_roles.c.role).where(user_roles.c.user_id == row.id)
            )
            role_names = roles.scalars().all()

        return BrandUser(
            id=str(row.id),
            api_key=row.api_key,
            api_password_hash=row.api_password_hash,
            display_name=row.display_name,
            is_active=row.is_active,
            roles=frozenset(BrandRole(r) for r in role_names if r in _KNOWN_ROLES),
            last_login_at=row.last_login_at,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def record_login(self, user_id: str, at: datetime) -> None:
        users = self._tables.users
        async with self._engine.begin() as conn:
            await conn.execute(
                update(users)
                .where(users.c.id == user_id)
                .values(last_login_at=at, updated_at=at)
            )

    async def list_entries(self, store: EntryStore) -> list[BrandEntry]:
        table = self._tables.entries(store)
        async with self._engine.connect() as conn:
            result = await conn.execute(select(table).order_by(table.c.key))
            return [self._to_entry(row) for row in result]

    async def get_entry(self, store: EntryStore, key: str) -> BrandEntry | None:
        table = self._tables.entries(store)
        async with self._engine.connect() as conn:
            result = await conn.execute(select(table).where(table.c.key == key))
            row = result.one_or_none()
        return self._to_entry(row) if row is not None else None

    async def upsert_entry(self, store: EntryStore, key: str, value: str) -> BrandEntry:
        """Insert or overwrite one entry and return the stored row."""
        table = self._tables.entries(store)
        now = datetime.now(UTC)
        stmt = insert(table).values(key=key, value=value, created_at=now, updated_at=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.key],
            set_={"value": stmt.excluded.value, "updated_at": now},
        ).returning(*table.c)
        async with self._engine.begin() as conn:
            result = await conn.execute(stmt)
            row = result.one()
        return self._to_entry(row)

    async def ping(self) -> bool:
        async with self._engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1

    @staticmethod
    def _to_entry(row: Row) -> BrandEntry:
        return BrandEntry(
            key=row.key,
            value=row.value,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
