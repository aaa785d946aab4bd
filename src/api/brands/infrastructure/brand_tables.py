"""SQLAlchemy Core table definitions for a brand schema.

Brand schemas are created at runtime, so their tables are not ORM-mapped
and not managed by alembic. Each call builds a fresh ``MetaData`` bound to
one schema; the same definitions drive both DDL and queries.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)

from brands.domain.value_objects import EntryStore
from infrastructure.database.models import utc_now


def _timestamps() -> list[Column]:
    return [
        Column(
            "created_at",
            DateTime(timezone=True),
            nullable=False,
            default=utc_now,
            server_default=func.now(),
        ),
        Column(
            "updated_at",
            DateTime(timezone=True),
            nullable=False,
            default=utc_now,
            onupdate=utc_now,
            server_default=func.now(),
        ),
    ]


def _entry_table(name: str, metadata: MetaData) -> Table:
    return Table(
        name,
        metadata,
        Column("key", String(255), primary_key=True),
        Column("value", Text, nullable=False),
        *_timestamps(),
    )


@dataclass(frozen=True)
class BrandTables:
    """The four tables that make up one brand schema."""

    schema_name: str
    metadata: MetaData
    users: Table
    user_roles: Table
    infos: Table
    configs: Table

    def entries(self, store: EntryStore) -> Table:
        """Return the table backing an info or config store."""
        return self.infos if store is EntryStore.INFO else self.configs

    @property
    def table_names(self) -> list[str]:
        return [table.name for table in self.metadata.sorted_tables]


def build_brand_tables(schema_name: str) -> BrandTables:
    """Build table definitions qualified with ``schema_name``."""
    metadata = MetaData(schema=schema_name)

    users = Table(
        "users",
        metadata,
        Column("id", Uuid(as_uuid=False), primary_key=True),
        Column("api_key", String(16), nullable=False, unique=True),
        Column("api_password_hash", String(255), nullable=False),
        Column("display_name", String(255), nullable=False),
        Column("is_active", Boolean, nullable=False, default=True),
        Column("last_login_at", DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    user_roles = Table(
        "user_roles",
        metadata,
        Column("id", Uuid(as_uuid=False), primary_key=True),
        Column(
            "user_id",
            Uuid(as_uuid=False),
            ForeignKey(users.c.id, ondelete="CASCADE"),
            nullable=False,
        ),
        Column("role", String(50), nullable=False),
        Column(
            "created_at",
            DateTime(timezone=True),
            nullable=False,
            default=utc_now,
            server_default=func.now(),
        ),
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )

    return BrandTables(
        schema_name=schema_name,
        metadata=metadata,
        users=users,
        user_roles=user_roles,
        infos=_entry_table("infos", metadata),
        configs=_entry_table("configs", metadata),
    )
