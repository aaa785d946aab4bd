"""PostgreSQL DDL for brand schemas and roles.

Every operation runs in its own transaction on the administrative engine.
Create operations fail on existing objects; drop operations are idempotent
so they can be used to clean up after a partial creation.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import insert, text
from sqlalchemy.exc import DBAPIError

from brands.domain.value_objects import BRAND_NAME_INFO_KEY
from brands.infrastructure.brand_tables import build_brand_tables
from brands.infrastructure.observability import (
    DefaultSchemaManagerProbe,
    SchemaManagerProbe,
)
from brands.ports.exceptions import BrandConflictError
from brands.ports.repositories import IBrandSchemaManager
from infrastructure.database.exceptions import DatabaseError
from infrastructure.database.identifiers import quote_identifier, quote_literal

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from brands.domain.aggregates import BrandUser

# SQLSTATE codes that mean "already exists"
_DUPLICATE_STATES = frozenset({"42P06", "42710", "42P07", "23505"})

_TABLE_PRIVILEGES = "SELECT, INSERT, UPDATE, DELETE"
_SEQUENCE_PRIVILEGES = "USAGE, SELECT"


def _sqlstate(error: DBAPIError) -> str | None:
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


class PostgresBrandSchemaManager(IBrandSchemaManager):
    """Creates and drops brand namespaces and their login roles."""

    def __init__(
        self,
        engine: AsyncEngine,
        probe: SchemaManagerProbe | None = None,
    ) -> None:
        """Initialize with the administrative engine.

        Args:
            engine: Engine whose role may create schemas and roles
            probe: Optional domain probe for observability
        """
        self._engine = engine
        self._probe = probe or DefaultSchemaManagerProbe()

    async def _execute(self, operation: str, identifier: str, *statements: str) -> None:
        try:
            async with self._engine.begin() as conn:
                for statement in statements:
                    await conn.execute(text(statement))
        except DBAPIError as e:
            self._probe.ddl_failed(operation, identifier, type(e.orig).__name__)
            if _sqlstate(e) in _DUPLICATE_STATES:
                raise BrandConflictError(f"{identifier} already exists") from e
            raise DatabaseError(f"{operation} failed for {identifier}") from e

    async def create_schema(self, schema_name: str) -> None:
        schema = quote_identifier(schema_name)
        await self._execute("create_schema", schema_name, f"CREATE SCHEMA {schema}")
        self._probe.schema_created(schema_name)

    async def drop_schema(self, schema_name: str) -> None:
        schema = quote_identifier(schema_name)
        await self._execute(
            "drop_schema", schema_name, f"DROP SCHEMA IF EXISTS {schema} CASCADE"
        )
        self._probe.schema_dropped(schema_name)

    async def create_role(self, role_name: str, password: str, schema_name: str) -> None:
        """Create a login role that can only work inside ``schema_name``.

        The role gets no server-level capabilities and defaults its search
        path to the brand schema. CREATE on the public schema is revoked
        from PUBLIC by migration.
        """
        role = quote_identifier(role_name)
        schema = quote_identifier(schema_name)
        await self._execute(
            "create_role",
            role_name,
            f"CREATE ROLE {role} WITH LOGIN PASSWORD {quote_literal(password)} "
            "NOSUPERUSER NOCREATEDB NOCREATEROLE NOINHERIT NOREPLICATION NOBYPASSRLS",
            f"GRANT USAGE, CREATE ON SCHEMA {schema} TO {role}",
            f"ALTER DEFAULT PRIVILEGES IN SCHEMA {schema} "
            f"GRANT {_TABLE_PRIVILEGES} ON TABLES TO {role}",
            f"ALTER DEFAULT PRIVILEGES IN SCHEMA {schema} "
            f"GRANT {_SEQUENCE_PRIVILEGES} ON SEQUENCES TO {role}",
            f"ALTER ROLE {role} SET search_path TO {schema}",
        )
        self._probe.role_created(role_name, schema_name)

    async def drop_role(self, role_name: str) -> None:
        """Drop a role and everything it owns or was granted, if it exists."""
        role = quote_identifier(role_name)
        if not await self.role_exists(role_name):
            self._probe.role_dropped(role_name)
            return
        await self._execute(
            "drop_role",
            role_name,
            f"DROP OWNED BY {role} CASCADE",
            f"DROP ROLE IF EXISTS {role}",
        )
        self._probe.role_dropped(role_name)

    async def create_tables(self, schema_name: str, role_name: str) -> None:
        """Create the brand tables and grant DML on them to the brand role."""
        tables = build_brand_tables(schema_name)
        role = quote_identifier(role_name)
        schema = quote_identifier(schema_name)
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(tables.metadata.create_all)
                await conn.execute(
                    text(
                        f"GRANT {_TABLE_PRIVILEGES} ON ALL TABLES IN SCHEMA {schema} TO {role}"
                    )
                )
                await conn.execute(
                    text(
                        f"GRANT {_SEQUENCE_PRIVILEGES} ON ALL SEQUENCES IN SCHEMA {schema} TO {role}"
                    )
                )
        except DBAPIError as e:
            self._probe.ddl_failed("create_tables", schema_name, type(e.orig).__name__)
            raise DatabaseError(f"create_tables failed for {schema_name}") from e

        self._probe.tables_created(schema_name, tables.table_names)

    async def seed_owner(self, schema_name: str, owner: BrandUser, brand_name: str) -> None:
        """Insert the owner user, its roles and the brand name info entry."""
        tables = build_brand_tables(schema_name)
        try:
            async with self._engine.begin() as conn:
                await conn.execute(
                    insert(tables.users).values(
                        id=owner.id,
                        api_key=owner.api_key,
                        api_password_hash=owner.api_password_hash,
                        display_name=owner.display_name,
                        is_active=owner.is_active,
                        created_at=owner.created_at,
                        updated_at=owner.updated_at,
                    )
                )
                for role in owner.sorted_roles():
                    await conn.execute(
                        insert(tables.user_roles).values(
                            id=str(uuid.uuid4()), user_id=owner.id, role=role
                        )
                    )
                await conn.execute(
                    insert(tables.infos).values(key=BRAND_NAME_INFO_KEY, value=brand_name)
                )
        except DBAPIError as e:
            self._probe.ddl_failed("seed_owner", schema_name, type(e.orig).__name__)
            raise DatabaseError(f"seed_owner failed for {schema_name}") from e

        self._probe.owner_seeded(schema_name, owner.id)

    async def schema_exists(self, schema_name: str) -> bool:
        async with self._engine.connect() as conn:
            result = await conn.execute(
                text(
                    "SELECT EXISTS(SELECT 1 FROM information_schema.schemata "
                    "WHERE schema_name = :schema)"
                ),
                {"schema": schema_name},
            )
            return bool(result.scalar())

    async def role_exists(self, role_name: str) -> bool:
        async with self._engine.connect() as conn:
            result = await conn.execute(
                text("SELECT EXISTS(SELECT 1 FROM pg_roles WHERE rolname = :role)"),
                {"role": role_name},
            )
            return bool(result.scalar())
