"""Routing from a brand id to a connection pool bound to that brand.

The cache is owned by the application (created in the lifespan and kept on
``app.state``) and shared by the per-request routers. Each cached
``BrandConnection`` logs in as the brand's own database role with its search
path pinned to the brand schema, so one brand's handle cannot read another
brand's tables.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Callable

from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncEngine

from brands.domain.value_objects import BrandId
from brands.infrastructure.brand_data_store import BrandDataStore
from brands.infrastructure.brand_tables import BrandTables, build_brand_tables
from brands.infrastructure.credential_cipher import CredentialCipher
from brands.infrastructure.observability import (
    ConnectionRouterProbe,
    DefaultConnectionRouterProbe,
)
from brands.ports.exceptions import BrandNotFoundError
from brands.ports.repositories import IBrandConnectionRouter, IBrandRepository
from infrastructure.database.engines import create_brand_engine
from infrastructure.settings import DatabaseSettings

EngineFactory = Callable[["BrandConnection"], AsyncEngine]


class BrandConnection:
    """A resolved route to one brand schema.

    The engine is created on first use and closed by ``dispose``.
    """

    def __init__(
        self,
        brand_id: BrandId,
        schema_name: str,
        database_user: str,
        password: SecretStr,
        engine_factory: EngineFactory,
    ) -> None:
        self.brand_id = brand_id
        self.schema_name = schema_name
        self.database_user = database_user
        self.password = password
        self.tables: BrandTables = build_brand_tables(schema_name)
        self._engine_factory = engine_factory
        self._engine: AsyncEngine | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<BrandConnection(brand_id={self.brand_id}, schema_name={self.schema_name})>"

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    self._engine = self._engine_factory(self)
        return self._engine

    def store(self) -> BrandDataStore:
        return BrandDataStore(self.engine, self.tables)

    async def dispose(self) -> None:
        """Close pooled connections; checked-out connections finish normally."""
        with self._lock:
            engine, self._engine = self._engine, None
        if engine is not None:
            await engine.dispose()


class BrandConnectionCache:
    """Thread-safe map of brand id to resolved connection.

    Invalidated ids are remembered so that a resolution racing with a
    deletion cannot put a stale handle back. Only the most recent
    ``max_revoked`` ids are remembered. Brand ids are never reused.
    """

    def __init__(self, max_revoked: int = 4096) -> None:
        self._connections: dict[str, BrandConnection] = {}
        self._revoked: OrderedDict[str, None] = OrderedDict()
        self._max_revoked = max_revoked
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)

    def __contains__(self, brand_id: object) -> bool:
        with self._lock:
            return str(brand_id) in self._connections

    def get(self, brand_id: BrandId) -> BrandConnection | None:
        with self._lock:
            return self._connections.get(brand_id.value)

    def put(self, connection: BrandConnection) -> BrandConnection | None:
        """Cache a connection unless one is already cached.

        Returns:
            The cached connection (the existing one if there was a race), or
            None if the brand was invalidated in the meantime
        """
        key = connection.brand_id.value
        with self._lock:
            if key in self._revoked:
                return None
            return self._connections.setdefault(key, connection)

    def invalidate(self, brand_id: BrandId) -> BrandConnection | None:
        """Evict a brand and refuse to cache it again.

        Returns:
            The evicted connection, if any
        """
        with self._lock:
            self._revoked[brand_id.value] = None
            self._revoked.move_to_end(brand_id.value)
            while len(self._revoked) > self._max_revoked:
                self._revoked.popitem(last=False)
            return self._connections.pop(brand_id.value, None)

    def clear(self) -> list[BrandConnection]:
        """Evict every connection, e.g. on shutdown."""
        with self._lock:
            evicted = list(self._connections.values())
            self._connections.clear()
            return evicted


class BrandConnectionRouter(IBrandConnectionRouter):
    """Resolves brand ids to cached, brand-scoped connections."""

    def __init__(
        self,
        cache: BrandConnectionCache,
        brand_repository: IBrandRepository,
        cipher: CredentialCipher,
        database_settings: DatabaseSettings,
        pool_size: int = 5,
        engine_factory: EngineFactory | None = None,
        probe: ConnectionRouterProbe | None = None,
    ) -> None:
        self._cache = cache
        self._brand_repository = brand_repository
        self._cipher = cipher
        self._database_settings = database_settings
        self._pool_size = pool_size
        self._engine_factory = engine_factory or self._create_engine
        self._probe = probe or DefaultConnectionRouterProbe()

    def _create_engine(self, connection: BrandConnection) -> AsyncEngine:
        return create_brand_engine(
            self._database_settings,
            username=connection.database_user,
            password=connection.password.get_secret_value(),
            schema_name=connection.schema_name,
            pool_size=self._pool_size,
        )

    async def resolve(self, brand_id: BrandId) -> BrandConnection:
        """Return the connection for an active brand.

        Raises:
            BrandNotFoundError: If the brand is missing, inactive, or was
                invalidated while being resolved
            CredentialDecryptionError: If the stored password cannot be
                decrypted
        """
        cached = self._cache.get(brand_id)
        if cached is not None:
            self._probe.connection_reused(brand_id.value)
            return cached

        brand = await self._brand_repository.get_by_id(brand_id)
        if brand is None:
            self._probe.brand_unroutable(brand_id.value, "not_found")
            raise BrandNotFoundError(f"Brand {brand_id} not found")
        if not brand.is_active:
            self._probe.brand_unroutable(brand_id.value, "inactive")
            raise BrandNotFoundError(f"Brand {brand_id} not found")

        connection = BrandConnection(
            brand_id=brand.id,
            schema_name=brand.schema_name,
            database_user=brand.database_user,
            password=SecretStr(self._cipher.decrypt(brand.encrypted_password)),
            engine_factory=self._engine_factory,
        )
        cached = self._cache.put(connection)
        if cached is None:
            self._probe.brand_unroutable(brand_id.value, "invalidated")
            raise BrandNotFoundError(f"Brand {brand_id} not found")

        if cached is connection:
            self._probe.connection_cached(brand_id.value)
        return cached

    async def invalidate(self, brand_id: BrandId) -> None:
        evicted = self._cache.invalidate(brand_id)
        if evicted is not None:
            await evicted.dispose()
        self._probe.connection_invalidated(brand_id.value, evicted is not None)

    async def verify(self, brand_id: BrandId) -> bool:
        """Check that the brand role can log in and query its schema.

        Raises:
            BrandNotFoundError: If the brand cannot be resolved
        """
        connection = await self.resolve(brand_id)
        try:
            return await connection.store().ping()
        except Exception as e:
            self._probe.verification_failed(brand_id.value, type(e).__name__)
            return False
