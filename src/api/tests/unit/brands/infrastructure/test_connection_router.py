"""Unit tests for the brand connection cache and router.

Engines are replaced by mocks through the router's engine factory, so no
database is needed.
"""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from brands.domain.aggregates import Brand
from brands.domain.value_objects import BrandId, BrandName
from brands.infrastructure.connection_router import (
    BrandConnection,
    BrandConnectionCache,
    BrandConnectionRouter,
)
from brands.infrastructure.credential_cipher import CredentialCipher
from brands.infrastructure.observability import ConnectionRouterProbe
from brands.ports.exceptions import BrandNotFoundError
from brands.ports.repositories import IBrandConnectionRouter, IBrandRepository
from iam.domain.value_objects import PrincipalId


@pytest.fixture
def cipher():
    return CredentialCipher(CredentialCipher.generate_key())


@pytest.fixture
def active_brand(cipher):
    brand = Brand.create(BrandName.parse("Acme"), PrincipalId.generate(), cipher.encrypt("pw"))
    brand.activate()
    return brand


@pytest.fixture
def mock_repository(active_brand):
    repository = create_autospec(IBrandRepository, instance=True)
    repository.get_by_id.return_value = active_brand
    return repository


@pytest.fixture
def engine_factory():
    def factory(connection):
        engine = MagicMock()
        engine.dispose = AsyncMock()
        return engine

    return MagicMock(side_effect=factory)


@pytest.fixture
def cache():
    return BrandConnectionCache()


@pytest.fixture
def mock_probe():
    return create_autospec(ConnectionRouterProbe, instance=True)


@pytest.fixture
def router(cache, mock_repository, cipher, mock_db_settings, engine_factory, mock_probe):
    return BrandConnectionRouter(
        cache=cache,
        brand_repository=mock_repository,
        cipher=cipher,
        database_settings=mock_db_settings,
        engine_factory=engine_factory,
        probe=mock_probe,
    )


def _connection(brand_id: BrandId) -> BrandConnection:
    return BrandConnection(
        brand_id=brand_id,
        schema_name=brand_id.schema_name,
        database_user=brand_id.database_user,
        password=MagicMock(),
        engine_factory=MagicMock(),
    )


class TestBrandConnectionCache:
    def test_put_and_get(self, cache):
        brand_id = BrandId.generate()
        connection = _connection(brand_id)

        assert cache.put(connection) is connection
        assert cache.get(brand_id) is connection
        assert brand_id in cache
        assert len(cache) == 1

    def test_put_keeps_first_connection(self, cache):
        brand_id = BrandId.generate()
        first, second = _connection(brand_id), _connection(brand_id)

        cache.put(first)

        assert cache.put(second) is first

    def test_invalidated_brand_cannot_be_cached_again(self, cache):
        brand_id = BrandId.generate()
        connection = _connection(brand_id)
        cache.put(connection)

        assert cache.invalidate(brand_id) is connection
        assert cache.get(brand_id) is None
        assert cache.put(_connection(brand_id)) is None

    def test_revoked_ids_are_bounded(self):
        cache = BrandConnectionCache(max_revoked=2)
        oldest, middle, newest = (BrandId.generate() for _ in range(3))
        for brand_id in (oldest, middle, newest):
            cache.invalidate(brand_id)

        assert len(cache._revoked) == 2
        assert cache.put(_connection(middle)) is None
        assert cache.put(_connection(newest)) is None
        assert cache.put(_connection(oldest)) is not None

    def test_reinvalidating_refreshes_revocation(self):
        cache = BrandConnectionCache(max_revoked=2)
        first, second, third = (BrandId.generate() for _ in range(3))
        cache.invalidate(first)
        cache.invalidate(second)
        cache.invalidate(first)
        cache.invalidate(third)

        assert cache.put(_connection(first)) is None
        assert cache.put(_connection(second)) is not None

    def test_clear_returns_evicted(self, cache):
        cache.put(_connection(BrandId.generate()))
        cache.put(_connection(BrandId.generate()))

        assert len(cache.clear()) == 2
        assert len(cache) == 0


class TestBrandConnection:
    def test_engine_is_created_once(self):
        factory = MagicMock(return_value=MagicMock())
        connection = BrandConnection(
            brand_id=BrandId.generate(),
            schema_name="brand_abc",
            database_user="brand_user_abc",
            password=MagicMock(),
            engine_factory=factory,
        )

        assert connection.engine is connection.engine
        factory.assert_called_once_with(connection)

    def test_tables_live_in_brand_schema(self):
        connection = _connection(BrandId.generate())

        assert connection.tables.users.schema == connection.schema_name

    def test_password_not_in_repr(self):
        connection = _connection(BrandId.generate())

        assert "password" not in repr(connection)


class TestResolve:
    def test_implements_port(self, router):
        assert isinstance(router, IBrandConnectionRouter)

    @pytest.mark.asyncio
    async def test_resolves_and_caches(self, router, active_brand, cache, mock_probe):
        connection = await router.resolve(active_brand.id)

        assert connection.schema_name == active_brand.schema_name
        assert connection.database_user == active_brand.database_user
        assert connection.password.get_secret_value() == "pw"
        assert cache.get(active_brand.id) is connection
        mock_probe.connection_cached.assert_called_once_with(active_brand.id.value)

    @pytest.mark.asyncio
    async def test_second_resolve_uses_cache(self, router, active_brand, mock_repository):
        first = await router.resolve(active_brand.id)
        second = await router.resolve(active_brand.id)

        assert first is second
        mock_repository.get_by_id.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_brand(self, router, mock_repository):
        mock_repository.get_by_id.return_value = None

        with pytest.raises(BrandNotFoundError):
            await router.resolve(BrandId.generate())

    @pytest.mark.asyncio
    async def test_inactive_brand_is_not_routed(self, router, active_brand, cache):
        active_brand.deactivate()

        with pytest.raises(BrandNotFoundError):
            await router.resolve(active_brand.id)

        assert active_brand.id not in cache

    @pytest.mark.asyncio
    async def test_resolve_racing_deletion(self, router, active_brand, cache, mock_repository):
        async def lookup_then_deleted(brand_id):
            cache.invalidate(brand_id)
            return active_brand

        mock_repository.get_by_id.side_effect = lookup_then_deleted

        with pytest.raises(BrandNotFoundError):
            await router.resolve(active_brand.id)

        assert active_brand.id not in cache


class TestInvalidate:
    @pytest.mark.asyncio
    async def test_evicts_and_disposes(self, router, active_brand, cache, mock_probe):
        connection = await router.resolve(active_brand.id)
        engine = connection.engine

        await router.invalidate(active_brand.id)

        engine.dispose.assert_awaited_once()
        assert active_brand.id not in cache
        mock_probe.connection_invalidated.assert_called_once_with(
            active_brand.id.value, True
        )

    @pytest.mark.asyncio
    async def test_invalidate_uncached_brand(self, router, mock_probe):
        brand_id = BrandId.generate()

        await router.invalidate(brand_id)

        mock_probe.connection_invalidated.assert_called_once_with(brand_id.value, False)

    @pytest.mark.asyncio
    async def test_resolve_after_invalidate_fails(self, router, active_brand):
        await router.resolve(active_brand.id)
        await router.invalidate(active_brand.id)

        with pytest.raises(BrandNotFoundError):
            await router.resolve(active_brand.id)


class TestVerify:
    @pytest.mark.asyncio
    async def test_ping_failure_reports_unhealthy(self, router, active_brand, mock_probe, monkeypatch):
        store = MagicMock()
        store.ping = AsyncMock(side_effect=OSError("refused"))
        monkeypatch.setattr(BrandConnection, "store", lambda self: store)

        assert await router.verify(active_brand.id) is False
        mock_probe.verification_failed.assert_called_once_with(
            active_brand.id.value, "OSError"
        )

    @pytest.mark.asyncio
    async def test_ping_success(self, router, active_brand, monkeypatch):
        store = MagicMock()
        store.ping = AsyncMock(return_value=True)
        monkeypatch.setattr(BrandConnection, "store", lambda self: store)

        assert await router.verify(active_brand.id) is True
