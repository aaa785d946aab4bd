"""Unit tests for main FastAPI application configuration."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient


@pytest.fixture
def client() -> TestClient:
    from main import app

    return TestClient(app, raise_server_exceptions=False)


class TestHealthEndpoint:
    def test_health_reports_version(self, client):
        from infrastructure.version import __version__

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestRouting:
    def test_every_context_router_is_mounted(self):
        from main import app

        paths = {route.path for route in app.routes}

        assert {
            "/brands",
            "/brands/{brand_id}",
            "/brands/auth/sign-in",
            "/brand/info",
            "/brand/config",
            "/brand/health",
            "/iam/principals",
            "/iam/me/delete",
        } <= paths

    def test_brand_collection_requires_principal(self, client):
        response = client.get("/brands")

        assert response.status_code == 401
        assert response.json()["success"] is False


class TestErrorEnvelope:
    """HTTP errors are rendered as ``{"success": false, "message": ...}``."""

    def test_unknown_path_uses_envelope(self, client):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found"}

    def test_method_not_allowed_uses_envelope(self, client):
        response = client.delete("/health")

        assert response.status_code == 405
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_validation_errors_do_not_echo_input(self):
        from main import validation_exception_handler

        exc = RequestValidationError(
            [{"loc": ("body", "password"), "msg": "too short", "input": "hunter2"}]
        )

        response = await validation_exception_handler(MagicMock(), exc)

        assert response.status_code == 422
        body = json.loads(response.body)
        assert body == {"success": False, "message": "Request validation failed"}
        assert "hunter2" not in response.body.decode()

    @pytest.mark.asyncio
    async def test_unhandled_errors_are_generic_500(self):
        from main import unhandled_exception_handler

        request = MagicMock()
        request.url.path = "/brands"

        with patch("main._probe") as probe:
            response = await unhandled_exception_handler(
                request, RuntimeError("password=secret")
            )

        assert response.status_code == 500
        assert json.loads(response.body) == {
            "success": False,
            "message": "Internal server error",
        }
        probe.unhandled_error.assert_called_once()
        assert probe.unhandled_error.call_args.kwargs["path"] == "/brands"


class TestLifespan:
    @pytest.mark.asyncio
    async def test_lifespan_wires_cache_and_cleaner(self):
        from brands.dependencies.connection import BRAND_CONNECTION_CACHE_STATE_KEY
        from brands.infrastructure.connection_router import BrandConnectionCache
        from main import brandhouse_lifespan

        app = FastAPI()

        with (
            patch("main.configure_logging"),
            patch("main.set_owned_brands_cleaner_factory") as set_factory,
            patch("main.close_database_connections", new_callable=AsyncMock) as close,
        ):
            async with brandhouse_lifespan(app):
                cache = getattr(app.state, BRAND_CONNECTION_CACHE_STATE_KEY)
                assert isinstance(cache, BrandConnectionCache)
                assert set_factory.call_args_list[0].args[0] is not None

            assert set_factory.call_args_list[-1].args == (None,)
            close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lifespan_disposes_cached_brand_connections(self):
        from brands.dependencies.connection import BRAND_CONNECTION_CACHE_STATE_KEY
        from main import brandhouse_lifespan

        app = FastAPI()
        connection = MagicMock()
        connection.brand_id.value = "7d0f6c1e-3f4b-4a8e-9b61-2c5d8e9f0a1b"
        connection.dispose = AsyncMock()

        with (
            patch("main.configure_logging"),
            patch("main.set_owned_brands_cleaner_factory"),
            patch("main.close_database_connections", new_callable=AsyncMock),
        ):
            async with brandhouse_lifespan(app):
                cache = getattr(app.state, BRAND_CONNECTION_CACHE_STATE_KEY)
                cache.put(connection)

        connection.dispose.assert_awaited_once()
