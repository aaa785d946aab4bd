"""Integration test fixtures.

These tests need a running PostgreSQL server with migrations applied
(``alembic upgrade head``) and a database user allowed to create schemas
and roles. They are skipped unless ``BRANDHOUSE_INTEGRATION=1`` is set.

Connection settings come from the usual ``BRANDHOUSE_DB_*`` variables;
``BRANDHOUSE_BRANDS_CREDENTIAL_KEY`` must hold a Fernet key.
"""

import os
import uuid

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient


def pytest_collection_modifyitems(config, items):
    if os.getenv("BRANDHOUSE_INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="set BRANDHOUSE_INTEGRATION=1 to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest_asyncio.fixture
async def async_client():
    """Create async HTTP client for testing with lifespan support."""
    from main import app

    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture
def account_credentials() -> dict[str, str]:
    """Unique sign-up payload per test run."""
    return {
        "email": f"owner-{uuid.uuid4().hex[:8]}@example.com",
        "password": "Sturdy-Pass1",
        "full_name": "Integration Owner",
    }


@pytest_asyncio.fixture
async def principal_headers(async_client, account_credentials):
    """Sign up a fresh account and return its Authorization header.

    The account is deleted afterwards, taking any brands still owned
    by it along.
    """
    response = await async_client.post("/iam/principals", json=account_credentials)
    assert response.status_code == 201, f"Failed to sign up: {response.json()}"

    response = await async_client.post(
        "/iam/auth/sign-in",
        json={
            "email": account_credentials["email"],
            "password": account_credentials["password"],
        },
    )
    assert response.status_code == 200, f"Failed to sign in: {response.json()}"
    headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

    yield headers

    await async_client.post(
        "/iam/me/delete",
        json={"password": account_credentials["password"]},
        headers=headers,
    )
