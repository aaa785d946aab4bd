"""Unit test fixtures shared across bounded contexts."""

from datetime import timedelta

import pytest
from pydantic import SecretStr

TEST_SECRET = "unit-test-signing-key-0123456789abcdef"
TEST_ISSUER = "brandhouse-test"
TEST_AUDIENCE = "brandhouse-test-api"


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password=SecretStr("testpass"),
    )


@pytest.fixture
def token_codec():
    """Token codec with a fixed test key."""
    from shared_kernel.auth import AuthTokenCodec

    return AuthTokenCodec(
        secret=TEST_SECRET,
        issuer=TEST_ISSUER,
        audience=TEST_AUDIENCE,
        lifetime=timedelta(minutes=30),
    )


@pytest.fixture
def principal_identity():
    """A signed-in ordinary principal."""
    from shared_kernel.auth import PrincipalIdentity

    return PrincipalIdentity(
        principal_id="01J9ZQ4X5K8V6M2N3P4Q5R6S7T",
        email="owner@example.com",
        roles=("User",),
    )


@pytest.fixture
def brand_identity():
    """A signed-in brand owner."""
    from shared_kernel.auth import BrandIdentity

    return BrandIdentity(
        brand_id="7d0f6c1e-3f4b-4a8e-9b61-2c5d8e9f0a1b",
        brand_schema="brand_7d0f6c1e3f4b4a8e9b612c5d8e9f0a1b",
        user_id="5b8a2e0c-4d1f-4c3a-8e7b-9f0a1b2c3d4e",
        roles=("Owner",),
        display_name="Acme Owner",
    )
