"""Fixtures for brand application service tests."""

from unittest.mock import MagicMock, create_autospec

import pytest

from brands.domain.value_objects import BrandId
from brands.ports.repositories import (
    IBrandConnectionRouter,
    IBrandDataStore,
    IBrandRepository,
)


@pytest.fixture
def brand_id():
    return BrandId.generate()


@pytest.fixture
def mock_store():
    return create_autospec(IBrandDataStore, instance=True)


@pytest.fixture
def mock_connection(brand_id, mock_store):
    """A routed connection for ``brand_id``."""
    connection = MagicMock()
    connection.brand_id = brand_id
    connection.schema_name = brand_id.schema_name
    connection.store.return_value = mock_store
    return connection


@pytest.fixture
def mock_router(mock_connection):
    router = create_autospec(IBrandConnectionRouter, instance=True)
    router.resolve.return_value = mock_connection
    return router


@pytest.fixture
def mock_brand_repository():
    return create_autospec(IBrandRepository, instance=True)
