"""Dependency injection for brand connection routing.

The connection cache lives on ``app.state`` and is created by the
application lifespan. Routers, repositories and ciphers are cheap and
built per request around it.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from brands.infrastructure.brand_repository import BrandRepository
from brands.infrastructure.connection_router import (
    BrandConnectionCache,
    BrandConnectionRouter,
)
from brands.infrastructure.credential_cipher import CredentialCipher
from infrastructure.database.dependencies import get_admin_sessionmaker
from infrastructure.settings import get_brand_settings, get_database_settings

BRAND_CONNECTION_CACHE_STATE_KEY = "brand_connection_cache"


def get_brand_connection_cache(request: Request) -> BrandConnectionCache:
    """Get the application-wide brand connection cache.

    Raises:
        RuntimeError: If the application lifespan did not create it
    """
    cache = getattr(request.app.state, BRAND_CONNECTION_CACHE_STATE_KEY, None)
    if cache is None:
        raise RuntimeError(
            "Brand connection cache not configured. Ensure app startup completed successfully."
        )
    return cache


@lru_cache
def get_credential_cipher() -> CredentialCipher:
    """Get cached credential cipher keyed from brand settings."""
    settings = get_brand_settings()
    return CredentialCipher(settings.credential_key.get_secret_value())


def get_brand_repository() -> BrandRepository:
    """Get BrandRepository on the administrative sessionmaker."""
    return BrandRepository(session_factory=get_admin_sessionmaker())


def get_connection_router(
    cache: Annotated[BrandConnectionCache, Depends(get_brand_connection_cache)],
    brand_repository: Annotated[BrandRepository, Depends(get_brand_repository)],
    cipher: Annotated[CredentialCipher, Depends(get_credential_cipher)],
) -> BrandConnectionRouter:
    """Get a router over the shared connection cache."""
    return BrandConnectionRouter(
        cache=cache,
        brand_repository=brand_repository,
        cipher=cipher,
        database_settings=get_database_settings(),
        pool_size=get_brand_settings().brand_pool_size,
    )
