"""Database dependency injection for FastAPI.

Provides the administrative engine and async sessions with proper
transaction management and connection pooling. Per-brand engines are owned
by the brand connection router, not by this module.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_admin_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

# Module-level probe for observability
_probe = DefaultConnectionProbe()

# Module-level engine instance (created on first use)
_admin_engine: AsyncEngine | None = None

# Module-level sessionmaker instance (created with the engine)
_admin_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_admin_engine() -> AsyncEngine:
    """Get the administrative database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine for administrative operations
    """
    global _admin_engine, _admin_sessionmaker
    if _admin_engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _admin_engine is None:
                settings = get_database_settings()
                _admin_engine = create_admin_engine(settings)
                _admin_sessionmaker = async_sessionmaker(
                    _admin_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.pool_initialized(
                    min_conn=settings.pool_min_connections,
                    max_conn=settings.pool_max_connections,
                )
    return _admin_engine


def get_admin_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the sessionmaker bound to the administrative engine.

    Services that need several independent transactions (the provisioning
    saga commits its registry reservation before any DDL runs) open their
    own sessions from this factory.
    """
    get_admin_engine()
    assert _admin_sessionmaker is not None
    return _admin_sessionmaker


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a write session for mutations (FastAPI dependency).

    The session is configured to NOT auto-commit. Callers must explicitly
    manage transactions using `async with session.begin()`.

    Usage:
        @router.post("/iam/principals")
        async def sign_up(
            session: AsyncSession = Depends(get_write_session)
        ):
            async with session.begin():
                session.add(principal)
                # transaction commits at end of `with` block

    Yields:
        AsyncSession for database operations
    """
    async with get_admin_sessionmaker()() as session:
        yield session


async def close_database_connections() -> None:
    """Close the administrative engine connections.

    Should be called on application shutdown to properly cleanup connections.
    Also resets the sessionmaker to allow reinitialization.
    """
    global _admin_engine, _admin_sessionmaker

    if _admin_engine is not None:
        await _admin_engine.dispose()
        _probe.pool_closed()
        _admin_engine = None
        _admin_sessionmaker = None
