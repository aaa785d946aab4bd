"""Dependency injection for principal persistence and services."""

from typing import Annotated, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultPrincipalServiceProbe,
    PrincipalServiceProbe,
)
from iam.application.services import PrincipalService
from iam.dependencies.authentication import get_token_codec
from iam.infrastructure.principal_repository import PrincipalRepository
from iam.ports.repositories import IOwnedBrandsCleaner
from infrastructure.database.dependencies import get_write_session
from shared_kernel.auth import AuthTokenCodec

# Module-level factory for the owned-brands cascade (registered at startup).
# IAM does not know how brands are deleted; the application wires it in.
_owned_brands_cleaner_factory: Callable[[Request], IOwnedBrandsCleaner] | None = None


def set_owned_brands_cleaner_factory(
    factory: Callable[[Request], IOwnedBrandsCleaner] | None,
) -> None:
    """Register the factory building the owned-brands cascade.

    Args:
        factory: Callable receiving the current request
    """
    global _owned_brands_cleaner_factory
    _owned_brands_cleaner_factory = factory


def get_owned_brands_cleaner(request: Request) -> IOwnedBrandsCleaner:
    """Build the owned-brands cascade for this request.

    Raises:
        RuntimeError: If no factory was registered at startup
    """
    if _owned_brands_cleaner_factory is None:
        raise RuntimeError(
            "Owned brands cleaner not configured. Ensure app startup completed successfully."
        )
    return _owned_brands_cleaner_factory(request)


def get_principal_service_probe() -> PrincipalServiceProbe:
    """Get PrincipalServiceProbe instance.

    Returns:
        DefaultPrincipalServiceProbe instance for observability
    """
    return DefaultPrincipalServiceProbe()


def get_principal_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> PrincipalRepository:
    """Get PrincipalRepository instance.

    Args:
        session: Async database session

    Returns:
        PrincipalRepository instance
    """
    return PrincipalRepository(session=session)


def get_principal_service(
    principal_repo: Annotated[PrincipalRepository, Depends(get_principal_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    token_codec: Annotated[AuthTokenCodec, Depends(get_token_codec)],
    probe: Annotated[PrincipalServiceProbe, Depends(get_principal_service_probe)],
) -> PrincipalService:
    """Get PrincipalService instance for sign-up, sign-in and lookups.

    Args:
        principal_repo: Principal repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        token_codec: Codec minting Principal tokens
        probe: Principal service probe for observability

    Returns:
        PrincipalService instance
    """
    return PrincipalService(
        principal_repository=principal_repo,
        session=session,
        token_codec=token_codec,
        probe=probe,
    )


def get_account_deletion_service(
    principal_repo: Annotated[PrincipalRepository, Depends(get_principal_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    token_codec: Annotated[AuthTokenCodec, Depends(get_token_codec)],
    probe: Annotated[PrincipalServiceProbe, Depends(get_principal_service_probe)],
    cleaner: Annotated[IOwnedBrandsCleaner, Depends(get_owned_brands_cleaner)],
) -> PrincipalService:
    """Get PrincipalService wired with the owned-brands cascade.

    Returns:
        PrincipalService instance able to delete accounts
    """
    return PrincipalService(
        principal_repository=principal_repo,
        session=session,
        token_codec=token_codec,
        owned_brands_cleaner=cleaner,
        probe=probe,
    )
