"""Dependency injection for brand services."""

from typing import Annotated

from fastapi import Depends, Request

from brands.application.credentials import CredentialIssuer
from brands.application.provisioning import BrandProvisioner
from brands.application.services import (
    BrandAuthenticationService,
    BrandDataService,
    BrandService,
    CascadeDeletionService,
)
from brands.dependencies.connection import (
    get_brand_connection_cache,
    get_brand_repository,
    get_connection_router,
    get_credential_cipher,
)
from brands.infrastructure.brand_repository import BrandRepository
from brands.infrastructure.connection_router import BrandConnectionRouter
from brands.infrastructure.credential_cipher import CredentialCipher
from brands.infrastructure.schema_manager import PostgresBrandSchemaManager
from iam.dependencies.authentication import get_token_codec
from iam.infrastructure.principal_repository import PrincipalRepository
from infrastructure.database.dependencies import get_admin_engine, get_admin_sessionmaker
from infrastructure.settings import get_brand_settings, get_database_settings
from shared_kernel.auth import AuthTokenCodec


def get_credential_issuer() -> CredentialIssuer:
    return CredentialIssuer()


def get_schema_manager() -> PostgresBrandSchemaManager:
    """Get schema manager on the administrative engine."""
    return PostgresBrandSchemaManager(engine=get_admin_engine())


def get_brand_provisioner(
    brand_repository: Annotated[BrandRepository, Depends(get_brand_repository)],
    schema_manager: Annotated[PostgresBrandSchemaManager, Depends(get_schema_manager)],
    issuer: Annotated[CredentialIssuer, Depends(get_credential_issuer)],
    cipher: Annotated[CredentialCipher, Depends(get_credential_cipher)],
) -> BrandProvisioner:
    return BrandProvisioner(
        brand_repository=brand_repository,
        schema_manager=schema_manager,
        credential_issuer=issuer,
        cipher=cipher,
        name_max_length=get_brand_settings().name_max_length,
    )


def get_cascade_deletion_service(
    brand_repository: Annotated[BrandRepository, Depends(get_brand_repository)],
    schema_manager: Annotated[PostgresBrandSchemaManager, Depends(get_schema_manager)],
    router: Annotated[BrandConnectionRouter, Depends(get_connection_router)],
) -> CascadeDeletionService:
    return CascadeDeletionService(
        brand_repository=brand_repository,
        schema_manager=schema_manager,
        connection_router=router,
        session_factory=get_admin_sessionmaker(),
        principal_repository_factory=lambda session: PrincipalRepository(session=session),
    )


def build_cascade_deletion_service(request: Request) -> CascadeDeletionService:
    """Build the cascade outside FastAPI's resolver.

    Registered with IAM at startup as the owned-brands cleaner factory.
    """
    brand_repository = get_brand_repository()
    router = BrandConnectionRouter(
        cache=get_brand_connection_cache(request),
        brand_repository=brand_repository,
        cipher=get_credential_cipher(),
        database_settings=get_database_settings(),
        pool_size=get_brand_settings().brand_pool_size,
    )
    return get_cascade_deletion_service(
        brand_repository=brand_repository,
        schema_manager=get_schema_manager(),
        router=router,
    )


def get_brand_service(
    brand_repository: Annotated[BrandRepository, Depends(get_brand_repository)],
    provisioner: Annotated[BrandProvisioner, Depends(get_brand_provisioner)],
    deletion_service: Annotated[CascadeDeletionService, Depends(get_cascade_deletion_service)],
) -> BrandService:
    """Get BrandService for principal-facing brand management."""
    return BrandService(
        brand_repository=brand_repository,
        provisioner=provisioner,
        deletion_service=deletion_service,
    )


def get_brand_authentication_service(
    router: Annotated[BrandConnectionRouter, Depends(get_connection_router)],
    issuer: Annotated[CredentialIssuer, Depends(get_credential_issuer)],
    token_codec: Annotated[AuthTokenCodec, Depends(get_token_codec)],
) -> BrandAuthenticationService:
    return BrandAuthenticationService(
        connection_router=router,
        credential_issuer=issuer,
        token_codec=token_codec,
    )


def get_brand_data_service(
    router: Annotated[BrandConnectionRouter, Depends(get_connection_router)],
    brand_repository: Annotated[BrandRepository, Depends(get_brand_repository)],
) -> BrandDataService:
    return BrandDataService(
        connection_router=router,
        brand_repository=brand_repository,
        name_max_length=get_brand_settings().name_max_length,
    )
