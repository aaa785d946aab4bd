"""HTTP routes for creating, listing, deleting and signing in to brands."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from brands.application.services import BrandAuthenticationService, BrandService
from brands.dependencies.brand import get_brand_authentication_service, get_brand_service
from brands.ports.exceptions import (
    BrandAccessDeniedError,
    BrandAuthenticationError,
    BrandConflictError,
    BrandDeprovisioningError,
    BrandNotFoundError,
    BrandOwnerNotFoundError,
    BrandProvisioningError,
)
from brands.presentation.brands.models import (
    BrandCreatedResponse,
    BrandDeletedResponse,
    BrandListResponse,
    BrandResponse,
    BrandSignInRequest,
    BrandTokenResponse,
    CreateBrandRequest,
    DeleteBrandRequest,
)
from iam.dependencies.authentication import is_super_admin, require_principal
from iam.domain.value_objects import PrincipalId
from shared_kernel.auth import PrincipalIdentity
from shared_kernel.errors import DomainValidationError

router = APIRouter(
    prefix="/brands",
    tags=["brands"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
)
async def create_brand(
    request: CreateBrandRequest,
    current_principal: Annotated[PrincipalIdentity, Depends(require_principal)],
    service: Annotated[BrandService, Depends(get_brand_service)],
) -> BrandCreatedResponse:
    """Provision a new brand owned by the caller.

    Args:
        request: Brand display name
        current_principal: Authenticated principal (becomes the owner)
        service: Brand service

    Returns:
        BrandCreatedResponse with the owner's one-time API credentials

    Raises:
        HTTPException: 400 if the name is invalid
        HTTPException: 409 if the brand namespace already exists
        HTTPException: 500 if provisioning failed and was rolled back
    """
    try:
        provisioned = await service.create_brand(
            owner_id=PrincipalId(value=current_principal.principal_id),
            name=request.name,
        )
        return BrandCreatedResponse(
            success=True,
            message="Brand created. Store the API password now; it cannot be shown again.",
            brand=BrandResponse.from_domain(provisioned.brand),
            api_key=provisioned.api_key,
            api_password=provisioned.api_password,
        )

    except DomainValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except BrandConflictError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Brand already exists",
        )
    except BrandOwnerNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found",
        )
    except BrandProvisioningError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Brand could not be created",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create brand",
        )


@router.get("")
async def list_brands(
    current_principal: Annotated[PrincipalIdentity, Depends(require_principal)],
    service: Annotated[BrandService, Depends(get_brand_service)],
) -> BrandListResponse:
    """List the brands owned by the caller, oldest first."""
    try:
        brands = await service.list_brands(PrincipalId(value=current_principal.principal_id))
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list brands",
        )
    return BrandListResponse(
        brands=[BrandResponse.from_domain(brand) for brand in brands],
        count=len(brands),
    )


@router.get("/{brand_id}")
async def get_brand(
    brand_id: str,
    current_principal: Annotated[PrincipalIdentity, Depends(require_principal)],
    service: Annotated[BrandService, Depends(get_brand_service)],
) -> BrandResponse:
    """Get one brand the caller owns (any brand for SuperAdmins).

    Raises:
        HTTPException: 404 if the brand does not exist or is not visible
    """
    try:
        brand = await service.get_brand(
            brand_id,
            requester_id=PrincipalId(value=current_principal.principal_id),
            is_super_admin=is_super_admin(current_principal),
        )
    except BrandNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Brand not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get brand",
        )
    return BrandResponse.from_domain(brand)


@router.delete("/{brand_id}")
async def delete_brand(
    brand_id: str,
    current_principal: Annotated[PrincipalIdentity, Depends(require_principal)],
    service: Annotated[BrandService, Depends(get_brand_service)],
    request: DeleteBrandRequest | None = None,
) -> BrandDeletedResponse:
    """Delete a brand with its schema, database role and registry entry.

    Args:
        brand_id: Brand to delete
        request: Confirmation phrase ``DELETE <brand_id>``
        current_principal: Owner of the brand, or a SuperAdmin
        service: Brand service

    Raises:
        HTTPException: 400 if the confirmation is missing or wrong
        HTTPException: 403 if the caller may not delete the brand
        HTTPException: 404 if the brand does not exist
        HTTPException: 500 if the schema or role could not be dropped
    """
    try:
        brand = await service.delete_brand(
            brand_id,
            requester_id=PrincipalId(value=current_principal.principal_id),
            confirmation=request.confirmation if request else None,
            is_super_admin=is_super_admin(current_principal),
        )
        return BrandDeletedResponse(
            success=True,
            message="Brand deleted",
            brand_id=brand.id.value,
        )

    except DomainValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except BrandAccessDeniedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to delete this brand",
        )
    except BrandNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Brand not found",
        )
    except BrandDeprovisioningError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Brand could not be fully deleted; it has been deactivated",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete brand",
        )


@router.post("/auth/sign-in")
async def sign_in(
    request: BrandSignInRequest,
    service: Annotated[BrandAuthenticationService, Depends(get_brand_authentication_service)],
) -> BrandTokenResponse:
    """Sign in to a brand with API key and password, returning a Brand token.

    Raises:
        HTTPException: 401 for any credential failure (message is generic)
    """
    try:
        session = await service.authenticate(
            brand_id=request.brand_id,
            api_key=request.api_key,
            api_password=request.api_password,
        )
    except BrandAuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid brand credentials",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sign in",
        )

    return BrandTokenResponse(
        success=True,
        message="Signed in",
        access_token=session.token.token,
        expires_in=session.expires_in,
        brand_id=session.identity.brand_id,
        user_id=session.identity.user_id,
        roles=list(session.identity.roles),
    )
