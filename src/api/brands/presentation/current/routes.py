"""HTTP routes acting on the brand named in the caller's Brand token.

None of these routes take a brand id. The brand is always the one the
token was issued for.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from brands.application.services import BrandDataService
from brands.dependencies.brand import get_brand_data_service
from brands.domain.value_objects import EntryStore
from brands.ports.exceptions import BrandAccessDeniedError, BrandNotFoundError
from brands.presentation.current.models import (
    BrandHealthResponse,
    EntryListResponse,
    EntryResponse,
    EntryUpdatedResponse,
    UpdateEntryRequest,
)
from iam.dependencies.authentication import require_brand
from shared_kernel.auth import BrandIdentity
from shared_kernel.errors import DomainValidationError

router = APIRouter(
    prefix="/brand",
    tags=["brand"],
)

CurrentBrand = Annotated[BrandIdentity, Depends(require_brand)]
DataService = Annotated[BrandDataService, Depends(get_brand_data_service)]


async def _list_entries(
    identity: BrandIdentity, service: BrandDataService, store: EntryStore
) -> EntryListResponse:
    try:
        entries = await service.list_entries(identity, store)
    except BrandNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Brand not found",
        )
    except BrandAccessDeniedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to read brand {store.value}",
        )
    return EntryListResponse(
        brand_id=identity.brand_id,
        entries=[EntryResponse.from_domain(entry) for entry in entries],
    )


async def _update_entry(
    identity: BrandIdentity,
    service: BrandDataService,
    store: EntryStore,
    request: UpdateEntryRequest,
) -> EntryUpdatedResponse:
    try:
        entry = await service.update_entry(identity, store, request.key, request.value)
    except DomainValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except BrandAccessDeniedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only brand owners may change brand data",
        )
    except BrandNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Brand not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update brand {store.value}",
        )
    return EntryUpdatedResponse(
        success=True,
        message=f"{store.value.capitalize()} updated",
        entry=EntryResponse.from_domain(entry),
    )


@router.get("/info")
async def get_info(identity: CurrentBrand, service: DataService) -> EntryListResponse:
    """Return every info entry of the caller's brand."""
    return await _list_entries(identity, service, EntryStore.INFO)


@router.put("/info")
async def update_info(
    request: UpdateEntryRequest, identity: CurrentBrand, service: DataService
) -> EntryUpdatedResponse:
    """Write one info entry. Requires the Owner role.

    Writing ``Brand Name`` also renames the brand.
    """
    return await _update_entry(identity, service, EntryStore.INFO, request)


@router.get("/config")
async def get_config(identity: CurrentBrand, service: DataService) -> EntryListResponse:
    return await _list_entries(identity, service, EntryStore.CONFIG)


@router.put("/config")
async def update_config(
    request: UpdateEntryRequest, identity: CurrentBrand, service: DataService
) -> EntryUpdatedResponse:
    return await _update_entry(identity, service, EntryStore.CONFIG, request)


@router.get("/health")
async def brand_health(identity: CurrentBrand, service: DataService) -> BrandHealthResponse:
    """Check that the brand's database role can reach its schema.

    Raises:
        HTTPException: 503 if the check fails
    """
    try:
        healthy = await service.check_health(identity)
    except BrandNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Brand not found",
        )
    except BrandAccessDeniedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Brand database unavailable",
        )

    if not healthy:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Brand database unavailable",
        )
    return BrandHealthResponse(brand_id=identity.brand_id, healthy=True)
