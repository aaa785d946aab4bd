"""Pydantic models for principal-facing brand requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from brands.domain.aggregates import Brand
from shared_kernel.api_models import MutationResponse


class CreateBrandRequest(BaseModel):
    """Request model for creating a brand."""

    name: str = Field(..., description="Brand display name", min_length=1, max_length=255)


class DeleteBrandRequest(BaseModel):
    """Request model for deleting a brand.

    The confirmation must read ``DELETE <brand_id>``. A missing value is
    reported as a validation failure by the service, not by the schema.
    """

    confirmation: str | None = Field(
        None, description="Confirmation phrase: DELETE <brand_id>", max_length=100
    )


class BrandSignInRequest(BaseModel):
    """Request model for brand sign-in."""

    brand_id: str = Field(..., description="Brand ID (UUID)", min_length=1, max_length=64)
    api_key: str = Field(..., description="API key", min_length=1, max_length=64)
    api_password: str = Field(..., description="API password", min_length=1, max_length=128)


class BrandResponse(BaseModel):
    """Response model for a brand registry entry."""

    id: str = Field(..., description="Brand ID (UUID)")
    name: str = Field(..., description="Display name")
    owner_id: str = Field(..., description="Owning principal ID")
    schema_name: str = Field(..., description="Database schema holding the brand's data")
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, brand: Brand) -> BrandResponse:
        """Convert domain Brand aggregate to API response.

        The database user and its encrypted password are never exposed.
        """
        return cls(
            id=brand.id.value,
            name=brand.name,
            owner_id=brand.owner_id.value,
            schema_name=brand.schema_name,
            is_active=brand.is_active,
            created_at=brand.created_at,
            updated_at=brand.updated_at,
        )


class BrandListResponse(BaseModel):
    """Response model for the caller's brands."""

    brands: list[BrandResponse]
    count: int


class BrandCreatedResponse(MutationResponse):
    """Response model for a newly provisioned brand.

    The API password is shown exactly once and cannot be retrieved again.
    """

    brand: BrandResponse
    api_key: str = Field(..., description="Owner API key")
    api_password: str = Field(..., description="Owner API password (shown once)")


class BrandDeletedResponse(MutationResponse):
    """Response model for brand deletion."""

    brand_id: str


class BrandTokenResponse(MutationResponse):
    """Response model for a successful brand sign-in."""

    access_token: str = Field(..., description="Brand token")
    token_type: Literal["bearer"] = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    brand_id: str
    user_id: str
    roles: list[str]
