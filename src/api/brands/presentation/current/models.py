"""Pydantic models for brand-scoped requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from brands.domain.aggregates import BrandEntry
from shared_kernel.api_models import MutationResponse


class UpdateEntryRequest(BaseModel):
    """Request model for writing one info or config entry."""

    key: str = Field(..., description="Entry key", min_length=1, max_length=255)
    value: str = Field(..., description="Entry value", max_length=10_000)


class EntryResponse(BaseModel):
    """Response model for one info or config entry."""

    key: str
    value: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, entry: BrandEntry) -> EntryResponse:
        return cls(
            key=entry.key,
            value=entry.value,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class EntryListResponse(BaseModel):
    """Response model for a whole store."""

    brand_id: str
    entries: list[EntryResponse]


class EntryUpdatedResponse(MutationResponse):
    """Response model for a written entry."""

    entry: EntryResponse


class BrandHealthResponse(BaseModel):
    """Response model for the brand connection check."""

    brand_id: str
    healthy: bool
