"""Pydantic models for principal API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from iam.domain.aggregates import Principal
from shared_kernel.api_models import MutationResponse
from shared_kernel.auth import BrandIdentity, PrincipalIdentity


class SignUpRequest(BaseModel):
    """Request model for registering a principal."""

    email: str = Field(..., description="Email address", min_length=3, max_length=255)
    password: str = Field(
        ...,
        description="Password (8+ chars, upper, lower and digit)",
        min_length=8,
        max_length=72,
    )
    full_name: str = Field(..., description="Display name", min_length=1, max_length=255)


class SignInRequest(BaseModel):
    """Request model for principal sign-in."""

    email: str = Field(..., description="Email address", min_length=1, max_length=255)
    password: str = Field(..., description="Password", min_length=1, max_length=1024)


class DeleteAccountRequest(BaseModel):
    """Request model for deleting the caller's own account."""

    password: str = Field(
        ..., description="Current password, as confirmation", min_length=1
    )


class PrincipalResponse(BaseModel):
    """Response model for a principal."""

    id: str = Field(..., description="Principal ID (ULID format)")
    email: str = Field(..., description="Email address")
    full_name: str = Field(..., description="Display name")
    roles: list[str] = Field(..., description="System roles")
    last_login_at: datetime | None = Field(None, description="Last sign-in time")
    created_at: datetime = Field(..., description="Registration time")

    @classmethod
    def from_domain(cls, principal: Principal) -> PrincipalResponse:
        """Convert domain Principal aggregate to API response.

        Args:
            principal: Principal domain aggregate

        Returns:
            PrincipalResponse
        """
        return cls(
            id=principal.id.value,
            email=principal.email.value,
            full_name=principal.full_name,
            roles=principal.sorted_roles(),
            last_login_at=principal.last_login_at,
            created_at=principal.created_at,
        )


class PrincipalCreatedResponse(MutationResponse):
    """Response model for a successful sign-up."""

    principal: PrincipalResponse


class PrincipalTokenResponse(MutationResponse):
    """Response model for a successful principal sign-in."""

    access_token: str = Field(..., description="Principal token")
    token_type: Literal["bearer"] = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    principal: PrincipalResponse


class AccountDeletedResponse(MutationResponse):
    """Response model for account deletion."""

    brands_deleted: int = Field(..., description="Brands deleted with the account")


class IdentityResponse(BaseModel):
    """Response model describing the caller's resolved identity."""

    kind: Literal["Principal", "Brand"]
    subject: str = Field(..., description="Principal ID or brand-local user ID")
    roles: list[str]
    email: str | None = None
    brand_id: str | None = None
    brand_schema: str | None = None

    @classmethod
    def from_identity(cls, identity: PrincipalIdentity | BrandIdentity) -> IdentityResponse:
        """Describe either identity variant."""
        if isinstance(identity, PrincipalIdentity):
            return cls(
                kind="Principal",
                subject=identity.principal_id,
                roles=list(identity.roles),
                email=identity.email,
            )
        return cls(
            kind="Brand",
            subject=identity.user_id,
            roles=list(identity.roles),
            brand_id=identity.brand_id,
            brand_schema=identity.brand_schema,
        )
