"""HTTP routes for principal accounts."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import PrincipalService
from iam.dependencies.authentication import require_authenticated, require_principal
from iam.dependencies.principal import (
    get_account_deletion_service,
    get_principal_service,
)
from iam.domain.value_objects import PrincipalId
from iam.ports.exceptions import (
    AccountDeletionError,
    DuplicateEmailError,
    InvalidCredentialsError,
    PrincipalNotFoundError,
)
from iam.presentation.principals.models import (
    AccountDeletedResponse,
    DeleteAccountRequest,
    IdentityResponse,
    PrincipalCreatedResponse,
    PrincipalResponse,
    PrincipalTokenResponse,
    SignInRequest,
    SignUpRequest,
)
from shared_kernel.auth import BrandIdentity, PrincipalIdentity
from shared_kernel.errors import DomainValidationError

router = APIRouter(tags=["principals"])


@router.post(
    "/principals",
    status_code=status.HTTP_201_CREATED,
)
async def sign_up(
    request: SignUpRequest,
    service: Annotated[PrincipalService, Depends(get_principal_service)],
) -> PrincipalCreatedResponse:
    """Register a new principal account.

    Args:
        request: Email, password and display name
        service: Principal service

    Returns:
        PrincipalCreatedResponse with the new account

    Raises:
        HTTPException: 400 if the email or password is invalid
        HTTPException: 409 if the email is already registered
        HTTPException: 500 for unexpected errors
    """
    try:
        principal = await service.register(
            email=request.email,
            password=request.password,
            full_name=request.full_name,
        )
        return PrincipalCreatedResponse(
            success=True,
            message="Account created",
            principal=PrincipalResponse.from_domain(principal),
        )

    except DomainValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except DuplicateEmailError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create account",
        )


@router.post("/auth/sign-in")
async def sign_in(
    request: SignInRequest,
    service: Annotated[PrincipalService, Depends(get_principal_service)],
) -> PrincipalTokenResponse:
    """Sign in with email and password and receive a Principal token.

    Raises:
        HTTPException: 401 if the credentials do not verify
        HTTPException: 500 for unexpected errors
    """
    try:
        session = await service.sign_in(email=request.email, password=request.password)
        return PrincipalTokenResponse(
            success=True,
            message="Signed in",
            access_token=session.token.token,
            expires_in=session.token.expires_in,
            principal=PrincipalResponse.from_domain(session.principal),
        )

    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sign in",
        )


@router.get("/me")
async def who_am_i(
    identity: Annotated[
        PrincipalIdentity | BrandIdentity, Depends(require_authenticated)
    ],
) -> IdentityResponse:
    """Describe the identity carried by the presented token."""
    return IdentityResponse.from_identity(identity)


@router.get("/me/profile")
async def get_profile(
    identity: Annotated[PrincipalIdentity, Depends(require_principal)],
    service: Annotated[PrincipalService, Depends(get_principal_service)],
) -> PrincipalResponse:
    """Get the caller's principal account.

    Raises:
        HTTPException: 404 if the account no longer exists
        HTTPException: 500 for unexpected errors
    """
    try:
        principal = await service.get_principal(
            PrincipalId.from_string(identity.principal_id)
        )
        return PrincipalResponse.from_domain(principal)

    except (PrincipalNotFoundError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve account",
        )


@router.post("/me/delete")
async def delete_account(
    request: DeleteAccountRequest,
    identity: Annotated[PrincipalIdentity, Depends(require_principal)],
    service: Annotated[PrincipalService, Depends(get_account_deletion_service)],
) -> AccountDeletedResponse:
    """Delete the caller's account and every brand it owns.

    The password is re-verified first. If any owned brand cannot be
    deleted, the account is kept.

    Raises:
        HTTPException: 401 if the password does not verify
        HTTPException: 404 if the account no longer exists
        HTTPException: 500 if deletion failed
    """
    try:
        deleted = await service.delete_account(
            principal_id=PrincipalId.from_string(identity.principal_id),
            password=request.password,
        )
        return AccountDeletedResponse(
            success=True,
            message="Account deleted",
            brands_deleted=deleted,
        )

    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )
    except (PrincipalNotFoundError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found",
        )
    except AccountDeletionError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Account could not be deleted; the account was kept",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete account",
        )
