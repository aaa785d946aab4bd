"""Identity dependencies shared by every bounded context's routes.

The auth context middleware resolves the identity once per request; these
dependencies read it back and enforce which identity variant a route
accepts. Principal and Brand identities never stand in for one another.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from iam.domain.value_objects import PrincipalRole
from infrastructure.settings import get_auth_settings
from shared_kernel.auth import (
    AnonymousIdentity,
    AuthTokenCodec,
    BrandIdentity,
    Identity,
    PrincipalIdentity,
)
from shared_kernel.middleware.auth_context import IDENTITY_STATE_KEY, resolve_identity

# Bearer scheme for Swagger UI's Authorize button. Verification happens in
# the middleware, not here.
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_token_codec() -> AuthTokenCodec:
    """Get cached token codec.

    Uses lru_cache so a single codec instance is shared by the middleware,
    the principal service and the brand authentication service.

    Returns:
        AuthTokenCodec configured from auth settings.
    """
    settings = get_auth_settings()
    return AuthTokenCodec(
        secret=settings.jwt_secret.get_secret_value(),
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        lifetime=timedelta(minutes=settings.token_lifetime_minutes),
    )


def get_identity(
    request: Request,
    codec: Annotated[AuthTokenCodec, Depends(get_token_codec)],
) -> Identity:
    """Return the identity resolved for this request.

    Falls back to resolving the Authorization header directly when the
    middleware is not installed (e.g. a router mounted on a bare app).
    """
    identity = getattr(request.state, IDENTITY_STATE_KEY, None)
    if identity is None:
        identity = resolve_identity(request.headers.get("authorization"), codec)
    return identity


def _authentication_required() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_principal(
    identity: Annotated[Identity, Depends(get_identity)],
    _: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> PrincipalIdentity:
    """Require a Principal token.

    Raises:
        HTTPException: 401 if anonymous, 403 if a Brand token was presented
    """
    if isinstance(identity, PrincipalIdentity):
        return identity
    if isinstance(identity, AnonymousIdentity):
        raise _authentication_required()
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="This operation requires a principal token",
    )


def require_brand(
    identity: Annotated[Identity, Depends(get_identity)],
    _: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> BrandIdentity:
    """Require a Brand token.

    Raises:
        HTTPException: 401 if anonymous, 403 if a Principal token was presented
    """
    if isinstance(identity, BrandIdentity):
        return identity
    if isinstance(identity, AnonymousIdentity):
        raise _authentication_required()
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="This operation requires a brand token",
    )


def require_authenticated(
    identity: Annotated[Identity, Depends(get_identity)],
    _: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> PrincipalIdentity | BrandIdentity:
    """Accept either a Principal or a Brand token.

    Raises:
        HTTPException: 401 if anonymous
    """
    if isinstance(identity, AnonymousIdentity):
        raise _authentication_required()
    return identity


def is_super_admin(identity: PrincipalIdentity) -> bool:
    """Whether a principal identity carries the SuperAdmin role."""
    return identity.has_role(PrincipalRole.SUPER_ADMIN.value)
