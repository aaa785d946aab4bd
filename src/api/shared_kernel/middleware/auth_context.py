"""Per-request identity resolution.

Decodes the bearer token (if any) and turns it into one of the identity
variants. Resolution never fails a request: anything that does not verify
becomes an ``AnonymousIdentity`` and the route dependencies decide whether
anonymous callers are acceptable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from starlette.datastructures import Headers

from shared_kernel.auth.identity import AnonymousIdentity, Identity
from shared_kernel.auth.token_codec import InvalidTokenError
from shared_kernel.middleware.observability import DefaultAuthContextProbe

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from shared_kernel.auth.token_codec import AuthTokenCodec
    from shared_kernel.middleware.observability import AuthContextProbe

IDENTITY_STATE_KEY = "identity"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def resolve_identity(
    authorization: str | None,
    codec: AuthTokenCodec,
    probe: AuthContextProbe | None = None,
) -> Identity:
    """Resolve an Authorization header value to an identity.

    Args:
        authorization: Raw header value, or None if absent.
        codec: Token codec used to verify the token.
        probe: Optional domain probe for observability.

    Returns:
        PrincipalIdentity, BrandIdentity or AnonymousIdentity.
    """
    probe = probe or DefaultAuthContextProbe()

    token = extract_bearer_token(authorization)
    if token is None:
        return AnonymousIdentity()

    try:
        claims = codec.decode(token)
    except InvalidTokenError as e:
        probe.anonymous_request(reason=str(e))
        return AnonymousIdentity(reason=str(e))

    identity = codec.to_identity(claims)
    probe.identity_resolved(kind=identity.kind.value)
    return identity


class AuthContextMiddleware:
    """ASGI middleware attaching the resolved identity to request state.

    The codec is obtained through a factory on each request so that settings
    (and test overrides) are read lazily.
    """

    def __init__(
        self,
        app: ASGIApp,
        codec_factory: Callable[[], AuthTokenCodec],
        probe: AuthContextProbe | None = None,
    ) -> None:
        self._app = app
        self._codec_factory = codec_factory
        self._probe = probe or DefaultAuthContextProbe()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        identity = resolve_identity(
            headers.get("authorization"),
            codec=self._codec_factory(),
            probe=self._probe,
        )
        scope.setdefault("state", {})[IDENTITY_STATE_KEY] = identity
        await self._app(scope, receive, send)
