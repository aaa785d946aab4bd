"""Signed token issuing and decoding for both authentication contexts.

Principal tokens and Brand tokens share one signing key and one lifetime
policy, and differ in their claim sets. The ``token_type`` claim tells them
apart; brand tokens carry both the ``brand_*`` and the ``tenant_*`` spelling
of their scope claims. These claim names are a wire contract and must stay
stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Callable, Iterable

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

from shared_kernel.auth.identity import (
    AnonymousIdentity,
    BrandIdentity,
    Identity,
    PrincipalIdentity,
    TokenType,
)
from shared_kernel.auth.observability import DefaultTokenCodecProbe
from shared_kernel.errors import AuthenticationError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import TokenCodecProbe

TOKEN_TYPE_CLAIM = "token_type"
BRAND_ID_CLAIM = "brand_id"
TENANT_ID_CLAIM = "tenant_id"
BRAND_SCHEMA_CLAIM = "brand_schema"
TENANT_SCHEMA_CLAIM = "tenant_schema"

DEFAULT_ALGORITHM = "HS256"


class InvalidTokenError(AuthenticationError):
    """Raised when a token fails signature, expiry or claim checks."""

    pass


@dataclass(frozen=True)
class IssuedToken:
    """A freshly minted token with its expiry."""

    token: str
    expires_at: datetime

    @property
    def expires_in(self) -> int:
        """Lifetime in seconds, as reported to clients."""
        remaining = self.expires_at - datetime.now(UTC)
        return max(int(remaining.total_seconds()), 0)


class AuthTokenCodec:
    """Mints and verifies HS256 tokens for Principal and Brand identities.

    The codec is stateless apart from its signing key, so one instance can be
    shared by every request.
    """

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        lifetime: timedelta,
        probe: TokenCodecProbe | None = None,
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the codec.

        Args:
            secret: Symmetric signing key.
            issuer: Value of the ``iss`` claim, verified on decode.
            audience: Value of the ``aud`` claim, verified on decode.
            lifetime: Token lifetime applied to both token types.
            probe: Observability probe for logging events.
            algorithm: JWS algorithm (default: HS256).
            clock: Source of the current time, for tests.
        """
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._lifetime = lifetime
        self._probe = probe or DefaultTokenCodecProbe()
        self._algorithm = algorithm
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue_principal_token(
        self,
        principal_id: str,
        email: str,
        roles: Iterable[str],
    ) -> IssuedToken:
        """Mint a token for a system-level principal.

        No brand claims are included.
        """
        claims = {
            "sub": principal_id,
            "email": email,
            "roles": list(roles),
            TOKEN_TYPE_CLAIM: TokenType.PRINCIPAL.value,
        }
        issued = self._encode(claims)
        self._probe.token_issued(
            token_type=TokenType.PRINCIPAL.value, subject=principal_id
        )
        return issued

    def issue_brand_token(
        self,
        brand_id: str,
        brand_schema: str,
        user_id: str,
        roles: Iterable[str],
        display_name: str | None = None,
    ) -> IssuedToken:
        """Mint a token scoped to a single brand."""
        claims: dict[str, Any] = {
            "sub": user_id,
            "roles": list(roles),
            TOKEN_TYPE_CLAIM: TokenType.BRAND.value,
            BRAND_ID_CLAIM: brand_id,
            TENANT_ID_CLAIM: brand_id,
            BRAND_SCHEMA_CLAIM: brand_schema,
            TENANT_SCHEMA_CLAIM: brand_schema,
        }
        if display_name:
            claims["display_name"] = display_name
        issued = self._encode(claims)
        self._probe.token_issued(token_type=TokenType.BRAND.value, subject=user_id)
        return issued

    def decode(self, token: str) -> dict[str, Any]:
        """Verify a token and return its claims.

        Raises:
            InvalidTokenError: If the token is malformed, expired, has a bad
                signature, or carries the wrong issuer or audience.
        """
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "verify_signature": True,
                    "verify_aud": True,
                    "verify_iss": True,
                    "verify_exp": True,
                    "verify_iat": True,
                    "require_exp": True,
                    "require_sub": True,
                },
            )
        except ExpiredSignatureError as e:
            self._probe.token_rejected(reason="Token expired")
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            self._probe.token_rejected(reason=f"Claims error: {e}")
            raise InvalidTokenError("Invalid token claims") from e
        except JWTError as e:
            self._probe.token_rejected(reason=f"JWT error: {e}")
            raise InvalidTokenError("Invalid token") from e

    def to_identity(self, claims: dict[str, Any]) -> Identity:
        """Build the identity variant selected by the ``token_type`` claim.

        A missing ``token_type`` is treated as a Principal token. Brand tokens
        missing their scope claims, or unknown token types, yield an
        anonymous identity.
        """
        subject = str(claims.get("sub", ""))
        roles = tuple(str(r) for r in claims.get("roles") or ())
        token_type = claims.get(TOKEN_TYPE_CLAIM) or TokenType.PRINCIPAL.value

        if token_type == TokenType.PRINCIPAL.value:
            return PrincipalIdentity(
                principal_id=subject,
                email=str(claims.get("email", "")),
                roles=roles,
            )

        if token_type == TokenType.BRAND.value:
            brand_id = claims.get(BRAND_ID_CLAIM) or claims.get(TENANT_ID_CLAIM)
            brand_schema = claims.get(BRAND_SCHEMA_CLAIM) or claims.get(
                TENANT_SCHEMA_CLAIM
            )
            if not brand_id or not brand_schema:
                self._probe.token_rejected(reason="Brand token missing scope claims")
                return AnonymousIdentity(reason="incomplete brand token")
            return BrandIdentity(
                brand_id=str(brand_id),
                brand_schema=str(brand_schema),
                user_id=subject,
                roles=roles,
                display_name=claims.get("display_name"),
            )

        self._probe.token_rejected(reason=f"Unknown token type: {token_type}")
        return AnonymousIdentity(reason="unknown token type")

    def _encode(self, claims: dict[str, Any]) -> IssuedToken:
        now = self._clock()
        expires_at = now + self._lifetime
        payload = {
            **claims,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, expires_at=expires_at)
