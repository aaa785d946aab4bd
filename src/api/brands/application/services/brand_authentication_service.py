"""Brand sign-in with API key and API password."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from brands.application.credentials import API_KEY_LENGTH, CredentialIssuer
from brands.application.observability import BrandAccessProbe, DefaultBrandAccessProbe
from brands.domain.value_objects import BrandId
from brands.ports.exceptions import BrandAuthenticationError, BrandNotFoundError
from brands.ports.repositories import IBrandConnectionRouter
from shared_kernel.auth.identity import BrandIdentity

if TYPE_CHECKING:
    from shared_kernel.auth.token_codec import AuthTokenCodec, IssuedToken


@dataclass(frozen=True)
class BrandSession:
    """Result of a successful brand sign-in."""

    token: IssuedToken
    identity: BrandIdentity

    @property
    def expires_in(self) -> int:
        return self.token.expires_in


class BrandAuthenticationService:
    """Authenticates brand users and mints Brand tokens.

    Every failure raises the same ``BrandAuthenticationError`` so callers
    cannot tell which part of the credentials was wrong.
    """

    def __init__(
        self,
        connection_router: IBrandConnectionRouter,
        credential_issuer: CredentialIssuer,
        token_codec: AuthTokenCodec,
        probe: BrandAccessProbe | None = None,
    ) -> None:
        self._connection_router = connection_router
        self._credential_issuer = credential_issuer
        self._token_codec = token_codec
        self._probe = probe or DefaultBrandAccessProbe()

    def _reject(self, brand_id: str, reason: str, api_password: str | None = None) -> BrandAuthenticationError:
        if api_password is not None:
            self._credential_issuer.burn_verification_time(api_password)
        self._probe.brand_sign_in_failed(brand_id, reason)
        return BrandAuthenticationError()

    async def authenticate(self, brand_id: str, api_key: str, api_password: str) -> BrandSession:
        """Verify brand credentials and issue a Brand token.

        Raises:
            BrandAuthenticationError: For an unknown or inactive brand, an
                unknown API key, a wrong password or an inactive user
        """
        try:
            parsed = BrandId.from_string(brand_id)
        except ValueError:
            raise self._reject(brand_id, "malformed_brand_id", api_password)

        try:
            connection = await self._connection_router.resolve(parsed)
        except BrandNotFoundError:
            raise self._reject(parsed.value, "unknown_brand", api_password)

        store = connection.store()
        user = None
        if api_key and len(api_key) <= API_KEY_LENGTH:
            user = await store.get_user_by_api_key(api_key)
        if user is None:
            raise self._reject(parsed.value, "unknown_api_key", api_password)

        if not self._credential_issuer.verify_api_password(api_password, user.api_password_hash):
            raise self._reject(parsed.value, "wrong_password")

        if not user.is_active:
            raise self._reject(parsed.value, "inactive_user")

        await store.record_login(user.id, datetime.now(UTC))

        roles = user.sorted_roles()
        token = self._token_codec.issue_brand_token(
            brand_id=parsed.value,
            brand_schema=connection.schema_name,
            user_id=user.id,
            roles=roles,
            display_name=user.display_name,
        )
        self._probe.brand_signed_in(parsed.value, user.id)
        return BrandSession(
            token=token,
            identity=BrandIdentity(
                brand_id=parsed.value,
                brand_schema=connection.schema_name,
                user_id=user.id,
                roles=tuple(roles),
                display_name=user.display_name,
            ),
        )
