"""Principal application service for IAM bounded context.

Handles principal sign-up, sign-in (issuing Principal tokens), lookup, and
account deletion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from iam.application.observability import (
    DefaultPrincipalServiceProbe,
    PrincipalServiceProbe,
)
from iam.application.security import (
    burn_verification_time,
    hash_password,
    validate_password_strength,
    verify_password,
)
from iam.domain.aggregates import Principal
from iam.domain.value_objects import EmailAddress, PrincipalId
from iam.ports.exceptions import (
    AccountDeletionError,
    DuplicateEmailError,
    InvalidCredentialsError,
    PrincipalNotFoundError,
)
from iam.ports.repositories import IOwnedBrandsCleaner, IPrincipalRepository
from shared_kernel.errors import DomainValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from shared_kernel.auth.token_codec import AuthTokenCodec, IssuedToken


@dataclass(frozen=True)
class PrincipalSession:
    """Result of a successful principal sign-in."""

    principal: Principal
    token: IssuedToken


class PrincipalService:
    """Application service for principal accounts.

    Owns the transaction boundary for principal writes. Account deletion is
    delegated to an IOwnedBrandsCleaner, which removes every owned brand
    before the principal itself.
    """

    def __init__(
        self,
        principal_repository: IPrincipalRepository,
        session: AsyncSession,
        token_codec: AuthTokenCodec,
        owned_brands_cleaner: IOwnedBrandsCleaner | None = None,
        probe: PrincipalServiceProbe | None = None,
    ):
        """Initialize PrincipalService with dependencies.

        Args:
            principal_repository: Repository for principal persistence
            session: Database session for transaction management
            token_codec: Codec minting Principal tokens
            owned_brands_cleaner: Cascade used by account deletion
            probe: Optional domain probe for observability
        """
        self._principal_repository = principal_repository
        self._session = session
        self._token_codec = token_codec
        self._owned_brands_cleaner = owned_brands_cleaner
        self._probe = probe or DefaultPrincipalServiceProbe()

    async def register(self, email: str, password: str, full_name: str) -> Principal:
        """Create a new principal with the User role.

        Args:
            email: Email address used to sign in
            password: Plaintext password (validated, then hashed)
            full_name: Display name

        Returns:
            The created Principal aggregate

        Raises:
            InvalidEmailError: If the email is malformed
            WeakPasswordError: If the password fails the strength policy
            DuplicateEmailError: If the email is already registered
        """
        validate_password_strength(password)
        if not full_name.strip():
            raise DomainValidationError("Full name must not be empty")

        principal = Principal.create(
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
        )

        try:
            async with self._session.begin():
                await self._principal_repository.save(principal)
        except DuplicateEmailError:
            self._probe.duplicate_email()
            raise

        self._probe.principal_registered(principal.id.value)
        return principal

    async def sign_in(self, email: str, password: str) -> PrincipalSession:
        """Verify email and password and issue a Principal token.

        Unknown emails and wrong passwords fail identically.

        Raises:
            InvalidCredentialsError: If the credentials do not verify
        """
        try:
            address = EmailAddress.parse(email)
        except DomainValidationError:
            burn_verification_time(password)
            self._probe.sign_in_failed(reason="malformed_email")
            raise InvalidCredentialsError()

        async with self._session.begin():
            principal = await self._principal_repository.get_by_email(address)

            if principal is None:
                burn_verification_time(password)
                self._probe.sign_in_failed(reason="unknown_email")
                raise InvalidCredentialsError()

            if not verify_password(password, principal.password_hash):
                self._probe.sign_in_failed(reason="wrong_password")
                raise InvalidCredentialsError()

            principal.record_login()
            await self._principal_repository.save(principal)

        self._probe.principal_signed_in(principal.id.value)
        return PrincipalSession(principal=principal, token=self.issue_token(principal))

    def issue_token(self, principal: Principal) -> IssuedToken:
        """Mint a Principal token (no brand claims)."""
        return self._token_codec.issue_principal_token(
            principal_id=principal.id.value,
            email=principal.email.value,
            roles=principal.sorted_roles(),
        )

    async def get_principal(self, principal_id: PrincipalId) -> Principal:
        """Retrieve a principal.

        Raises:
            PrincipalNotFoundError: If the principal does not exist
        """
        principal = await self._principal_repository.get_by_id(principal_id)
        if principal is None:
            raise PrincipalNotFoundError(f"Principal {principal_id} not found")
        return principal

    async def delete_account(self, principal_id: PrincipalId, password: str) -> int:
        """Delete a principal after re-verifying its password.

        Every owned brand is deleted first; if any of them fails, the
        principal is kept.

        Args:
            principal_id: The principal deleting its own account
            password: Current password, re-entered as confirmation

        Returns:
            Number of brands deleted along with the account

        Raises:
            InvalidCredentialsError: If the password does not verify
            PrincipalNotFoundError: If the principal no longer exists
            AccountDeletionError: If an owned brand could not be deleted
        """
        if self._owned_brands_cleaner is None:
            raise RuntimeError("Account deletion requires an owned brands cleaner")

        async with self._session.begin():
            principal = await self._principal_repository.get_by_id(principal_id)

        if principal is None:
            raise PrincipalNotFoundError(f"Principal {principal_id} not found")

        if not verify_password(password, principal.password_hash):
            self._probe.sign_in_failed(reason="account_deletion_wrong_password")
            raise InvalidCredentialsError("Invalid password")

        try:
            deleted = await self._owned_brands_cleaner.delete_owner(principal_id)
        except AccountDeletionError as e:
            self._probe.account_deletion_failed(principal_id.value, error=str(e))
            raise

        self._probe.account_deleted(principal_id.value, brands_deleted=deleted)
        return deleted
