"""Unit tests for PrincipalService."""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from iam.application.security import hash_password
from iam.domain.aggregates import Principal
from iam.domain.exceptions import InvalidEmailError, WeakPasswordError
from iam.domain.value_objects import PrincipalId
from iam.ports.exceptions import (
    AccountDeletionError,
    DuplicateEmailError,
    InvalidCredentialsError,
    PrincipalNotFoundError,
)
from iam.ports.repositories import IOwnedBrandsCleaner, IPrincipalRepository

PASSWORD = "Sturdy-Pass1"


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support."""
    session = AsyncMock()
    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    return session


@pytest.fixture
def mock_principal_repository():
    """Create mock principal repository."""
    return create_autospec(IPrincipalRepository, instance=True)


@pytest.fixture
def mock_cleaner():
    """Create mock owned brands cleaner."""
    return create_autospec(IOwnedBrandsCleaner, instance=True)


@pytest.fixture
def mock_probe():
    """Create mock principal service probe."""
    from iam.application.observability import PrincipalServiceProbe

    return create_autospec(PrincipalServiceProbe, instance=True)


@pytest.fixture
def principal_service(
    mock_principal_repository, mock_session, token_codec, mock_cleaner, mock_probe
):
    """Create PrincipalService with mock dependencies."""
    from iam.application.services import PrincipalService

    return PrincipalService(
        principal_repository=mock_principal_repository,
        session=mock_session,
        token_codec=token_codec,
        owned_brands_cleaner=mock_cleaner,
        probe=mock_probe,
    )


@pytest.fixture
def existing_principal():
    """A registered principal whose password is PASSWORD."""
    return Principal.create(
        email="owner@example.com",
        password_hash=hash_password(PASSWORD),
        full_name="Owner",
    )


class TestRegister:
    """Tests for principal sign-up."""

    @pytest.mark.asyncio
    async def test_registers_principal_with_hashed_password(
        self, principal_service, mock_principal_repository, mock_probe
    ):
        principal = await principal_service.register(
            "New@Example.com", PASSWORD, "New Person"
        )

        assert principal.email.value == "new@example.com"
        assert principal.password_hash != PASSWORD
        mock_principal_repository.save.assert_awaited_once_with(principal)
        mock_probe.principal_registered.assert_called_once_with(principal.id.value)

    @pytest.mark.asyncio
    async def test_rejects_weak_password(
        self, principal_service, mock_principal_repository
    ):
        with pytest.raises(WeakPasswordError):
            await principal_service.register("a@example.com", "weakpass", "A")

        mock_principal_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejects_malformed_email(self, principal_service):
        with pytest.raises(InvalidEmailError):
            await principal_service.register("nope", PASSWORD, "A")

    @pytest.mark.asyncio
    async def test_duplicate_email_propagates(
        self, principal_service, mock_principal_repository, mock_probe
    ):
        mock_principal_repository.save.side_effect = DuplicateEmailError("taken")

        with pytest.raises(DuplicateEmailError):
            await principal_service.register("a@example.com", PASSWORD, "A")

        mock_probe.duplicate_email.assert_called_once()


class TestSignIn:
    """Tests for principal sign-in."""

    @pytest.mark.asyncio
    async def test_successful_sign_in_issues_principal_token(
        self, principal_service, mock_principal_repository, existing_principal, token_codec
    ):
        mock_principal_repository.get_by_email.return_value = existing_principal

        session = await principal_service.sign_in("OWNER@example.com", PASSWORD)

        claims = token_codec.decode(session.token.token)
        assert claims["sub"] == existing_principal.id.value
        assert claims["token_type"] == "Principal"
        assert "brand_id" not in claims
        assert session.principal.last_login_at is not None
        mock_principal_repository.save.assert_awaited_once_with(existing_principal)

    @pytest.mark.asyncio
    async def test_unknown_email_fails(
        self, principal_service, mock_principal_repository, mock_probe
    ):
        mock_principal_repository.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError):
            await principal_service.sign_in("ghost@example.com", PASSWORD)

        mock_probe.sign_in_failed.assert_called_once_with(reason="unknown_email")

    @pytest.mark.asyncio
    async def test_wrong_password_fails_with_same_error(
        self, principal_service, mock_principal_repository, existing_principal
    ):
        mock_principal_repository.get_by_email.return_value = existing_principal

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await principal_service.sign_in("owner@example.com", "Wrong-Pass1")

        assert str(exc_info.value) == str(InvalidCredentialsError())
        mock_principal_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_email_fails_without_lookup(
        self, principal_service, mock_principal_repository
    ):
        with pytest.raises(InvalidCredentialsError):
            await principal_service.sign_in("not-an-email", PASSWORD)

        mock_principal_repository.get_by_email.assert_not_awaited()


class TestGetPrincipal:
    @pytest.mark.asyncio
    async def test_returns_principal(
        self, principal_service, mock_principal_repository, existing_principal
    ):
        mock_principal_repository.get_by_id.return_value = existing_principal

        result = await principal_service.get_principal(existing_principal.id)

        assert result is existing_principal

    @pytest.mark.asyncio
    async def test_missing_principal_raises(
        self, principal_service, mock_principal_repository
    ):
        mock_principal_repository.get_by_id.return_value = None

        with pytest.raises(PrincipalNotFoundError):
            await principal_service.get_principal(PrincipalId.generate())


class TestDeleteAccount:
    """Tests for account deletion with the owned-brands cascade."""

    @pytest.mark.asyncio
    async def test_deletes_owned_brands_then_account(
        self,
        principal_service,
        mock_principal_repository,
        mock_cleaner,
        mock_probe,
        existing_principal,
    ):
        mock_principal_repository.get_by_id.return_value = existing_principal
        mock_cleaner.delete_owner.return_value = 2

        deleted = await principal_service.delete_account(existing_principal.id, PASSWORD)

        assert deleted == 2
        mock_cleaner.delete_owner.assert_awaited_once_with(existing_principal.id)
        mock_probe.account_deleted.assert_called_once_with(
            existing_principal.id.value, brands_deleted=2
        )

    @pytest.mark.asyncio
    async def test_wrong_password_deletes_nothing(
        self, principal_service, mock_principal_repository, mock_cleaner, existing_principal
    ):
        mock_principal_repository.get_by_id.return_value = existing_principal

        with pytest.raises(InvalidCredentialsError):
            await principal_service.delete_account(existing_principal.id, "Wrong-Pass1")

        mock_cleaner.delete_owner.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_principal(
        self, principal_service, mock_principal_repository, mock_cleaner
    ):
        mock_principal_repository.get_by_id.return_value = None

        with pytest.raises(PrincipalNotFoundError):
            await principal_service.delete_account(PrincipalId.generate(), PASSWORD)

        mock_cleaner.delete_owner.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cascade_failure_propagates(
        self,
        principal_service,
        mock_principal_repository,
        mock_cleaner,
        mock_probe,
        existing_principal,
    ):
        mock_principal_repository.get_by_id.return_value = existing_principal
        mock_cleaner.delete_owner.side_effect = AccountDeletionError("brand left")

        with pytest.raises(AccountDeletionError):
            await principal_service.delete_account(existing_principal.id, PASSWORD)

        mock_probe.account_deletion_failed.assert_called_once()
        mock_probe.account_deleted.assert_not_called()

    @pytest.mark.asyncio
    async def test_requires_cleaner(
        self, mock_principal_repository, mock_session, token_codec, existing_principal
    ):
        from iam.application.services import PrincipalService

        service = PrincipalService(
            principal_repository=mock_principal_repository,
            session=mock_session,
            token_codec=token_codec,
        )

        with pytest.raises(RuntimeError):
            await service.delete_account(existing_principal.id, PASSWORD)
