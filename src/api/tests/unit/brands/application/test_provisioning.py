"""Unit tests for BrandProvisioner.

The schema manager and registry are mocked; every test checks what was
created and what was torn down again.
"""

from unittest.mock import create_autospec

import pytest

from brands.application.credentials import CredentialIssuer
from brands.application.observability import BrandProvisioningProbe
from brands.application.provisioning import BrandProvisioner
from brands.domain.exceptions import InvalidBrandNameError
from brands.ports.exceptions import (
    BrandConflictError,
    BrandOwnerNotFoundError,
    BrandProvisioningError,
)
from brands.ports.repositories import IBrandRepository, IBrandSchemaManager
from brands.ports.services import ICredentialCipher
from iam.domain.value_objects import PrincipalId
from infrastructure.database.exceptions import DatabaseError


@pytest.fixture
def mock_repository():
    return create_autospec(IBrandRepository, instance=True)


@pytest.fixture
def mock_schema_manager():
    return create_autospec(IBrandSchemaManager, instance=True)


@pytest.fixture
def mock_cipher():
    cipher = create_autospec(ICredentialCipher, instance=True)
    cipher.encrypt.return_value = "cipher-text"
    return cipher


@pytest.fixture
def mock_probe():
    return create_autospec(BrandProvisioningProbe, instance=True)


@pytest.fixture
def provisioner(mock_repository, mock_schema_manager, mock_cipher, mock_probe):
    return BrandProvisioner(
        brand_repository=mock_repository,
        schema_manager=mock_schema_manager,
        credential_issuer=CredentialIssuer(),
        cipher=mock_cipher,
        name_max_length=50,
        probe=mock_probe,
    )


@pytest.fixture
def owner_id():
    return PrincipalId.generate()


class TestSuccessfulProvisioning:
    @pytest.mark.asyncio
    async def test_returns_active_brand_with_credentials(
        self, provisioner, owner_id, mock_repository, mock_schema_manager
    ):
        result = await provisioner.create_brand(owner_id, "  Acme   Corp ")

        brand = result.brand
        assert brand.is_active
        assert brand.name == "Acme Corp"
        assert brand.owner_id == owner_id
        assert brand.encrypted_password == "cipher-text"
        assert len(result.api_key) == 16
        assert len(result.api_password) == 32
        assert mock_repository.save.await_count == 2

    @pytest.mark.asyncio
    async def test_runs_steps_against_derived_names(
        self, provisioner, owner_id, mock_schema_manager, mock_cipher
    ):
        result = await provisioner.create_brand(owner_id, "Acme")
        brand = result.brand

        mock_schema_manager.create_schema.assert_awaited_once_with(brand.schema_name)
        role_args = mock_schema_manager.create_role.await_args.args
        assert role_args[0] == brand.database_user
        assert role_args[2] == brand.schema_name
        # The role password is what got encrypted into the registry
        mock_cipher.encrypt.assert_called_once_with(role_args[1])
        mock_schema_manager.create_tables.assert_awaited_once_with(
            brand.schema_name, brand.database_user
        )

    @pytest.mark.asyncio
    async def test_seeds_owner_with_issued_key(
        self, provisioner, owner_id, mock_schema_manager
    ):
        result = await provisioner.create_brand(owner_id, "Acme")

        schema_name, owner, brand_name = mock_schema_manager.seed_owner.await_args.args
        assert schema_name == result.brand.schema_name
        assert owner.api_key == result.api_key
        assert owner.display_name == "Acme Owner"
        assert [r.value for r in owner.roles] == ["Owner"]
        assert brand_name == "Acme"
        assert CredentialIssuer().verify_api_password(
            result.api_password, owner.api_password_hash
        )


class TestValidation:
    @pytest.mark.asyncio
    async def test_invalid_name_creates_nothing(
        self, provisioner, owner_id, mock_repository, mock_schema_manager
    ):
        with pytest.raises(InvalidBrandNameError):
            await provisioner.create_brand(owner_id, "Acme; DROP TABLE")

        mock_repository.save.assert_not_awaited()
        mock_schema_manager.create_schema.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_name_longer_than_configured_maximum(self, provisioner, owner_id):
        with pytest.raises(InvalidBrandNameError):
            await provisioner.create_brand(owner_id, "a" * 51)


class TestCompensation:
    @pytest.mark.asyncio
    async def test_table_failure_tears_down_role_schema_and_row(
        self, provisioner, owner_id, mock_repository, mock_schema_manager
    ):
        mock_schema_manager.create_tables.side_effect = DatabaseError("ddl failed")

        with pytest.raises(BrandProvisioningError):
            await provisioner.create_brand(owner_id, "Acme")

        mock_schema_manager.drop_role.assert_awaited_once()
        mock_schema_manager.drop_schema.assert_awaited_once()
        mock_repository.delete.assert_awaited_once()
        mock_schema_manager.seed_owner.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_role_failure_drops_partial_role(
        self, provisioner, owner_id, mock_repository, mock_schema_manager
    ):
        mock_schema_manager.create_role.side_effect = DatabaseError("grant failed")

        with pytest.raises(BrandProvisioningError):
            await provisioner.create_brand(owner_id, "Acme")

        mock_schema_manager.drop_role.assert_awaited_once()
        mock_schema_manager.drop_schema.assert_awaited_once()
        mock_repository.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_schema_conflict_keeps_existing_schema(
        self, provisioner, owner_id, mock_repository, mock_schema_manager
    ):
        mock_schema_manager.create_schema.side_effect = BrandConflictError("exists")

        with pytest.raises(BrandConflictError):
            await provisioner.create_brand(owner_id, "Acme")

        mock_schema_manager.drop_schema.assert_not_awaited()
        mock_repository.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_registry_conflict_creates_nothing(
        self, provisioner, owner_id, mock_repository, mock_schema_manager
    ):
        mock_repository.save.side_effect = BrandConflictError("exists")

        with pytest.raises(BrandConflictError):
            await provisioner.create_brand(owner_id, "Acme")

        mock_schema_manager.create_schema.assert_not_awaited()
        mock_repository.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_owner_surfaces_not_found(
        self, provisioner, owner_id, mock_repository
    ):
        mock_repository.save.side_effect = BrandOwnerNotFoundError("gone")

        with pytest.raises(BrandOwnerNotFoundError):
            await provisioner.create_brand(owner_id, "Acme")

    @pytest.mark.asyncio
    async def test_activation_failure_tears_everything_down(
        self, provisioner, owner_id, mock_repository, mock_schema_manager
    ):
        mock_repository.save.side_effect = [None, DatabaseError("commit failed")]

        with pytest.raises(BrandProvisioningError):
            await provisioner.create_brand(owner_id, "Acme")

        mock_schema_manager.drop_role.assert_awaited_once()
        mock_schema_manager.drop_schema.assert_awaited_once()
        mock_repository.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_teardown_is_reported(
        self, provisioner, owner_id, mock_schema_manager, mock_probe
    ):
        mock_schema_manager.create_tables.side_effect = DatabaseError("ddl failed")
        mock_schema_manager.drop_schema.side_effect = DatabaseError("drop failed")

        with pytest.raises(BrandProvisioningError):
            await provisioner.create_brand(owner_id, "Acme")

        mock_probe.resources_orphaned.assert_called_once()
        orphaned = mock_probe.resources_orphaned.call_args.args[1]
        assert len(orphaned) == 1
        assert orphaned[0].startswith("schema brand_")
