"""Unit tests for BrandService."""

from unittest.mock import AsyncMock, create_autospec

import pytest

from brands.application.provisioning import BrandProvisioner
from brands.application.services import BrandService, CascadeDeletionService
from brands.domain.aggregates import Brand
from brands.domain.exceptions import InvalidConfirmationError
from brands.domain.value_objects import BrandName
from brands.ports.exceptions import BrandAccessDeniedError, BrandNotFoundError
from iam.domain.value_objects import PrincipalId


@pytest.fixture
def mock_provisioner():
    return AsyncMock(spec=BrandProvisioner)


@pytest.fixture
def mock_deletion_service():
    return create_autospec(CascadeDeletionService, instance=True)


@pytest.fixture
def service(mock_brand_repository, mock_provisioner, mock_deletion_service):
    return BrandService(
        brand_repository=mock_brand_repository,
        provisioner=mock_provisioner,
        deletion_service=mock_deletion_service,
    )


@pytest.fixture
def owner_id():
    return PrincipalId.generate()


@pytest.fixture
def brand(owner_id, mock_brand_repository):
    brand = Brand.create(BrandName.parse("Acme"), owner_id, "cipher-text")
    brand.activate()
    mock_brand_repository.get_by_id.return_value = brand
    return brand


class TestCreateAndList:
    @pytest.mark.asyncio
    async def test_create_delegates_to_provisioner(self, service, owner_id, mock_provisioner):
        await service.create_brand(owner_id, "Acme")

        mock_provisioner.create_brand.assert_awaited_once_with(owner_id, "Acme")

    @pytest.mark.asyncio
    async def test_list_brands_of_owner(self, service, owner_id, brand, mock_brand_repository):
        mock_brand_repository.list_by_owner.return_value = [brand]

        assert await service.list_brands(owner_id) == [brand]
        mock_brand_repository.list_by_owner.assert_awaited_once_with(owner_id)


class TestGetBrand:
    @pytest.mark.asyncio
    async def test_owner_sees_brand(self, service, owner_id, brand):
        assert await service.get_brand(brand.id.value, owner_id) is brand

    @pytest.mark.asyncio
    async def test_other_principal_gets_not_found(self, service, brand):
        with pytest.raises(BrandNotFoundError):
            await service.get_brand(brand.id.value, PrincipalId.generate())

    @pytest.mark.asyncio
    async def test_super_admin_sees_any_brand(self, service, brand):
        result = await service.get_brand(
            brand.id.value, PrincipalId.generate(), is_super_admin=True
        )

        assert result is brand

    @pytest.mark.asyncio
    async def test_malformed_id(self, service, owner_id, mock_brand_repository):
        with pytest.raises(BrandNotFoundError):
            await service.get_brand("nope", owner_id)

        mock_brand_repository.get_by_id.assert_not_awaited()


class TestDeleteBrand:
    @pytest.mark.asyncio
    async def test_deletes_with_exact_phrase(
        self, service, owner_id, brand, mock_deletion_service
    ):
        mock_deletion_service.delete_brand.return_value = brand

        await service.delete_brand(brand.id.value, owner_id, f"DELETE {brand.id.value}")

        mock_deletion_service.delete_brand.assert_awaited_once_with(brand.id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("confirmation", [None, "", "   "])
    async def test_missing_confirmation(
        self, service, owner_id, brand, mock_deletion_service, confirmation
    ):
        with pytest.raises(InvalidConfirmationError):
            await service.delete_brand(brand.id.value, owner_id, confirmation)

        mock_deletion_service.delete_brand.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_phrase(self, service, owner_id, brand, mock_deletion_service):
        with pytest.raises(InvalidConfirmationError):
            await service.delete_brand(brand.id.value, owner_id, "DELETE Acme")

        mock_deletion_service.delete_brand.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("padding", [(" ", ""), ("", "\n"), ("   ", "  \n")])
    async def test_padded_phrase_is_rejected(
        self, service, owner_id, brand, mock_deletion_service, padding
    ):
        before, after = padding

        with pytest.raises(InvalidConfirmationError):
            await service.delete_brand(
                brand.id.value, owner_id, f"{before}DELETE {brand.id.value}{after}"
            )

        mock_deletion_service.delete_brand.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_owner_is_denied(self, service, brand, mock_deletion_service):
        with pytest.raises(BrandAccessDeniedError):
            await service.delete_brand(
                brand.id.value, PrincipalId.generate(), f"DELETE {brand.id.value}"
            )

        mock_deletion_service.delete_brand.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_super_admin_may_delete(self, service, brand, mock_deletion_service):
        await service.delete_brand(
            brand.id.value,
            PrincipalId.generate(),
            f"DELETE {brand.id.value}",
            is_super_admin=True,
        )

        mock_deletion_service.delete_brand.assert_awaited_once_with(brand.id)

    @pytest.mark.asyncio
    async def test_unknown_brand(self, service, owner_id, mock_brand_repository):
        mock_brand_repository.get_by_id.return_value = None

        with pytest.raises(BrandNotFoundError):
            await service.delete_brand(
                "7d0f6c1e-3f4b-4a8e-9b61-2c5d8e9f0a1b",
                owner_id,
                "DELETE 7d0f6c1e-3f4b-4a8e-9b61-2c5d8e9f0a1b",
            )
