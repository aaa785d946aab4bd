"""Principal-facing brand management: create, list, get and delete."""

from __future__ import annotations

from brands.application.provisioning import BrandProvisioner, ProvisionedBrand
from brands.application.services.cascade_deletion_service import CascadeDeletionService
from brands.domain.aggregates import Brand
from brands.domain.exceptions import InvalidConfirmationError
from brands.domain.value_objects import BrandId
from brands.ports.exceptions import BrandAccessDeniedError, BrandNotFoundError
from brands.ports.repositories import IBrandRepository
from iam.domain.value_objects import PrincipalId


class BrandService:
    """Application service for brands as seen by their owners.

    Ordinary principals see and delete only their own brands; SuperAdmins
    may act on any brand.
    """

    def __init__(
        self,
        brand_repository: IBrandRepository,
        provisioner: BrandProvisioner,
        deletion_service: CascadeDeletionService,
    ) -> None:
        self._brand_repository = brand_repository
        self._provisioner = provisioner
        self._deletion_service = deletion_service

    async def create_brand(self, owner_id: PrincipalId, name: str) -> ProvisionedBrand:
        return await self._provisioner.create_brand(owner_id, name)

    async def list_brands(self, owner_id: PrincipalId) -> list[Brand]:
        return await self._brand_repository.list_by_owner(owner_id)

    async def get_brand(
        self, brand_id: str, requester_id: PrincipalId, is_super_admin: bool = False
    ) -> Brand:
        """Retrieve a brand the requester may see.

        Brands of other owners are reported as missing, so their ids cannot
        be probed.

        Raises:
            BrandNotFoundError: If the brand does not exist or is not visible
        """
        brand = await self._load(brand_id)
        if not is_super_admin and not brand.is_owned_by(requester_id):
            raise BrandNotFoundError(f"Brand {brand_id} not found")
        return brand

    async def delete_brand(
        self,
        brand_id: str,
        requester_id: PrincipalId,
        confirmation: str | None,
        is_super_admin: bool = False,
    ) -> Brand:
        """Delete a brand after checking ownership and the confirmation phrase.

        Raises:
            InvalidConfirmationError: If the phrase is missing or does not
                match ``DELETE <brand_id>``
            BrandNotFoundError: If the brand does not exist
            BrandAccessDeniedError: If the requester neither owns the brand
                nor is a SuperAdmin
            BrandDeprovisioningError: If the schema or role could not be dropped
        """
        if not confirmation:
            raise InvalidConfirmationError("Deletion confirmation is required")

        brand = await self._load(brand_id)
        if not is_super_admin and not brand.is_owned_by(requester_id):
            raise BrandAccessDeniedError("Only the owner may delete this brand")

        if confirmation != brand.confirmation_phrase:
            raise InvalidConfirmationError(
                f"Confirmation must be exactly '{brand.confirmation_phrase}'"
            )

        return await self._deletion_service.delete_brand(brand.id)

    async def _load(self, brand_id: str) -> Brand:
        try:
            parsed = BrandId.from_string(brand_id)
        except ValueError:
            raise BrandNotFoundError(f"Brand {brand_id} not found")

        brand = await self._brand_repository.get_by_id(parsed)
        if brand is None:
            raise BrandNotFoundError(f"Brand {brand_id} not found")
        return brand
