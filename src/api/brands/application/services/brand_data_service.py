"""Brand-scoped info and config stores.

Every operation works on the brand named in the caller's Brand identity,
never on a brand chosen by request parameters.
"""

from __future__ import annotations

from brands.application.observability import BrandAccessProbe, DefaultBrandAccessProbe
from brands.domain.aggregates import BrandEntry
from brands.domain.value_objects import (
    BRAND_NAME_INFO_KEY,
    DEFAULT_NAME_MAX_LENGTH,
    BrandId,
    BrandName,
    BrandRole,
    EntryStore,
    validate_entry,
)
from brands.ports.exceptions import BrandAccessDeniedError, BrandNotFoundError
from brands.ports.repositories import (
    IBrandConnection,
    IBrandConnectionRouter,
    IBrandRepository,
)
from shared_kernel.auth.identity import BrandIdentity


class BrandDataService:
    """Reads and writes a brand's info and config entries."""

    def __init__(
        self,
        connection_router: IBrandConnectionRouter,
        brand_repository: IBrandRepository,
        name_max_length: int = DEFAULT_NAME_MAX_LENGTH,
        probe: BrandAccessProbe | None = None,
    ) -> None:
        self._connection_router = connection_router
        self._brand_repository = brand_repository
        self._name_max_length = name_max_length
        self._probe = probe or DefaultBrandAccessProbe()

    async def _connect(self, identity: BrandIdentity) -> IBrandConnection:
        try:
            brand_id = BrandId.from_string(identity.brand_id)
        except ValueError:
            raise BrandNotFoundError("Brand not found")

        connection = await self._connection_router.resolve(brand_id)
        if connection.schema_name != identity.brand_schema:
            raise BrandAccessDeniedError("Token does not match the brand namespace")
        return connection

    async def list_entries(self, identity: BrandIdentity, store: EntryStore) -> list[BrandEntry]:
        """List all entries of a store, ordered by key.

        Raises:
            BrandNotFoundError: If the brand was deleted or deactivated
        """
        connection = await self._connect(identity)
        return await connection.store().list_entries(store)

    async def update_entry(
        self, identity: BrandIdentity, store: EntryStore, key: str, value: str
    ) -> BrandEntry:
        """Insert or overwrite an entry. Requires the Owner role.

        Writing the ``Brand Name`` info key also renames the brand in the
        registry.

        Raises:
            BrandAccessDeniedError: If the caller is not an Owner
            InvalidEntryError: If key or value is out of bounds
            InvalidBrandNameError: If a new brand name violates the naming policy
            BrandNotFoundError: If the brand was deleted or deactivated
        """
        if not identity.has_role(BrandRole.OWNER.value):
            self._probe.entry_update_denied(identity.brand_id, identity.user_id, store.value)
            raise BrandAccessDeniedError("Only brand owners may change brand data")

        key, value = validate_entry(key, value)
        renames_brand = store is EntryStore.INFO and key == BRAND_NAME_INFO_KEY
        if renames_brand:
            value = BrandName.parse(value, self._name_max_length).value

        connection = await self._connect(identity)
        entry = await connection.store().upsert_entry(store, key, value)
        self._probe.entry_updated(identity.brand_id, store.value, key)

        if renames_brand:
            await self._brand_repository.rename(connection.brand_id, value)
            self._probe.brand_renamed(identity.brand_id)

        return entry

    async def check_health(self, identity: BrandIdentity) -> bool:
        """Whether the brand role can currently query its schema."""
        await self._connect(identity)
        return await self._connection_router.verify(BrandId.from_string(identity.brand_id))
