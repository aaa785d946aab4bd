"""Brand provisioning: registry row, schema, role, tables and owner.

Creation runs as a saga. Each step either completes or hands back an
explicit failure, and everything already created is torn down in reverse
order before the failure reaches the caller. The registry row is reserved
first, inactive, so the unique constraints on schema name and database
user guard against concurrent creations before any DDL runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from brands.application.credentials import CredentialIssuer, CredentialPair
from brands.application.observability import (
    BrandProvisioningProbe,
    DefaultBrandProvisioningProbe,
    SagaProbe,
)
from brands.application.saga import Saga, SagaOutcome
from brands.domain.aggregates import Brand, BrandUser
from brands.domain.exceptions import InvalidBrandNameError
from brands.domain.value_objects import DEFAULT_NAME_MAX_LENGTH, BrandName
from brands.ports.exceptions import BrandConflictError, BrandProvisioningError
from brands.ports.repositories import IBrandRepository, IBrandSchemaManager
from brands.ports.services import ICredentialCipher
from iam.domain.value_objects import PrincipalId
from shared_kernel.errors import DomainValidationError, NotFoundError
from shared_kernel.results import ConflictFailure, Ok, ValidationFailure


@dataclass(frozen=True)
class ProvisionedBrand:
    """A newly created brand and its owner's one-time credentials."""

    brand: Brand
    api_key: str
    api_password: str = field(repr=False)


class BrandProvisioner:
    """Creates brands end to end, or not at all."""

    def __init__(
        self,
        brand_repository: IBrandRepository,
        schema_manager: IBrandSchemaManager,
        credential_issuer: CredentialIssuer,
        cipher: ICredentialCipher,
        name_max_length: int = DEFAULT_NAME_MAX_LENGTH,
        probe: BrandProvisioningProbe | None = None,
        saga_probe: SagaProbe | None = None,
    ) -> None:
        self._brand_repository = brand_repository
        self._schema_manager = schema_manager
        self._credential_issuer = credential_issuer
        self._cipher = cipher
        self._name_max_length = name_max_length
        self._probe = probe or DefaultBrandProvisioningProbe()
        self._saga_probe = saga_probe

    async def create_brand(self, owner_id: PrincipalId, requested_name: str) -> ProvisionedBrand:
        """Provision a brand owned by ``owner_id``.

        Args:
            owner_id: Principal creating the brand
            requested_name: Display name, validated before anything is created

        Returns:
            The active brand plus the owner's API key and password. The
            password is not recoverable afterwards.

        Raises:
            InvalidBrandNameError: If the name violates the naming policy
            BrandConflictError: If the namespace or role already exists
            BrandOwnerNotFoundError: If the owner disappeared meanwhile
            BrandProvisioningError: If any other step failed
        """
        name = BrandName.parse(requested_name, self._name_max_length)
        database_password = self._credential_issuer.generate_database_password()
        brand = Brand.create(
            name=name,
            owner_id=owner_id,
            encrypted_password=self._cipher.encrypt(database_password),
        )
        self._probe.provisioning_started(brand.id.value, owner_id.value)

        saga = self._build_saga(brand, database_password)
        outcome = await saga.execute()

        if outcome.orphaned:
            self._probe.resources_orphaned(brand.id.value, list(outcome.orphaned))

        if not outcome.succeeded:
            self._probe.provisioning_failed(
                brand.id.value, outcome.failed_step, type(outcome.result).__name__
            )
            self._raise_failure(outcome)

        credentials: CredentialPair = outcome.values["issue_credentials"]
        self._probe.brand_provisioned(brand.id.value, owner_id.value, brand.schema_name)
        return ProvisionedBrand(
            brand=brand,
            api_key=credentials.api_key,
            api_password=credentials.api_password,
        )

    def _build_saga(self, brand: Brand, database_password: str) -> Saga:
        manager = self._schema_manager
        issued: list[CredentialPair] = []

        async def reserve_registry_row() -> Ok:
            await self._brand_repository.save(brand)
            return Ok(brand.id)

        async def release_registry_row() -> None:
            await self._brand_repository.delete(brand.id)

        async def create_schema() -> Ok:
            await manager.create_schema(brand.schema_name)
            return Ok(brand.schema_name)

        async def drop_schema() -> None:
            await manager.drop_schema(brand.schema_name)

        async def create_role() -> Ok:
            await manager.create_role(brand.database_user, database_password, brand.schema_name)
            return Ok(brand.database_user)

        async def drop_role() -> None:
            await manager.drop_role(brand.database_user)

        async def create_tables() -> Ok:
            await manager.create_tables(brand.schema_name, brand.database_user)
            return Ok()

        async def issue_credentials() -> Ok:
            pair = self._credential_issuer.issue_credential_pair()
            issued.append(pair)
            return Ok(pair)

        async def seed_owner() -> Ok:
            pair = issued[-1]
            owner = BrandUser.create_owner(
                api_key=pair.api_key,
                api_password_hash=pair.api_password_hash,
                display_name=f"{brand.name} Owner",
            )
            await manager.seed_owner(brand.schema_name, owner, brand.name)
            return Ok(owner.id)

        async def activate() -> Ok:
            brand.activate()
            try:
                await self._brand_repository.save(brand)
            except Exception:
                brand.deactivate()
                raise
            return Ok()

        saga = Saga("create_brand", probe=self._saga_probe)
        saga.add_step(
            "reserve_registry_row",
            reserve_registry_row,
            compensation=release_registry_row,
            resource=f"registry row {brand.id}",
        )
        saga.add_step(
            "create_schema",
            create_schema,
            compensation=drop_schema,
            compensate_on_failure=True,
            resource=f"schema {brand.schema_name}",
        )
        saga.add_step(
            "create_role",
            create_role,
            compensation=drop_role,
            compensate_on_failure=True,
            resource=f"role {brand.database_user}",
        )
        saga.add_step("create_tables", create_tables)
        saga.add_step("issue_credentials", issue_credentials)
        saga.add_step("seed_owner", seed_owner)
        saga.add_step("activate", activate)
        return saga

    @staticmethod
    def _raise_failure(outcome: SagaOutcome) -> None:
        result = outcome.result
        error = getattr(result, "error", None)

        if isinstance(result, ValidationFailure):
            if isinstance(error, DomainValidationError):
                raise error
            raise InvalidBrandNameError(result.message)

        if isinstance(result, ConflictFailure):
            raise BrandConflictError("Brand namespace already exists") from error

        if isinstance(error, NotFoundError):
            raise error

        raise BrandProvisioningError("Brand provisioning failed") from error
