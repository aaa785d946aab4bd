"""Domain probe for brand provisioning."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class BrandProvisioningProbe(Protocol):
    """Domain probe for the brand creation workflow."""

    def provisioning_started(self, brand_id: str, owner_id: str) -> None:
        ...

    def brand_provisioned(self, brand_id: str, owner_id: str, schema_name: str) -> None:
        ...

    def provisioning_failed(self, brand_id: str, step: str | None, outcome: str) -> None:
        ...

    def resources_orphaned(self, brand_id: str, resources: list[str]) -> None:
        ...

    def with_context(self, context: ObservationContext) -> BrandProvisioningProbe:
        ...


class DefaultBrandProvisioningProbe:
    """Default implementation of BrandProvisioningProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultBrandProvisioningProbe:
        return DefaultBrandProvisioningProbe(logger=self._logger, context=context)

    def provisioning_started(self, brand_id: str, owner_id: str) -> None:
        self._logger.info(
            "brand_provisioning_started",
            brand_id=brand_id,
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )

    def brand_provisioned(self, brand_id: str, owner_id: str, schema_name: str) -> None:
        self._logger.info(
            "brand_provisioned",
            brand_id=brand_id,
            owner_id=owner_id,
            schema_name=schema_name,
            **self._get_context_kwargs(),
        )

    def provisioning_failed(self, brand_id: str, step: str | None, outcome: str) -> None:
        self._logger.error(
            "brand_provisioning_failed",
            brand_id=brand_id,
            step=step,
            outcome=outcome,
            **self._get_context_kwargs(),
        )

    def resources_orphaned(self, brand_id: str, resources: list[str]) -> None:
        self._logger.critical(
            "brand_resources_orphaned",
            brand_id=brand_id,
            resources=resources,
            **self._get_context_kwargs(),
        )
