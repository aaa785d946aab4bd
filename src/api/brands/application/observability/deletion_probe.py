"""Domain probe for brand and owner deletion."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CascadeDeletionProbe(Protocol):
    """Domain probe for cascade deletion operations."""

    def brand_deletion_started(self, brand_id: str) -> None:
        ...

    def brand_deleted(self, brand_id: str, schema_name: str) -> None:
        ...

    def brand_deletion_failed(self, brand_id: str, stage: str, error: str) -> None:
        ...

    def owner_deleted(self, owner_id: str, brands_deleted: int) -> None:
        ...

    def owner_deletion_aborted(self, owner_id: str, failed_brands: list[str]) -> None:
        ...

    def with_context(self, context: ObservationContext) -> CascadeDeletionProbe:
        ...


class DefaultCascadeDeletionProbe:
    """Default implementation of CascadeDeletionProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultCascadeDeletionProbe:
        return DefaultCascadeDeletionProbe(logger=self._logger, context=context)

    def brand_deletion_started(self, brand_id: str) -> None:
        self._logger.info(
            "brand_deletion_started",
            brand_id=brand_id,
            **self._get_context_kwargs(),
        )

    def brand_deleted(self, brand_id: str, schema_name: str) -> None:
        self._logger.info(
            "brand_deleted",
            brand_id=brand_id,
            schema_name=schema_name,
            **self._get_context_kwargs(),
        )

    def brand_deletion_failed(self, brand_id: str, stage: str, error: str) -> None:
        self._logger.error(
            "brand_deletion_failed",
            brand_id=brand_id,
            stage=stage,
            error=error,
            **self._get_context_kwargs(),
        )

    def owner_deleted(self, owner_id: str, brands_deleted: int) -> None:
        self._logger.info(
            "owner_deleted",
            owner_id=owner_id,
            brands_deleted=brands_deleted,
            **self._get_context_kwargs(),
        )

    def owner_deletion_aborted(self, owner_id: str, failed_brands: list[str]) -> None:
        self._logger.error(
            "owner_deletion_aborted",
            owner_id=owner_id,
            failed_brands=failed_brands,
            **self._get_context_kwargs(),
        )
