"""Domain probe for brand registry operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class BrandRepositoryProbe(Protocol):
    """Domain probe for brand repository operations."""

    def brand_saved(self, brand_id: str, is_active: bool) -> None:
        ...

    def brand_not_found(self, brand_id: str) -> None:
        ...

    def brand_conflict(self, brand_id: str, constraint: str) -> None:
        ...

    def brand_deleted(self, brand_id: str) -> None:
        ...

    def brand_renamed(self, brand_id: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> BrandRepositoryProbe:
        ...


class DefaultBrandRepositoryProbe:
    """Default implementation of BrandRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultBrandRepositoryProbe:
        return DefaultBrandRepositoryProbe(logger=self._logger, context=context)

    def brand_saved(self, brand_id: str, is_active: bool) -> None:
        self._logger.info(
            "brand_saved",
            brand_id=brand_id,
            is_active=is_active,
            **self._get_context_kwargs(),
        )

    def brand_not_found(self, brand_id: str) -> None:
        self._logger.debug(
            "brand_not_found",
            brand_id=brand_id,
            **self._get_context_kwargs(),
        )

    def brand_conflict(self, brand_id: str, constraint: str) -> None:
        self._logger.warning(
            "brand_conflict",
            brand_id=brand_id,
            constraint=constraint,
            **self._get_context_kwargs(),
        )

    def brand_deleted(self, brand_id: str) -> None:
        self._logger.info(
            "brand_deleted",
            brand_id=brand_id,
            **self._get_context_kwargs(),
        )

    def brand_renamed(self, brand_id: str) -> None:
        self._logger.info(
            "brand_renamed",
            brand_id=brand_id,
            **self._get_context_kwargs(),
        )
