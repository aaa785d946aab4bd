"""Domain probe for brand-scoped sign-in and data access.

API keys and passwords are never passed to this probe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class BrandAccessProbe(Protocol):
    """Domain probe for brand authentication and brand data operations."""

    def brand_signed_in(self, brand_id: str, user_id: str) -> None:
        ...

    def brand_sign_in_failed(self, brand_id: str, reason: str) -> None:
        ...

    def entry_updated(self, brand_id: str, store: str, key: str) -> None:
        ...

    def entry_update_denied(self, brand_id: str, user_id: str, store: str) -> None:
        ...

    def brand_renamed(self, brand_id: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> BrandAccessProbe:
        ...


class DefaultBrandAccessProbe:
    """Default implementation of BrandAccessProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultBrandAccessProbe:
        return DefaultBrandAccessProbe(logger=self._logger, context=context)

    def brand_signed_in(self, brand_id: str, user_id: str) -> None:
        self._logger.info(
            "brand_signed_in",
            brand_id=brand_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def brand_sign_in_failed(self, brand_id: str, reason: str) -> None:
        self._logger.warning(
            "brand_sign_in_failed",
            brand_id=brand_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def entry_updated(self, brand_id: str, store: str, key: str) -> None:
        self._logger.info(
            "brand_entry_updated",
            brand_id=brand_id,
            store=store,
            key=key,
            **self._get_context_kwargs(),
        )

    def entry_update_denied(self, brand_id: str, user_id: str, store: str) -> None:
        self._logger.warning(
            "brand_entry_update_denied",
            brand_id=brand_id,
            user_id=user_id,
            store=store,
            **self._get_context_kwargs(),
        )

    def brand_renamed(self, brand_id: str) -> None:
        self._logger.info(
            "brand_renamed_from_info",
            brand_id=brand_id,
            **self._get_context_kwargs(),
        )
