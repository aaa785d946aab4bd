"""Domain probe for brand connection routing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionRouterProbe(Protocol):
    """Domain probe for connection router operations."""

    def connection_cached(self, brand_id: str) -> None:
        ...

    def connection_reused(self, brand_id: str) -> None:
        ...

    def brand_unroutable(self, brand_id: str, reason: str) -> None:
        ...

    def connection_invalidated(self, brand_id: str, had_connection: bool) -> None:
        ...

    def verification_failed(self, brand_id: str, error: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> ConnectionRouterProbe:
        ...


class DefaultConnectionRouterProbe:
    """Default implementation of ConnectionRouterProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionRouterProbe:
        return DefaultConnectionRouterProbe(logger=self._logger, context=context)

    def connection_cached(self, brand_id: str) -> None:
        self._logger.info(
            "brand_connection_cached",
            brand_id=brand_id,
            **self._get_context_kwargs(),
        )

    def connection_reused(self, brand_id: str) -> None:
        self._logger.debug(
            "brand_connection_reused",
            brand_id=brand_id,
            **self._get_context_kwargs(),
        )

    def brand_unroutable(self, brand_id: str, reason: str) -> None:
        self._logger.warning(
            "brand_unroutable",
            brand_id=brand_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def connection_invalidated(self, brand_id: str, had_connection: bool) -> None:
        self._logger.info(
            "brand_connection_invalidated",
            brand_id=brand_id,
            had_connection=had_connection,
            **self._get_context_kwargs(),
        )

    def verification_failed(self, brand_id: str, error: str) -> None:
        self._logger.warning(
            "brand_connection_verification_failed",
            brand_id=brand_id,
            error=error,
            **self._get_context_kwargs(),
        )
