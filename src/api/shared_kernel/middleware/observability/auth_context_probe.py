"""Domain probe for request identity resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving the caller identity from
the Authorization header.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthContextProbe(Protocol):
    """Domain probe for identity resolution operations."""

    def identity_resolved(self, kind: str) -> None:
        """Record that a verified token produced an identity."""
        ...

    def anonymous_request(self, reason: str) -> None:
        """Record that a presented token was rejected."""
        ...

    def with_context(self, context: ObservationContext) -> AuthContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthContextProbe:
    """Default implementation of AuthContextProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultAuthContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthContextProbe(logger=self._logger, context=context)

    def identity_resolved(self, kind: str) -> None:
        """Record that a verified token produced an identity."""
        self._logger.debug(
            "identity_resolved",
            kind=kind,
            **self._get_context_kwargs(),
        )

    def anonymous_request(self, reason: str) -> None:
        """Record that a presented token was rejected."""
        self._logger.info(
            "identity_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )
