"""Domain probe for token issuing and verification.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to authentication tokens. Token values
are never passed to the probe.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TokenCodecProbe(Protocol):
    """Domain probe for token codec operations."""

    def token_issued(self, token_type: str, subject: str) -> None:
        """Record that a token was minted."""
        ...

    def token_rejected(self, reason: str) -> None:
        """Record that a token failed verification."""
        ...

    def with_context(self, context: ObservationContext) -> TokenCodecProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTokenCodecProbe:
    """Default implementation of TokenCodecProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTokenCodecProbe:
        """Create a new probe with observation context bound."""
        return DefaultTokenCodecProbe(logger=self._logger, context=context)

    def token_issued(self, token_type: str, subject: str) -> None:
        """Record that a token was minted."""
        self._logger.info(
            "auth_token_issued",
            token_type=token_type,
            subject=subject,
            **self._get_context_kwargs(),
        )

    def token_rejected(self, reason: str) -> None:
        """Record that a token failed verification."""
        self._logger.warning(
            "auth_token_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )
