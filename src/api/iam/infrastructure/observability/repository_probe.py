"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to principal repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PrincipalRepositoryProbe(Protocol):
    """Domain probe for principal repository operations.

    Records domain events during principal persistence operations.
    """

    def principal_saved(self, principal_id: str) -> None:
        """Record that a principal was successfully saved."""
        ...

    def principal_retrieved(self, principal_id: str) -> None:
        """Record that a principal was retrieved."""
        ...

    def principal_not_found(self, lookup: str) -> None:
        """Record that a principal lookup found nothing."""
        ...

    def duplicate_email(self, principal_id: str) -> None:
        """Record that a save hit the unique email constraint."""
        ...

    def principal_deleted(self, principal_id: str) -> None:
        """Record that a principal was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> PrincipalRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPrincipalRepositoryProbe:
    """Default implementation of PrincipalRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultPrincipalRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultPrincipalRepositoryProbe(logger=self._logger, context=context)

    def principal_saved(self, principal_id: str) -> None:
        """Record that a principal was successfully saved."""
        self._logger.info(
            "principal_saved",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def principal_retrieved(self, principal_id: str) -> None:
        """Record that a principal was retrieved."""
        self._logger.debug(
            "principal_retrieved",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def principal_not_found(self, lookup: str) -> None:
        """Record that a principal lookup found nothing."""
        self._logger.debug(
            "principal_not_found",
            lookup=lookup,
            **self._get_context_kwargs(),
        )

    def duplicate_email(self, principal_id: str) -> None:
        """Record that a save hit the unique email constraint."""
        self._logger.warning(
            "duplicate_principal_email",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def principal_deleted(self, principal_id: str) -> None:
        """Record that a principal was deleted."""
        self._logger.info(
            "principal_deleted",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
