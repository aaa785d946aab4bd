"""Protocol for principal application service observability.

Defines the interface for domain probes that capture application-level
domain events for principal service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PrincipalServiceProbe(Protocol):
    """Domain probe for principal application service operations."""

    def principal_registered(self, principal_id: str) -> None:
        """Record that a principal signed up."""
        ...

    def duplicate_email(self) -> None:
        """Record that sign-up used an email already registered."""
        ...

    def principal_signed_in(self, principal_id: str) -> None:
        """Record a successful principal sign-in."""
        ...

    def sign_in_failed(self, reason: str) -> None:
        """Record a failed principal sign-in."""
        ...

    def account_deleted(self, principal_id: str, brands_deleted: int) -> None:
        """Record that a principal and its brands were deleted."""
        ...

    def account_deletion_failed(self, principal_id: str, error: str) -> None:
        """Record that account deletion was aborted."""
        ...

    def with_context(self, context: ObservationContext) -> PrincipalServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPrincipalServiceProbe:
    """Default implementation of PrincipalServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPrincipalServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultPrincipalServiceProbe(logger=self._logger, context=context)

    def principal_registered(self, principal_id: str) -> None:
        """Record that a principal signed up."""
        self._logger.info(
            "principal_registered",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def duplicate_email(self) -> None:
        """Record that sign-up used an email already registered."""
        self._logger.warning(
            "principal_duplicate_email",
            **self._get_context_kwargs(),
        )

    def principal_signed_in(self, principal_id: str) -> None:
        """Record a successful principal sign-in."""
        self._logger.info(
            "principal_signed_in",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def sign_in_failed(self, reason: str) -> None:
        """Record a failed principal sign-in."""
        self._logger.warning(
            "principal_sign_in_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def account_deleted(self, principal_id: str, brands_deleted: int) -> None:
        """Record that a principal and its brands were deleted."""
        self._logger.info(
            "principal_account_deleted",
            principal_id=principal_id,
            brands_deleted=brands_deleted,
            **self._get_context_kwargs(),
        )

    def account_deletion_failed(self, principal_id: str, error: str) -> None:
        """Record that account deletion was aborted."""
        self._logger.error(
            "principal_account_deletion_failed",
            principal_id=principal_id,
            error=error,
            **self._get_context_kwargs(),
        )
