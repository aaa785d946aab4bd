"""Domain probe for saga execution.

A failed compensation leaves a resource behind that nothing else will clean
up, so it is logged at critical level together with the resource name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SagaProbe(Protocol):
    """Domain probe for saga steps and compensations."""

    def step_completed(self, saga: str, step: str) -> None:
        ...

    def step_failed(self, saga: str, step: str, outcome: str, message: str) -> None:
        ...

    def step_compensated(self, saga: str, step: str) -> None:
        ...

    def compensation_failed(
        self, saga: str, step: str, resource: str | None, error: str
    ) -> None:
        ...

    def with_context(self, context: ObservationContext) -> SagaProbe:
        ...


class DefaultSagaProbe:
    """Default implementation of SagaProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSagaProbe:
        return DefaultSagaProbe(logger=self._logger, context=context)

    def step_completed(self, saga: str, step: str) -> None:
        self._logger.debug(
            "saga_step_completed",
            saga=saga,
            step=step,
            **self._get_context_kwargs(),
        )

    def step_failed(self, saga: str, step: str, outcome: str, message: str) -> None:
        self._logger.warning(
            "saga_step_failed",
            saga=saga,
            step=step,
            outcome=outcome,
            message=message,
            **self._get_context_kwargs(),
        )

    def step_compensated(self, saga: str, step: str) -> None:
        self._logger.info(
            "saga_step_compensated",
            saga=saga,
            step=step,
            **self._get_context_kwargs(),
        )

    def compensation_failed(
        self, saga: str, step: str, resource: str | None, error: str
    ) -> None:
        self._logger.critical(
            "saga_compensation_failed",
            saga=saga,
            step=step,
            orphaned_resource=resource,
            error=error,
            **self._get_context_kwargs(),
        )
