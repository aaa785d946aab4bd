"""A small saga coordinator for multi-step operations with compensations.

Steps run in order. Each returns a ``StepResult``; an action that raises is
treated as having returned the matching failure. On the first failure the
compensations of the steps that already completed run in reverse order.
A step marked ``compensate_on_failure`` also compensates itself, for actions
that may leave partial state behind when they fail. A conflict never
triggers this, since the existing object belongs to someone else.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from brands.application.observability import DefaultSagaProbe, SagaProbe
from shared_kernel.errors import ConflictError, DomainValidationError
from shared_kernel.results import (
    ConflictFailure,
    Failure,
    InfraFailure,
    Ok,
    StepResult,
    ValidationFailure,
)

Action = Callable[[], Awaitable[StepResult]]
Compensation = Callable[[], Awaitable[None]]


def failure_from_exception(error: Exception) -> Failure:
    """Classify an exception raised by a step action."""
    if isinstance(error, DomainValidationError):
        return ValidationFailure(str(error), error=error)
    if isinstance(error, ConflictError):
        return ConflictFailure(str(error), error=error)
    return InfraFailure(str(error) or type(error).__name__, error=error)


@dataclass(frozen=True)
class SagaStep:
    name: str
    action: Action
    compensation: Compensation | None = None
    compensate_on_failure: bool = False
    # Resource left behind if the compensation fails, for the critical log
    resource: str | None = None


@dataclass(frozen=True)
class SagaOutcome:
    """What happened when a saga ran."""

    result: StepResult
    values: dict[str, Any] = field(default_factory=dict)
    failed_step: str | None = None
    compensated: tuple[str, ...] = ()
    orphaned: tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return isinstance(self.result, Ok)


class Saga:
    """Ordered steps with reverse-order compensation."""

    def __init__(self, name: str, probe: SagaProbe | None = None) -> None:
        self._name = name
        self._steps: list[SagaStep] = []
        self._probe = probe or DefaultSagaProbe()

    def add_step(
        self,
        name: str,
        action: Action,
        compensation: Compensation | None = None,
        compensate_on_failure: bool = False,
        resource: str | None = None,
    ) -> Saga:
        self._steps.append(
            SagaStep(
                name=name,
                action=action,
                compensation=compensation,
                compensate_on_failure=compensate_on_failure,
                resource=resource,
            )
        )
        return self

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self._steps]

    async def execute(self) -> SagaOutcome:
        completed: list[SagaStep] = []
        values: dict[str, Any] = {}

        for step in self._steps:
            try:
                result = await step.action()
            except Exception as e:
                result = failure_from_exception(e)

            if isinstance(result, Ok):
                values[step.name] = result.value
                completed.append(step)
                self._probe.step_completed(self._name, step.name)
                continue

            self._probe.step_failed(self._name, step.name, type(result).__name__, result.message)
            if step.compensate_on_failure and not isinstance(result, ConflictFailure):
                completed.append(step)
            compensated, orphaned = await self._compensate(completed)
            return SagaOutcome(
                result=result,
                values=values,
                failed_step=step.name,
                compensated=compensated,
                orphaned=orphaned,
            )

        return SagaOutcome(result=Ok(values), values=values)

    async def _compensate(
        self, completed: list[SagaStep]
    ) -> tuple[tuple[str, ...], tuple[str, ...]]:
        compensated: list[str] = []
        orphaned: list[str] = []
        for step in reversed(completed):
            if step.compensation is None:
                continue
            try:
                await step.compensation()
            except Exception as e:
                # Keep going: the remaining steps still need to be undone
                self._probe.compensation_failed(
                    self._name, step.name, step.resource, type(e).__name__
                )
                orphaned.append(step.resource or step.name)
                continue
            compensated.append(step.name)
            self._probe.step_compensated(self._name, step.name)
        return tuple(compensated), tuple(orphaned)
