"""Explicit step results for multi-step operations.

Saga steps return one of these values instead of raising, so the
coordinator can decide deterministically whether to continue or to run
compensations. ``Ok`` may carry a payload for the next step; failures keep
the originating exception, if any, for the final error report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Ok:
    """The step completed."""

    value: Any = None


@dataclass(frozen=True)
class ValidationFailure:
    """The step rejected its input."""

    message: str
    error: Exception | None = None


@dataclass(frozen=True)
class ConflictFailure:
    """The step hit a uniqueness violation."""

    message: str
    error: Exception | None = None


@dataclass(frozen=True)
class InfraFailure:
    """The step failed because of the database or another dependency."""

    message: str
    error: Exception | None = None


StepResult = Ok | ValidationFailure | ConflictFailure | InfraFailure
Failure = ValidationFailure | ConflictFailure | InfraFailure
