"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped and domain-relevant metadata that should be
    included with all instrumentation events.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        principal_id: Identifier of the system-level principal (if applicable).
        brand_id: Identifier of the brand being operated on (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(
            request_id="req-123",
            principal_id="01HZX...",
        )
        probe = DefaultBrandProvisioningProbe().with_context(context)
    """

    request_id: str | None = None
    principal_id: str | None = None
    brand_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.principal_id is not None:
            result["principal_id"] = self.principal_id
        if self.brand_id is not None:
            result["brand_id"] = self.brand_id
        result.update(self.extra)
        return result

    def with_brand(self, brand_id: str) -> ObservationContext:
        """Create a new context with the brand id set."""
        return ObservationContext(
            request_id=self.request_id,
            principal_id=self.principal_id,
            brand_id=brand_id,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        new_extra = {**self.extra, **kwargs}
        return ObservationContext(
            request_id=self.request_id,
            principal_id=self.principal_id,
            brand_id=self.brand_id,
            extra=new_extra,
        )
