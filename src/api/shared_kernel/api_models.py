"""Response envelope shared by every mutation endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field


class MutationResponse(BaseModel):
    """Outcome of a mutation.

    Error responses use the same shape with ``success`` set to false and a
    message that never contains internal exception detail.
    """

    success: bool = Field(..., description="Whether the mutation succeeded")
    message: str = Field(..., description="Human-readable outcome")
