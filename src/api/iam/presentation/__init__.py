"""IAM presentation layer - aggregate-based organization.

Organizes presentation concerns by domain aggregate following vertical
slicing and DDD principles. Each aggregate package contains its own routes
and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import principals

# Auth is enforced per-endpoint (each handler declares its own Depends),
# not at the router level, because sign-up and sign-in are anonymous.
router = APIRouter(
    prefix="/iam",
    tags=["iam"],
)

router.include_router(principals.router)

__all__ = ["router"]
