"""Brands presentation layer.

Two routers: ``router`` under ``/brands`` for principals managing brands
(plus anonymous brand sign-in), and ``brand_scope_router`` under ``/brand``
for Brand-token callers acting on their own brand.
"""

from __future__ import annotations

from fastapi import APIRouter

from brands.presentation import brands, current

# Prefixes live on the inner routers so "" can address the collection root
router = APIRouter()
router.include_router(brands.router)

brand_scope_router = APIRouter()
brand_scope_router.include_router(current.router)

__all__ = ["brand_scope_router", "router"]
