"""Brands domain aggregates."""

from brands.domain.aggregates.brand import Brand
from brands.domain.aggregates.brand_user import BrandEntry, BrandUser

__all__ = ["Brand", "BrandEntry", "BrandUser"]
