"""SQLAlchemy ORM models for the brands registry."""

from brands.infrastructure.models.brand import BrandModel

__all__ = ["BrandModel"]
