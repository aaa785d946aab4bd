"""Brand-scoped data presentation module."""

from brands.presentation.current.routes import router

__all__ = ["router"]
