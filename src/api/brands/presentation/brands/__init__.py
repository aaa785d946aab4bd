"""Brand management presentation module."""

from brands.presentation.brands.routes import router

__all__ = ["router"]
