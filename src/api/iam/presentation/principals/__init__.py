"""Principal account routes and models."""

from iam.presentation.principals.routes import router

__all__ = ["router"]
