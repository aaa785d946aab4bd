"""Shared middleware for cross-cutting concerns.

This module contains ASGI middleware shared across bounded contexts. The
auth context middleware is the primary component: it resolves the request
identity once and exposes it on ``request.state.identity``.
"""

from shared_kernel.middleware.auth_context import (
    AuthContextMiddleware,
    resolve_identity,
)

__all__ = [
    "AuthContextMiddleware",
    "resolve_identity",
]
