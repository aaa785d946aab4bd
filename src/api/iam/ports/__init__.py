"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and domain services without
specifying implementation details. This allows for dependency inversion
and makes the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    AccountDeletionError,
    DuplicateEmailError,
    InvalidCredentialsError,
    PrincipalNotFoundError,
    UnauthorizedError,
)
from iam.ports.repositories import IOwnedBrandsCleaner, IPrincipalRepository

__all__ = [
    "AccountDeletionError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "IOwnedBrandsCleaner",
    "IPrincipalRepository",
    "PrincipalNotFoundError",
    "UnauthorizedError",
]
