"""Ports (interfaces) for the brands bounded context."""

from brands.ports.exceptions import (
    BrandAccessDeniedError,
    BrandAuthenticationError,
    BrandConflictError,
    BrandDeprovisioningError,
    BrandNotFoundError,
    BrandOwnerNotFoundError,
    BrandProvisioningError,
    CredentialDecryptionError,
    OwnerDeletionError,
)
from brands.ports.repositories import (
    IBrandConnection,
    IBrandConnectionRouter,
    IBrandDataStore,
    IBrandRepository,
    IBrandSchemaManager,
)
from brands.ports.services import ICredentialCipher

__all__ = [
    "BrandAccessDeniedError",
    "BrandAuthenticationError",
    "BrandConflictError",
    "BrandDeprovisioningError",
    "BrandNotFoundError",
    "BrandOwnerNotFoundError",
    "BrandProvisioningError",
    "CredentialDecryptionError",
    "IBrandConnection",
    "IBrandConnectionRouter",
    "IBrandDataStore",
    "IBrandRepository",
    "IBrandSchemaManager",
    "ICredentialCipher",
    "OwnerDeletionError",
]
