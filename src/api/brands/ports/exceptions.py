"""Domain exceptions for the brands bounded context.

Each exception derives from a kind in the shared error taxonomy so the
presentation layer can map it to a status code without knowing the
concrete class.
"""

from iam.ports.exceptions import AccountDeletionError
from shared_kernel.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InfrastructureError,
    NotFoundError,
)


class BrandNotFoundError(NotFoundError):
    """Raised when a brand does not exist or is not active."""

    pass


class BrandConflictError(ConflictError):
    """Raised when a brand namespace, role or registry row already exists."""

    pass


class BrandOwnerNotFoundError(NotFoundError):
    """Raised when the owning principal vanished while reserving a brand."""

    pass


class BrandAuthenticationError(AuthenticationError):
    """Raised when brand credentials do not verify.

    The message is identical for unknown brands, unknown API keys, wrong
    passwords and inactive users.
    """

    def __init__(self, message: str = "Invalid brand credentials"):
        super().__init__(message)


class BrandAccessDeniedError(AuthorizationError):
    """Raised when a caller may not act on a brand or brand resource."""

    pass


class BrandProvisioningError(InfrastructureError):
    """Raised when brand creation failed and was rolled back."""

    pass


class BrandDeprovisioningError(InfrastructureError):
    """Raised when a brand's schema or role could not be dropped.

    The registry row stays in place, inactive, so deletion can be retried.
    """

    pass


class OwnerDeletionError(AccountDeletionError):
    """Raised when at least one owned brand could not be deleted."""

    pass


class CredentialDecryptionError(InfrastructureError):
    """Raised when a stored database credential cannot be decrypted."""

    pass
