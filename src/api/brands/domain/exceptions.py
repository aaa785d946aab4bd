"""Domain-level exceptions for brand aggregates and value objects."""

from shared_kernel.errors import DomainValidationError


class InvalidBrandNameError(DomainValidationError):
    """Raised when a requested brand name violates the naming policy."""

    pass


class InvalidConfirmationError(DomainValidationError):
    """Raised when a deletion confirmation phrase is missing or wrong."""

    pass


class InvalidEntryError(DomainValidationError):
    """Raised when an info or config key/value is out of bounds."""

    pass
