"""Domain-level exceptions for IAM aggregates and value objects."""

from shared_kernel.errors import DomainValidationError


class InvalidEmailError(DomainValidationError):
    """Raised when an email address is malformed."""

    pass


class WeakPasswordError(DomainValidationError):
    """Raised when a principal password does not meet the strength policy.

    Passwords need at least 8 characters with an upper-case letter,
    a lower-case letter and a digit.
    """

    pass
