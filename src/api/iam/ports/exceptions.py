"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository and service operations. They should be caught and handled by
the presentation layer.
"""

from shared_kernel.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InfrastructureError,
    NotFoundError,
)


class DuplicateEmailError(ConflictError):
    """Raised when registering a principal with an email already in use.

    Email addresses are unique system-wide. The application layer should
    handle this and provide appropriate feedback to the user.
    """

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not verify.

    The message never reveals whether the email exists.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class UnauthorizedError(AuthorizationError):
    """Raised when a principal is not allowed to perform an operation."""

    pass


class PrincipalNotFoundError(NotFoundError):
    """Raised when a principal does not exist."""

    pass


class AccountDeletionError(InfrastructureError):
    """Raised when the owned brands of a principal could not all be deleted.

    The principal record is kept so that no brand is left without an owner.
    """

    pass
