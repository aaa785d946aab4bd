"""Error taxonomy shared by all bounded contexts.

Each bounded context defines its own exceptions in ``ports/exceptions.py``
and derives them from one of these kinds. The presentation layer maps a kind
to an HTTP status; the concrete subclass only refines the message.
"""


class DomainError(Exception):
    """Base class for all expected domain failures."""

    pass


class DomainValidationError(DomainError):
    """Raised when input violates a format or business rule.

    Reported synchronously, before any side effect takes place.
    """

    pass


class ConflictError(DomainError):
    """Raised when a uniqueness constraint is violated."""

    pass


class AuthenticationError(DomainError):
    """Raised when credentials or tokens cannot be verified.

    Messages must stay generic so callers cannot tell an unknown
    identifier apart from a wrong secret.
    """

    pass


class AuthorizationError(DomainError):
    """Raised when an authenticated caller lacks permission."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested aggregate does not exist."""

    pass


class InfrastructureError(DomainError):
    """Raised when the database or another dependency fails."""

    pass
