"""Database-specific exceptions shared by all bounded contexts."""

from shared_kernel.errors import DomainValidationError, InfrastructureError


class DatabaseError(InfrastructureError):
    """Base exception for database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when database connection fails."""

    pass


class TransactionError(DatabaseError):
    """Raised when transaction operations fail."""

    pass


class UnsafeIdentifierError(DomainValidationError):
    """Raised when a schema or role name is not a safe SQL identifier.

    Schema and role names cannot be bound as parameters in DDL, so they are
    validated before being interpolated into a statement.
    """

    def __init__(self, identifier: str):
        super().__init__(f"Unsafe SQL identifier: {identifier!r}")
        self.identifier = identifier
