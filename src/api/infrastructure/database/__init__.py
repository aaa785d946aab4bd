"""Database infrastructure - shared connection primitives."""

from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    TransactionError,
    UnsafeIdentifierError,
)

__all__ = [
    "DatabaseConnectionError",
    "DatabaseError",
    "TransactionError",
    "UnsafeIdentifierError",
]
