"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations store principals in the registry tables of the
administrative database.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import Principal
from iam.domain.value_objects import EmailAddress, PrincipalId


@runtime_checkable
class IPrincipalRepository(Protocol):
    """Repository for Principal aggregate persistence."""

    async def save(self, principal: Principal) -> None:
        """Persist a principal aggregate.

        Creates a new principal or updates an existing one, including its
        role set.

        Args:
            principal: The Principal aggregate to persist

        Raises:
            DuplicateEmailError: If another principal already uses the email
        """
        ...

    async def get_by_id(self, principal_id: PrincipalId) -> Principal | None:
        """Retrieve a principal by ID.

        Args:
            principal_id: The unique identifier of the principal

        Returns:
            The Principal aggregate, or None if not found
        """
        ...

    async def get_by_email(self, email: EmailAddress) -> Principal | None:
        """Retrieve a principal by normalized email.

        Args:
            email: The normalized email address

        Returns:
            The Principal aggregate, or None if not found
        """
        ...

    async def delete(self, principal_id: PrincipalId) -> bool:
        """Delete a principal and its role assignments.

        Args:
            principal_id: The principal to delete

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IOwnedBrandsCleaner(Protocol):
    """Deletes a principal together with every brand it owns.

    Implemented outside IAM (by the brand lifecycle context) so that IAM
    never depends on brand internals. Implementations must delete all owned
    brands before the principal record, and must leave the principal in
    place if any brand deletion fails.
    """

    async def delete_owner(self, owner_id: PrincipalId) -> int:
        """Delete every brand owned by the principal, then the principal.

        Args:
            owner_id: The principal being deleted

        Returns:
            Number of brands deleted

        Raises:
            AccountDeletionError: If any owned brand could not be deleted
        """
        ...
