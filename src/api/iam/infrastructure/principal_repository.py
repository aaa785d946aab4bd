"""PostgreSQL implementation of IPrincipalRepository.

Principals live in the registry tables of the administrative database. The
repository never opens transactions itself; the calling service owns the
transaction boundary.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Principal
from iam.domain.value_objects import EmailAddress, PrincipalId, PrincipalRole
from iam.infrastructure.models import PrincipalModel, PrincipalRoleModel
from iam.infrastructure.observability import (
    DefaultPrincipalRepositoryProbe,
    PrincipalRepositoryProbe,
)
from iam.ports.exceptions import DuplicateEmailError
from iam.ports.repositories import IPrincipalRepository


class PrincipalRepository(IPrincipalRepository):
    """Repository managing PostgreSQL storage for Principal aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: PrincipalRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultPrincipalRepositoryProbe()

    async def save(self, principal: Principal) -> None:
        """Persist principal metadata and roles.

        Args:
            principal: The Principal aggregate to persist

        Raises:
            DuplicateEmailError: If the email already belongs to another principal
        """
        existing = await self.get_by_email(principal.email)
        if existing and existing.id != principal.id:
            self._probe.duplicate_email(principal.id.value)
            raise DuplicateEmailError("Email address is already registered")

        try:
            stmt = select(PrincipalModel).where(PrincipalModel.id == principal.id.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model is None:
                model = PrincipalModel(
                    id=principal.id.value,
                    email=principal.email.value,
                    password_hash=principal.password_hash,
                    full_name=principal.full_name,
                    last_login_at=principal.last_login_at,
                    created_at=principal.created_at,
                    updated_at=principal.updated_at,
                    roles=[
                        PrincipalRoleModel(role=role.value)
                        for role in principal.roles
                    ],
                )
                self._session.add(model)
            else:
                model.email = principal.email.value
                model.password_hash = principal.password_hash
                model.full_name = principal.full_name
                model.last_login_at = principal.last_login_at
                current = {r.role for r in model.roles}
                wanted = {role.value for role in principal.roles}
                model.roles = [r for r in model.roles if r.role in wanted] + [
                    PrincipalRoleModel(role=role) for role in sorted(wanted - current)
                ]

            # Flush to surface integrity errors inside the caller's transaction
            await self._session.flush()
            self._probe.principal_saved(principal.id.value)

        except IntegrityError as e:
            if "ix_principals_email" in str(e) or "principals_email" in str(e):
                self._probe.duplicate_email(principal.id.value)
                raise DuplicateEmailError(
                    "Email address is already registered"
                ) from e
            raise

    async def get_by_id(self, principal_id: PrincipalId) -> Principal | None:
        """Fetch a principal by ID.

        Args:
            principal_id: The unique identifier of the principal

        Returns:
            The Principal aggregate, or None if not found
        """
        stmt = select(PrincipalModel).where(PrincipalModel.id == principal_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.principal_not_found(principal_id.value)
            return None

        self._probe.principal_retrieved(model.id)
        return self._to_domain(model)

    async def get_by_email(self, email: EmailAddress) -> Principal | None:
        """Fetch a principal by normalized email.

        Args:
            email: The normalized email address

        Returns:
            The Principal aggregate, or None if not found
        """
        stmt = select(PrincipalModel).where(PrincipalModel.email == email.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.principal_retrieved(model.id)
        return self._to_domain(model)

    async def delete(self, principal_id: PrincipalId) -> bool:
        """Delete a principal; role rows go with it (ON DELETE CASCADE).

        Args:
            principal_id: The principal to delete

        Returns:
            True if deleted, False if not found
        """
        stmt = delete(PrincipalModel).where(PrincipalModel.id == principal_id.value)
        result = await self._session.execute(stmt)
        await self._session.flush()

        if result.rowcount == 0:
            self._probe.principal_not_found(principal_id.value)
            return False

        self._probe.principal_deleted(principal_id.value)
        return True

    @staticmethod
    def _to_domain(model: PrincipalModel) -> Principal:
        return Principal(
            id=PrincipalId(value=model.id),
            email=EmailAddress(value=model.email),
            password_hash=model.password_hash,
            full_name=model.full_name,
            roles=frozenset(PrincipalRole(r.role) for r in model.roles),
            last_login_at=model.last_login_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
