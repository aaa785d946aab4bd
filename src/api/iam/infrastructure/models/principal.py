"""SQLAlchemy ORM models for the principals and principal_roles tables.

Principals are system-level accounts. Roles are stored one row per role so
that new roles do not need a schema change.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin


class PrincipalModel(Base, TimestampMixin):
    """ORM model for principals table.

    Note: email is stored lower-cased and is unique across the system.
    """

    __tablename__ = "principals"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    roles: Mapped[list["PrincipalRoleModel"]] = relationship(
        back_populates="principal",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PrincipalModel(id={self.id}, email={self.email})>"


class PrincipalRoleModel(Base):
    """ORM model for principal_roles table."""

    __tablename__ = "principal_roles"

    principal_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("principals.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role: Mapped[str] = mapped_column(String(50), primary_key=True)

    principal: Mapped[PrincipalModel] = relationship(back_populates="roles")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PrincipalRoleModel(principal_id={self.principal_id}, role={self.role})>"
