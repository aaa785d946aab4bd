"""SQLAlchemy ORM model for the brands registry table."""

from sqlalchemy import Boolean, ForeignKey, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class BrandModel(Base, TimestampMixin):
    """ORM model for brands table.

    Note: schema_name and database_user are unique and derived from the id.
    The owner foreign key restricts deletes, so owned brands must be removed
    before their principal.
    """

    __tablename__ = "brands"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    schema_name: Mapped[str] = mapped_column(
        String(63), nullable=False, unique=True, index=True
    )
    owner_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("principals.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    database_user: Mapped[str] = mapped_column(
        String(63), nullable=False, unique=True, index=True
    )
    encrypted_password: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<BrandModel(id={self.id}, schema_name={self.schema_name})>"
