"""SQLAlchemy declarative base for the registry tables.

Only the administrative ``public`` schema is mapped here. Brand schemas use
plain ``Table`` objects built per brand (see ``brands.infrastructure.brand_tables``).
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Constraint names match what PostgreSQL and the migrations produce, so
# repositories can recognise unique violations by name.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "%(table_name)s_pkey",
}


def utc_now() -> datetime:
    """Timezone-aware UTC timestamp, evaluated at INSERT/UPDATE time."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for the registry ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class TimestampMixin:
    """Adds ``created_at`` and ``updated_at`` columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
