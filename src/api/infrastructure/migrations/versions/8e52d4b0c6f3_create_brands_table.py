"""create brands table

Revision ID: 8e52d4b0c6f3
Revises: 3c1f0a9d7b21
Create Date: 2026-09-02 10:40:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8e52d4b0c6f3"
down_revision: Union[str, Sequence[str], None] = "3c1f0a9d7b21"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "brands",
        sa.Column("id", sa.String(length=36), nullable=False),  # UUID
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("schema_name", sa.String(length=63), nullable=False),
        sa.Column("owner_id", sa.String(length=26), nullable=False),
        sa.Column("database_user", sa.String(length=63), nullable=False),
        sa.Column("encrypted_password", sa.Text(), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        # A principal cannot disappear while it still owns brands
        sa.ForeignKeyConstraint(
            ["owner_id"],
            ["principals.id"],
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Schema and role names are never reused; the constraint is the race guard
    op.create_index("ix_brands_schema_name", "brands", ["schema_name"], unique=True)
    op.create_index(
        "ix_brands_database_user", "brands", ["database_user"], unique=True
    )
    op.create_index("ix_brands_owner_id", "brands", ["owner_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_brands_owner_id", table_name="brands")
    op.drop_index("ix_brands_database_user", table_name="brands")
    op.drop_index("ix_brands_schema_name", table_name="brands")
    op.drop_table("brands")
