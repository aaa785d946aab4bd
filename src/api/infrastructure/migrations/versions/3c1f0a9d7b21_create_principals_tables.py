"""create principals tables

Revision ID: 3c1f0a9d7b21
Revises:
Create Date: 2026-09-02 10:12:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "principals",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_principals_email", "principals", ["email"], unique=True)

    op.create_table(
        "principal_roles",
        sa.Column("principal_id", sa.String(length=26), nullable=False),
        sa.Column("role", sa.String(length=50), nullable=False),
        sa.ForeignKeyConstraint(
            ["principal_id"],
            ["principals.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("principal_id", "role"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("principal_roles")
    op.drop_index("ix_principals_email", table_name="principals")
    op.drop_table("principals")
