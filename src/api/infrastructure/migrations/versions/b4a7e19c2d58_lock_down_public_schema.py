"""lock down public schema

Revision ID: b4a7e19c2d58
Revises: 8e52d4b0c6f3
Create Date: 2026-10-19 09:15:00.000000

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "b4a7e19c2d58"
down_revision: Union[str, Sequence[str], None] = "8e52d4b0c6f3"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Brand roles reach the public schema only through the PUBLIC grant
    op.execute("REVOKE CREATE ON SCHEMA public FROM PUBLIC")


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("GRANT CREATE ON SCHEMA public TO PUBLIC")
