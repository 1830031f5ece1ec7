"""Create studio snapshots table."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_create_studio_snapshots_table"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "studio_snapshots",
        sa.Column("studio_id", sa.String(length=64), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column(
            "saved_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("studio_id", name="pk_studio_snapshots"),
    )


def downgrade() -> None:
    op.drop_table("studio_snapshots")
