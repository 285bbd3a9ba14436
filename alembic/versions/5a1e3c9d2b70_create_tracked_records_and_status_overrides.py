"""Create tracked records and status overrides

Revision ID: 5a1e3c9d2b70
Revises:
Create Date: 2026-10-17
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5a1e3c9d2b70"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tracked_records",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("dosage", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("rule", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
    )
    op.create_index(op.f("ix_tracked_records_deleted_at"), "tracked_records", ["deleted_at"], unique=False)

    op.create_table(
        "status_overrides",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("parent_id", sa.String(), sa.ForeignKey("tracked_records.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("time", sa.String(length=5), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("parent_id", "date", "time", name="uq_status_override_key"),
    )
    op.create_index(op.f("ix_status_overrides_parent_id"), "status_overrides", ["parent_id"], unique=False)
    op.create_index(op.f("ix_status_overrides_date"), "status_overrides", ["date"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_status_overrides_date"), table_name="status_overrides")
    op.drop_index(op.f("ix_status_overrides_parent_id"), table_name="status_overrides")
    op.drop_table("status_overrides")

    op.drop_index(op.f("ix_tracked_records_deleted_at"), table_name="tracked_records")
    op.drop_table("tracked_records")
