"""Expense snapshots — single table backing the snapshot store.

Revision ID: 001_expense_snapshots
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_expense_snapshots"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "expense_snapshots",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("group_id", sa.Text, nullable=False),
        sa.Column("group_name", sa.Text, nullable=False),
        sa.Column("payer_id", sa.Text, nullable=False),
        sa.Column("members", sa.JSON, nullable=False),
        sa.Column("expense", sa.JSON, nullable=False),
        sa.Column("shares", sa.JSON, nullable=False),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("inserted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_expense_snapshots_group_id", "expense_snapshots", ["group_id"],
    )
    op.create_index(
        "ix_expense_snapshots_inserted_at", "expense_snapshots", ["inserted_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_expense_snapshots_inserted_at", table_name="expense_snapshots")
    op.drop_index("ix_expense_snapshots_group_id", table_name="expense_snapshots")
    op.drop_table("expense_snapshots")
