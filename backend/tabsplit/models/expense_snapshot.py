"""Expense Snapshot ORM — persisted row backing the ExpenseSnapshotStore contract.

Invariants:
    - id is the expense id from the invite (string primary key, not generated)
    - members/expense/shares hold the JSON-safe dumps produced by core/expense_snapshot.py
    - created_at is the payload's own timestamp string, kept verbatim
    - inserted_at is set once on first insert and drives newest-first listing
    - String columns are unbounded Text: ids and timestamps are only length-checked
      by the pydantic schemas, which set no upper bound

Design Decisions:
    - JSON columns over normalized tables: the snapshot is read and written whole,
      never queried by item or share (ADR: mirrors the invite token's shape)
"""

from datetime import datetime, timezone

from sqlalchemy import Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from tabsplit.db.base import Base


class ExpenseSnapshotRecord(Base):
    """Persisted expense snapshot."""
    __tablename__ = "expense_snapshots"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    group_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    group_name: Mapped[str] = mapped_column(Text, nullable=False)
    payer_id: Mapped[str] = mapped_column(Text, nullable=False)
    members: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    expense: Mapped[dict] = mapped_column(JSON, nullable=False)
    shares: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    inserted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
