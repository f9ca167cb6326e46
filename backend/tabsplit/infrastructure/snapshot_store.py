"""SQL Snapshot Store — ExpenseSnapshotStore implemented over an AsyncSession.

Invariants:
    - Every mutating call commits before returning (atomic per call)
    - upsert of an existing id replaces the row content but keeps inserted_at,
      so the snapshot keeps its position in newest-first listing
    - Concurrent upserts for one id are last-writer-wins
    - remove of a missing id is a no-op

Design Decisions:
    - Clock injected (default: UTC now) so insertion order is testable
    - SQLAlchemy errors surface as StoreError via DatabaseSessionManager.session()
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tabsplit.core.expense_schema import ExpenseSnapshot
from tabsplit.core.expense_snapshot import snapshot_from_record, snapshot_to_record
from tabsplit.models.expense_snapshot import ExpenseSnapshotRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_snapshot(row: ExpenseSnapshotRecord) -> ExpenseSnapshot:
    return snapshot_from_record({
        "id": row.id,
        "groupId": row.group_id,
        "groupName": row.group_name,
        "payerId": row.payer_id,
        "members": row.members,
        "expense": row.expense,
        "shares": row.shares,
        "createdAt": row.created_at,
    })


def _apply(row: ExpenseSnapshotRecord, record: dict) -> None:
    row.group_id = record["groupId"]
    row.group_name = record["groupName"]
    row.payer_id = record["payerId"]
    row.members = record["members"]
    row.expense = record["expense"]
    row.shares = record["shares"]
    row.created_at = record["createdAt"]


class SqlExpenseSnapshotStore:
    """Snapshot persistence on the expense_snapshots table."""

    def __init__(
        self, db: AsyncSession, clock: Callable[[], datetime] = _utcnow,
    ):
        self._db = db
        self._clock = clock

    async def get(self, snapshot_id: str) -> ExpenseSnapshot | None:
        row = await self._db.get(ExpenseSnapshotRecord, snapshot_id)
        return _to_snapshot(row) if row else None

    async def upsert(self, snapshot: ExpenseSnapshot) -> None:
        record = snapshot_to_record(snapshot)
        row = await self._db.get(ExpenseSnapshotRecord, snapshot.id)
        if row is None:
            row = ExpenseSnapshotRecord(id=snapshot.id, inserted_at=self._clock())
            self._db.add(row)
        else:
            row.updated_at = self._clock()
        _apply(row, record)
        await self._db.commit()
        logger.info(
            "Snapshot stored",
            extra={"expense_id": snapshot.id, "share_count": len(snapshot.shares)},
        )

    async def remove(self, snapshot_id: str) -> None:
        row = await self._db.get(ExpenseSnapshotRecord, snapshot_id)
        if row is None:
            return
        await self._db.delete(row)
        await self._db.commit()
        logger.info("Snapshot removed", extra={"expense_id": snapshot_id})

    async def list(self) -> list[ExpenseSnapshot]:
        """All snapshots, newest first."""
        result = await self._db.execute(
            select(ExpenseSnapshotRecord).order_by(
                ExpenseSnapshotRecord.inserted_at.desc(),
            ),
        )
        return [_to_snapshot(row) for row in result.scalars().all()]
