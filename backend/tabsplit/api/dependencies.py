"""Route Dependencies — FastAPI providers shared by the invite and expense routes."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tabsplit.infrastructure.database import get_db
from tabsplit.infrastructure.snapshot_store import SqlExpenseSnapshotStore


async def get_store(db: AsyncSession = Depends(get_db)) -> SqlExpenseSnapshotStore:
    return SqlExpenseSnapshotStore(db)
