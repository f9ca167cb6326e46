"""Expense Routes — snapshot CRUD, share allocation, and settlement bookkeeping.

Invariants:
    - PUT /expenses/{id} requires body.id == path id
    - Allocation writes shares only; item prices are never changed by these routes
    - DELETE is idempotent (204 whether or not the snapshot existed)
    - /analytics is declared before /{expense_id} so it is never read as an id
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Response, status

from tabsplit.api.dependencies import get_store
from tabsplit.core.analytics import group_by_month, totals_by_category
from tabsplit.core.errors import ErrorContext, ValidationError
from tabsplit.core.expense_schema import ExpenseSnapshot
from tabsplit.core.settlement import derive_settlement_id
from tabsplit.infrastructure.snapshot_store import SqlExpenseSnapshotStore
from tabsplit.schemas.invite import (
    AllocationUpdate, CategoryTotalResponse, MonthlyTotalResponse,
    SettlementIdResponse, SpendingAnalyticsResponse,
)
from tabsplit.services.share_service import (
    allocate_shares, get_snapshot_or_raise, settle_share,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/expenses", tags=["expenses"])


@router.get("", response_model=list[ExpenseSnapshot])
async def list_expenses(store: SqlExpenseSnapshotStore = Depends(get_store)):
    """All stored snapshots, newest first."""
    return await store.list()


@router.get("/analytics", response_model=SpendingAnalyticsResponse)
async def get_spending_analytics(
    within_days: int = Query(30, ge=0, le=3650, alias="withinDays"),
    store: SqlExpenseSnapshotStore = Depends(get_store),
):
    """Monthly expense totals and recent per-category item spend."""
    snapshots = await store.list()
    now = datetime.now(timezone.utc)
    return SpendingAnalyticsResponse(
        within_days=within_days,
        by_month=[
            MonthlyTotalResponse(month=m.month, total=m.total)
            for m in group_by_month(snapshots)
        ],
        by_category=[
            CategoryTotalResponse(category=c.category, total=c.total)
            for c in totals_by_category(snapshots, within_days, now)
        ],
    )


@router.get("/{expense_id}", response_model=ExpenseSnapshot)
async def get_expense(
    expense_id: str, store: SqlExpenseSnapshotStore = Depends(get_store),
):
    return await get_snapshot_or_raise(store, expense_id)


@router.put("/{expense_id}", response_model=ExpenseSnapshot)
async def upsert_expense(
    expense_id: str,
    body: ExpenseSnapshot,
    store: SqlExpenseSnapshotStore = Depends(get_store),
):
    """Create or replace a snapshot (payer saving a bill, or UI edits)."""
    if body.id != expense_id:
        raise ValidationError(
            "Snapshot id does not match path",
            [{"field": "id", "message": "must equal path id", "type": "value_error"}],
            ErrorContext(expense_id=expense_id),
        )
    await store.upsert(body)
    return body


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: str, store: SqlExpenseSnapshotStore = Depends(get_store),
):
    await store.remove(expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{expense_id}/allocation", response_model=ExpenseSnapshot)
async def update_allocation(
    expense_id: str,
    body: AllocationUpdate,
    store: SqlExpenseSnapshotStore = Depends(get_store),
):
    """Recompute shares from ownership claims and persist them."""
    return await allocate_shares(store, expense_id, body.ownership)


@router.get("/{expense_id}/settlement-id", response_model=SettlementIdResponse)
async def get_settlement_id(
    expense_id: str, store: SqlExpenseSnapshotStore = Depends(get_store),
):
    await get_snapshot_or_raise(store, expense_id)
    return SettlementIdResponse(
        expense_id=expense_id, settlement_id=derive_settlement_id(expense_id),
    )


@router.post(
    "/{expense_id}/shares/{member_id}/settle", response_model=ExpenseSnapshot,
)
async def settle_member_share(
    expense_id: str,
    member_id: str,
    store: SqlExpenseSnapshotStore = Depends(get_store),
):
    """Record that a member paid their share on the external ledger."""
    return await settle_share(store, expense_id, member_id)
