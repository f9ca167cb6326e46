"""Share Service — recomputes and settles shares on stored expense snapshots.

Invariants:
    - Ownership references are checked against the snapshot before computing
    - Only shares are written back; item pricing is never modified here
    - Missing snapshots raise ResourceNotFoundError (never create on the fly)
"""

import logging

from tabsplit.core.allocation import OwnershipMap, check_ownership, compute_shares
from tabsplit.core.errors import ErrorContext, ResourceNotFoundError
from tabsplit.core.expense_schema import ExpenseSnapshot
from tabsplit.core.expense_snapshot import with_shares
from tabsplit.core.repository_protocols import ExpenseSnapshotStore
from tabsplit.core.settlement import mark_share_settled

logger = logging.getLogger(__name__)


async def get_snapshot_or_raise(
    store: ExpenseSnapshotStore, expense_id: str,
) -> ExpenseSnapshot:
    snapshot = await store.get(expense_id)
    if snapshot is None:
        raise ResourceNotFoundError(
            "Expense", expense_id, ErrorContext(expense_id=expense_id),
        )
    return snapshot


async def allocate_shares(
    store: ExpenseSnapshotStore, expense_id: str, ownership: OwnershipMap,
) -> ExpenseSnapshot:
    """Compute shares from ownership claims and persist them."""
    snapshot = await get_snapshot_or_raise(store, expense_id)
    check_ownership(snapshot.expense.items, snapshot.members, ownership)
    updated = with_shares(
        snapshot, compute_shares(snapshot.expense.items, ownership),
    )
    await store.upsert(updated)
    logger.info(
        "Shares recomputed",
        extra={"expense_id": expense_id, "share_count": len(updated.shares)},
    )
    return updated


async def settle_share(
    store: ExpenseSnapshotStore, expense_id: str, member_id: str,
) -> ExpenseSnapshot:
    """Drop a member's share once their external payment is confirmed."""
    snapshot = await get_snapshot_or_raise(store, expense_id)
    updated = mark_share_settled(snapshot, member_id)
    await store.upsert(updated)
    logger.info(
        "Share settled",
        extra={"expense_id": expense_id, "member_id": member_id},
    )
    return updated
