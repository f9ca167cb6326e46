"""Expense Snapshot — pure transforms between invite payloads, shares and snapshots.

Invariants:
    - snapshot_from_invite keys the snapshot by the payload's expenseId, with no shares
    - with_shares replaces shares only; item pricing is never touched here
    - to_record / from_record round-trip through JSON-safe dicts (camelCase keys)
"""

from tabsplit.core.expense_schema import ExpenseSnapshot, InvitePayload, Share


def snapshot_from_invite(payload: InvitePayload) -> ExpenseSnapshot:
    """Fresh snapshot for an accepted invite."""
    return ExpenseSnapshot(
        id=payload.expense_id,
        group_id=payload.group_id,
        group_name=payload.group_name,
        payer_id=payload.payer_id,
        members=payload.members,
        expense=payload.expense,
        shares=[],
        created_at=payload.created_at,
    )


def with_shares(snapshot: ExpenseSnapshot, shares: list[Share]) -> ExpenseSnapshot:
    return snapshot.model_copy(update={"shares": list(shares)})


def snapshot_to_record(snapshot: ExpenseSnapshot) -> dict:
    """JSON-safe dict (Decimals as strings) for persistence."""
    return snapshot.model_dump(mode="json", by_alias=True)


def snapshot_from_record(record: dict) -> ExpenseSnapshot:
    return ExpenseSnapshot.model_validate(record)
