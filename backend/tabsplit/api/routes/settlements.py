"""Settlement Routes — payments a wallet still owes across stored expenses.

Invariants:
    - Wallet matching is case-insensitive
    - The payer's own share is never listed as owed
"""

from fastapi import APIRouter, Depends, Query

from tabsplit.api.dependencies import get_store
from tabsplit.core.settlement import outstanding_payments
from tabsplit.infrastructure.snapshot_store import SqlExpenseSnapshotStore
from tabsplit.schemas.invite import PaymentInstructionResponse

router = APIRouter(prefix="/api/v1/settlements", tags=["settlements"])


@router.get("", response_model=list[PaymentInstructionResponse])
async def list_outstanding_payments(
    wallet: str = Query(..., min_length=1),
    store: SqlExpenseSnapshotStore = Depends(get_store),
):
    """Payment instructions for the member owning `wallet`."""
    snapshots = await store.list()
    return [
        PaymentInstructionResponse(
            expense_id=p.expense_id,
            settlement_id=p.settlement_id,
            member_id=p.member_id,
            member_name=p.member_name,
            payee_address=p.payee_address,
            amount=p.amount,
        )
        for p in outstanding_payments(snapshots, wallet)
    ]
