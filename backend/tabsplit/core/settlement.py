"""Settlement — numeric ledger references and outstanding-payment planning.

Invariants:
    - derive_settlement_id is a pure function of its input: same string, same id, always
    - It is a weighted character sum, NOT a hash: distinct expense ids may collide
    - Characters are weighed by UTF-16 code unit, matching ids already referenced
      on the ledger by browser clients (astral characters count as two units)
    - The payer never owes themselves; non-positive shares produce no instruction

Design Decisions:
    - Collisions accepted (ADR: ids are scoped per group/session on the ledger and the
      ledger only uses them as a reference tag). Replacing the mapping would change
      ids of already-settled expenses, so it stays as is
    - Instructions are plain frozen dataclasses: output only, never re-validated
"""

from dataclasses import dataclass
from decimal import Decimal
from collections.abc import Iterable

from tabsplit.core.domain_types import SettlementId
from tabsplit.core.expense_schema import ExpenseSnapshot


def _utf16_code_units(value: str) -> list[int]:
    data = value.encode("utf-16-le")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def derive_settlement_id(expense_id: str) -> SettlementId:
    """Σ code_unit(c_i) × (i + 1) over the expense id."""
    return SettlementId(sum(
        code * (index + 1)
        for index, code in enumerate(_utf16_code_units(expense_id))
    ))


@dataclass(frozen=True)
class PaymentInstruction:
    """One payment a member owes the payer for one expense."""
    expense_id: str
    settlement_id: SettlementId
    member_id: str
    member_name: str
    payee_address: str
    amount: Decimal


def outstanding_payments(
    snapshots: Iterable[ExpenseSnapshot], wallet_address: str,
) -> list[PaymentInstruction]:
    """Payments owed by the member whose payout address is `wallet_address`."""
    wallet = wallet_address.lower()
    instructions: list[PaymentInstruction] = []
    for snapshot in snapshots:
        payer = next((m for m in snapshot.members if m.id == snapshot.payer_id), None)
        if payer is None:
            continue
        member = next(
            (m for m in snapshot.members if m.payout_address.lower() == wallet), None,
        )
        if member is None or member.id == payer.id:
            continue
        for share in snapshot.shares:
            if share.member_id != member.id or share.amount <= 0:
                continue
            instructions.append(PaymentInstruction(
                expense_id=snapshot.id,
                settlement_id=derive_settlement_id(snapshot.id),
                member_id=member.id,
                member_name=member.display_name,
                payee_address=payer.payout_address,
                amount=share.amount,
            ))
    return instructions


def mark_share_settled(snapshot: ExpenseSnapshot, member_id: str) -> ExpenseSnapshot:
    """Snapshot without the settled member's share."""
    return snapshot.model_copy(update={
        "shares": [s for s in snapshot.shares if s.member_id != member_id],
    })
