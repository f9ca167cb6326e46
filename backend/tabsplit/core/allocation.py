"""Allocation Engine — turns per-item ownership claims into exact per-member shares.

Invariants:
    - All arithmetic in integer cents; amounts converted back exactly (cents / 100)
    - Conservation: sum(shares) == sum(item totals with >= 1 participant), to the cent
    - Remainder cents go one each to the FIRST `remainder` participants in list order
    - Unclaimed items (absent or empty list) contribute zero to every member
    - Only members with nonzero accumulated cents get a Share, in first-claim order
    - Every function here is pure; ownership maps are never mutated in place

Design Decisions:
    - Positional tie-break, not largest-remainder (ADR: callers control fairness by
      ordering participants, e.g. payer last — participant order is part of the
      OwnershipMap contract and must survive reloads unchanged)
    - compute_shares ignores ownership keys that match no item; check_ownership is
      the explicit gate the service layer runs first
"""

from collections.abc import Iterable, Mapping, Sequence

from tabsplit.core.domain_types import Cents
from tabsplit.core.errors import UnknownReferenceError
from tabsplit.core.expense_schema import GroupMember, LineItem, Share
from tabsplit.core.money import from_cents, line_total_cents

OwnershipMap = Mapping[str, Sequence[str]]


def split_cents(total: int, participants: Sequence[str]) -> list[tuple[str, int]]:
    """Split `total` cents across participants, remainder to the earliest."""
    count = len(participants)
    base_share, remainder = divmod(total, count)
    return [
        (member_id, base_share + (1 if index < remainder else 0))
        for index, member_id in enumerate(participants)
    ]


def compute_member_cents(
    items: Iterable[LineItem], ownership: OwnershipMap,
) -> dict[str, Cents]:
    """Accumulated cents per member across all claimed items. Pure, no IO."""
    totals: dict[str, int] = {}
    for item in items:
        participants = ownership.get(item.id) or []
        if not participants:
            continue
        item_cents = line_total_cents(item.quantity, item.unit_price)
        for member_id, cents in split_cents(item_cents, participants):
            totals[member_id] = totals.get(member_id, 0) + cents
    return {member_id: Cents(cents) for member_id, cents in totals.items()}


def compute_shares(
    items: Iterable[LineItem], ownership: OwnershipMap,
) -> list[Share]:
    """Exact per-member shares for the claimed items."""
    return [
        Share(member_id=member_id, amount=from_cents(cents))
        for member_id, cents in compute_member_cents(items, ownership).items()
        if cents > 0
    ]


def claimed_total_cents(items: Iterable[LineItem], ownership: OwnershipMap) -> Cents:
    """Sum of item totals that have at least one participant."""
    return Cents(sum(
        line_total_cents(item.quantity, item.unit_price)
        for item in items if ownership.get(item.id)
    ))


def check_ownership(
    items: Iterable[LineItem],
    members: Iterable[GroupMember],
    ownership: OwnershipMap,
) -> None:
    """Reject ownership maps that reference unknown items or members."""
    item_ids = {item.id for item in items}
    member_ids = {member.id for member in members}
    for item_id, participants in ownership.items():
        if item_id not in item_ids:
            raise UnknownReferenceError("item", item_id)
        for member_id in participants:
            if member_id not in member_ids:
                raise UnknownReferenceError("member", member_id)


# ─── Ownership editing ───────────────────────────────────────────

def default_ownership(items: Iterable[LineItem], payer_id: str) -> dict[str, list[str]]:
    """Every item initially claimed by the payer alone."""
    return {item.id: [payer_id] for item in items}


def toggle_claim(
    ownership: OwnershipMap, item_id: str, member_id: str,
) -> dict[str, list[str]]:
    """Add member to the item's claimants, or remove them if already present.

    A newly added member goes last; the order of the others is kept.
    """
    updated = {key: list(value) for key, value in ownership.items()}
    participants = updated.setdefault(item_id, [])
    if member_id in participants:
        participants.remove(member_id)
    else:
        participants.append(member_id)
    return updated


def set_member_on_all(
    ownership: OwnershipMap,
    items: Iterable[LineItem],
    member_id: str,
    include: bool,
) -> dict[str, list[str]]:
    """Claim (include=True) or release every item for one member."""
    updated = {key: list(value) for key, value in ownership.items()}
    for item in items:
        participants = updated.setdefault(item.id, [])
        if include and member_id not in participants:
            participants.append(member_id)
        elif not include and member_id in participants:
            participants.remove(member_id)
    return updated
