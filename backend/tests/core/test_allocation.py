"""Allocation Engine — exact splitting, conservation, and ownership editing.

Tests cover:
    - Remainder cents go to the earliest participants, order-dependent
    - Conservation over many item/participant combinations
    - Unclaimed items contribute nothing
    - Members with zero cents get no Share
    - check_ownership rejects unknown items/members
    - default_ownership / toggle_claim / set_member_on_all never mutate input
"""

from decimal import Decimal

import pytest

from tabsplit.core.allocation import (
    check_ownership, claimed_total_cents, compute_member_cents, compute_shares,
    default_ownership, set_member_on_all, split_cents, toggle_claim,
)
from tabsplit.core.errors import UnknownReferenceError, ValidationError
from tabsplit.core.expense_schema import GroupMember, LineItem, MAX_AMOUNT
from tabsplit.core.money import to_cents


def _by_member(shares) -> dict[str, Decimal]:
    return {s.member_id: s.amount for s in shares}


# ─── Tie-break ───────────────────────────────────────────────────

def test_remainder_goes_to_first_participants(item_factory):
    items = [item_factory("i1", "1.00")]
    cents = compute_member_cents(items, {"i1": ["A", "B", "C"]})
    assert cents == {"A": 34, "B": 33, "C": 33}


def test_reordering_participants_moves_the_extra_cent(item_factory):
    items = [item_factory("i1", "1.00")]
    cents = compute_member_cents(items, {"i1": ["C", "B", "A"]})
    assert cents == {"C": 34, "B": 33, "A": 33}


def test_split_cents_remainder_bounds():
    parts = split_cents(101, ["A", "B", "C", "D"])
    assert [c for _, c in parts] == [26, 25, 25, 25]
    assert sum(c for _, c in parts) == 101


# ─── Conservation ────────────────────────────────────────────────

@pytest.mark.parametrize("participant_count", range(1, 9))
@pytest.mark.parametrize("price,quantity", [
    ("0.01", "1"), ("10.00", "1"), ("3.33", "3"), ("99.99", "7"),
    ("0.10", "0.5"), ("12.345", "1"), ("0", "2"),
])
def test_conservation(item_factory, participant_count, price, quantity):
    members = [f"m{i}" for i in range(participant_count)]
    items = [
        item_factory("a", price, quantity),
        item_factory("b", "1.07"),
        item_factory("c", "5.00"),
    ]
    ownership = {"a": members, "b": members[::-1], "c": members[:1]}
    shares = compute_shares(items, ownership)
    total = sum(to_cents(s.amount) for s in shares)
    assert total == claimed_total_cents(items, ownership)


def test_accumulates_across_items(item_factory):
    items = [item_factory("i1", "10.00"), item_factory("i2", "2.50", "3")]
    shares = compute_shares(items, {"i1": ["P", "Q"], "i2": ["Q"]})
    assert _by_member(shares) == {"P": Decimal("5.00"), "Q": Decimal("12.50")}


def test_item_total_rounds_half_up(item_factory):
    items = [item_factory("i1", "0.125")]
    assert compute_member_cents(items, {"i1": ["A"]}) == {"A": 13}


def test_largest_allowed_line_splits_exactly():
    item = LineItem(
        id="i1", name="yacht", quantity=Decimal("9999"),
        unit_price=MAX_AMOUNT, category="other",
    )
    shares = compute_shares([item], {"i1": ["A", "B", "C"]})
    total = sum(to_cents(s.amount) for s in shares)
    assert total == 9999 * int(MAX_AMOUNT) * 100
    assert claimed_total_cents([item], {"i1": ["A", "B", "C"]}) == total


# ─── Unclaimed items ─────────────────────────────────────────────

def test_unclaimed_items_excluded(item_factory):
    items = [item_factory("i1", "10.00"), item_factory("i2", "4.00"), item_factory("i3", "1.00")]
    ownership = {"i1": ["Q"], "i2": []}
    shares = compute_shares(items, ownership)
    assert _by_member(shares) == {"Q": Decimal("10.00")}
    assert claimed_total_cents(items, ownership) == 1000


def test_zero_cent_members_have_no_share(item_factory):
    items = [item_factory("i1", "0.01")]
    shares = compute_shares(items, {"i1": ["A", "B"]})
    assert _by_member(shares) == {"A": Decimal("0.01")}


def test_no_claims_yields_no_shares(item_factory):
    assert compute_shares([item_factory("i1", "3.00")], {}) == []


def test_amounts_are_exact_two_place_decimals(item_factory):
    shares = compute_shares([item_factory("i1", "10")], {"i1": ["A", "B", "C"]})
    assert [str(s.amount) for s in shares] == ["3.34", "3.33", "3.33"]


def test_ownership_for_unknown_item_is_ignored_by_engine(item_factory):
    shares = compute_shares([item_factory("i1", "1.00")], {"ghost": ["A"]})
    assert shares == []


# ─── Ownership validation ────────────────────────────────────────

def _members(*ids):
    return [GroupMember(id=i, display_name=i, payout_address=f"0x{i}") for i in ids]


def test_check_ownership_accepts_known_refs(item_factory):
    check_ownership([item_factory("i1", "1")], _members("A", "B"), {"i1": ["B", "A"]})


def test_check_ownership_rejects_unknown_item(item_factory):
    with pytest.raises(UnknownReferenceError) as exc:
        check_ownership([item_factory("i1", "1")], _members("A"), {"i9": ["A"]})
    assert exc.value.kind == "item"
    assert isinstance(exc.value, ValidationError)


def test_check_ownership_rejects_unknown_member(item_factory):
    with pytest.raises(UnknownReferenceError) as exc:
        check_ownership([item_factory("i1", "1")], _members("A"), {"i1": ["A", "Z"]})
    assert exc.value.kind == "member"
    assert exc.value.reference_id == "Z"


# ─── Ownership editing ───────────────────────────────────────────

def test_default_ownership_assigns_payer(item_factory):
    items = [item_factory("i1", "1"), item_factory("i2", "2")]
    assert default_ownership(items, "P") == {"i1": ["P"], "i2": ["P"]}


def test_toggle_claim_appends_then_removes():
    original = {"i1": ["P"]}
    added = toggle_claim(original, "i1", "Q")
    assert added == {"i1": ["P", "Q"]}
    assert original == {"i1": ["P"]}
    assert toggle_claim(added, "i1", "P") == {"i1": ["Q"]}


def test_toggle_claim_on_new_item():
    assert toggle_claim({}, "i2", "Q") == {"i2": ["Q"]}


def test_set_member_on_all_include_and_exclude(item_factory):
    items = [item_factory("i1", "1"), item_factory("i2", "2")]
    original = {"i1": ["P"]}
    included = set_member_on_all(original, items, "Q", include=True)
    assert included == {"i1": ["P", "Q"], "i2": ["Q"]}
    assert original == {"i1": ["P"]}
    excluded = set_member_on_all(included, items, "P", include=False)
    assert excluded == {"i1": ["Q"], "i2": ["Q"]}
