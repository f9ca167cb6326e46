"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - ItemCategory is the closed set of six categories and serializes to string
"""

from tabsplit.core.domain_types import (
    MemberId, ItemId, ExpenseId, GroupId, Cents, SettlementId, ItemCategory,
)


def test_identity_types_wrap_str():
    assert MemberId("m1") == "m1"
    assert ItemId("i1") == "i1"
    assert ExpenseId("e1") == "e1"
    assert GroupId("g1") == "g1"


def test_value_types_wrap_int():
    assert Cents(1050) == 1050
    assert SettlementId(590) == 590


def test_item_category_has_six_members():
    assert {c.value for c in ItemCategory} == {
        "food", "drinks", "utilities", "transport", "entertainment", "other",
    }


def test_item_category_serializes_to_string():
    assert ItemCategory.FOOD.value == "food"
    assert ItemCategory("other") is ItemCategory.OTHER
