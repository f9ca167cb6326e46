"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - MemberId, ItemId, ExpenseId, GroupId wrap opaque strings — never compared across kinds
    - Cents is an integer count of minor currency units; all splitting happens in Cents
    - Line-item categories are a closed set encoded as an Enum

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON without custom encoders (ADR: invite payload is JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

MemberId = NewType("MemberId", str)
ItemId = NewType("ItemId", str)
ExpenseId = NewType("ExpenseId", str)
GroupId = NewType("GroupId", str)


# ─── Value Types ─────────────────────────────────────────────────

Cents = NewType("Cents", int)
SettlementId = NewType("SettlementId", int)


# ─── Enums ───────────────────────────────────────────────────────

class ItemCategory(str, Enum):
    """Line-item categories accepted on an expense document."""
    FOOD = "food"
    DRINKS = "drinks"
    UTILITIES = "utilities"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"
