"""Spending Analytics — month bucketing, date fallback, and category windows.

Tests cover:
    - Monthly totals sum expense.total per month, newest month first
    - createdAt falls back to expense.date; neither parsing → "Unknown"
    - Offsets are normalized to UTC before picking the month
    - Category totals use item line totals within the day window only
    - Sums are exact in cents
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from tabsplit.core.analytics import (
    UNKNOWN_MONTH, CategoryTotal, MonthlyTotal, group_by_month, month_key,
    totals_by_category,
)
from tabsplit.core.domain_types import ItemCategory
from tabsplit.core.expense_snapshot import snapshot_from_invite

NOW = datetime(2026, 10, 20, tzinfo=timezone.utc)


@pytest.fixture
def base_snapshot(invite_payload):
    return snapshot_from_invite(invite_payload)


def _dated(snapshot, expense_id, created_at, date=None, total=None):
    expense_update = {}
    if date is not None:
        expense_update["date"] = date
    if total is not None:
        expense_update["total"] = Decimal(total)
    return snapshot.model_copy(update={
        "id": expense_id,
        "created_at": created_at,
        "expense": snapshot.expense.model_copy(update=expense_update),
    })


# ─── Months ──────────────────────────────────────────────────────

def test_group_by_month_sums_and_orders_newest_first(base_snapshot):
    history = [
        base_snapshot,
        _dated(base_snapshot, "exp-2", "2026-09-05T12:00:00+00:00", total="5.00"),
        _dated(base_snapshot, "exp-3", "2026-10-01T08:00:00+00:00"),
    ]
    assert group_by_month(history) == [
        MonthlyTotal(month="2026-10", total=Decimal("37.80")),
        MonthlyTotal(month="2026-09", total=Decimal("5.00")),
    ]


def test_month_falls_back_to_expense_date(base_snapshot):
    snapshot = _dated(base_snapshot, "exp-2", "yesterday", date="2026-08-20")
    assert month_key(snapshot) == "2026-08"


def test_month_unknown_when_no_date_parses(base_snapshot):
    snapshot = _dated(base_snapshot, "exp-2", "yesterday", date="20/08/2026")
    assert month_key(snapshot) == UNKNOWN_MONTH
    assert group_by_month([snapshot])[0].month == UNKNOWN_MONTH


def test_month_uses_utc(base_snapshot):
    snapshot = _dated(base_snapshot, "exp-2", "2026-10-31T23:30:00-05:00")
    assert month_key(snapshot) == "2026-11"


def test_group_by_month_empty_history():
    assert group_by_month([]) == []


# ─── Categories ──────────────────────────────────────────────────

def test_totals_by_category_uses_line_totals(base_snapshot):
    assert totals_by_category([base_snapshot], 30, NOW) == [
        CategoryTotal(category=ItemCategory.FOOD, total=Decimal("10.00")),
        CategoryTotal(category=ItemCategory.DRINKS, total=Decimal("7.50")),
    ]


def test_totals_by_category_respects_window(base_snapshot):
    history = [
        base_snapshot,
        _dated(base_snapshot, "exp-old", "2026-08-01T00:00:00+00:00"),
    ]
    totals = {c.category: c.total for c in totals_by_category(history, 30, NOW)}
    assert totals[ItemCategory.FOOD] == Decimal("10.00")

    assert totals_by_category(history, 3, NOW) == []


def test_totals_by_category_skips_undated(base_snapshot):
    snapshot = _dated(base_snapshot, "exp-2", "soon", date="someday")
    assert totals_by_category([snapshot], 3650, NOW) == []


def test_naive_dates_are_utc(base_snapshot):
    snapshot = _dated(base_snapshot, "exp-2", "bad", date="2026-10-19")
    totals = totals_by_category([snapshot], 1, NOW)
    assert [c.category for c in totals] == [ItemCategory.FOOD, ItemCategory.DRINKS]
