"""Spending Analytics — monthly and per-category totals over stored expense snapshots.

Invariants:
    - Sums are accumulated in integer cents; totals are exact two-place Decimals
    - A snapshot is dated by createdAt, falling back to the expense date when
      createdAt does not parse; naive timestamps are taken as UTC
    - Month keys are "YYYY-MM" in UTC, or "Unknown" when neither date parses
    - Monthly totals use expense.total; category totals use item line totals
    - Snapshots without a usable date never enter the category window

Design Decisions:
    - `now` is a parameter, not read from the clock, so the window is reproducible
    - Months sort newest-first as plain strings ("Unknown" sorts ahead of digits)
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from tabsplit.core.domain_types import ItemCategory
from tabsplit.core.expense_schema import ExpenseSnapshot
from tabsplit.core.money import from_cents, line_total_cents, to_cents

UNKNOWN_MONTH = "Unknown"


@dataclass(frozen=True)
class MonthlyTotal:
    month: str
    total: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    category: ItemCategory
    total: Decimal


def _parse_timestamp(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def snapshot_timestamp(snapshot: ExpenseSnapshot) -> datetime | None:
    """When the expense happened, in UTC, or None if no date parses."""
    return (
        _parse_timestamp(snapshot.created_at)
        or _parse_timestamp(snapshot.expense.date)
    )


def month_key(snapshot: ExpenseSnapshot) -> str:
    timestamp = snapshot_timestamp(snapshot)
    if timestamp is None:
        return UNKNOWN_MONTH
    return f"{timestamp.year:04d}-{timestamp.month:02d}"


def group_by_month(snapshots: Iterable[ExpenseSnapshot]) -> list[MonthlyTotal]:
    """Expense totals per month, newest month first."""
    cents: dict[str, int] = {}
    for snapshot in snapshots:
        key = month_key(snapshot)
        cents[key] = cents.get(key, 0) + to_cents(snapshot.expense.total)
    return [
        MonthlyTotal(month=month, total=from_cents(cents[month]))
        for month in sorted(cents, reverse=True)
    ]


def totals_by_category(
    snapshots: Iterable[ExpenseSnapshot], within_days: int, now: datetime,
) -> list[CategoryTotal]:
    """Item spend per category for expenses dated within the last `within_days`.

    Categories appear in the order they are first seen.
    """
    cutoff = now - timedelta(days=within_days)
    cents: dict[ItemCategory, int] = {}
    for snapshot in snapshots:
        timestamp = snapshot_timestamp(snapshot)
        if timestamp is None or timestamp < cutoff:
            continue
        for item in snapshot.expense.items:
            amount = line_total_cents(item.quantity, item.unit_price)
            cents[item.category] = cents.get(item.category, 0) + amount
    return [
        CategoryTotal(category=category, total=from_cents(total))
        for category, total in cents.items()
    ]
