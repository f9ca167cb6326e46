"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ExpenseSnapshotRecord is the only table; everything else travels in invite tokens

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from tabsplit.models.expense_snapshot import ExpenseSnapshotRecord  # noqa: F401
