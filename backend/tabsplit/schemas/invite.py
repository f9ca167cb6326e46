"""Invite, Expense & Analytics API Schemas — request/response bodies for the HTTP boundary.

Invariants:
    - Wire names are camelCase, matching the invite payload itself
    - Domain structures (Group, ReceiptDocument, ExpenseSnapshot) are reused from
      core/expense_schema.py, never redeclared
    - Ownership lists keep client order (tie-break order is part of the contract)
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tabsplit.core.domain_types import ItemCategory
from tabsplit.core.expense_schema import Group, ReceiptDocument


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InviteCreate(_CamelModel):
    """Payer request — group, extracted receipt, and the payer-chosen expense id."""
    group: Group
    expense: ReceiptDocument
    expense_id: str = Field(min_length=1)


class InviteResponse(_CamelModel):
    token: str
    invite_url: str


class InviteAccept(_CamelModel):
    token: str = Field(min_length=1)


class AllocationUpdate(_CamelModel):
    """Item id -> ordered member ids claiming it."""
    ownership: dict[str, list[str]]


class SettlementIdResponse(_CamelModel):
    expense_id: str
    settlement_id: int


class PaymentInstructionResponse(_CamelModel):
    expense_id: str
    settlement_id: int
    member_id: str
    member_name: str
    payee_address: str
    amount: Decimal


class MonthlyTotalResponse(_CamelModel):
    month: str
    total: Decimal


class CategoryTotalResponse(_CamelModel):
    category: ItemCategory
    total: Decimal


class SpendingAnalyticsResponse(_CamelModel):
    """Dashboard totals: all months, plus categories within a recent window."""
    within_days: int
    by_month: list[MonthlyTotalResponse]
    by_category: list[CategoryTotalResponse]
