"""Expense Schemas — typed constructors for every structure the invite protocol carries.

Invariants:
    - Models are frozen: a validated payload cannot drift after normalization
    - Wire names are camelCase (aliases); Python attributes are snake_case
    - Amounts and quantities are Decimal, never float, so cents conversion is exact
    - Every amount is bounded by MAX_AMOUNT, so quantity × price in cents stays
      well inside the default 28-digit decimal context
    - Optional fields are always materialized with their defaults, so two payloads
      that differ only in omitted optionals normalize to the same model
    - Unknown keys are dropped during validation

Design Decisions:
    - Pydantic models as the schema description consumed by a generic validator
      (ADR: same library as API request models, one validation vocabulary)
    - Business plausibility (subtotal + tax == total) deliberately not checked:
      the document is produced upstream and only schema conformance is required
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from tabsplit.core.domain_types import ItemCategory

MAX_AMOUNT = Decimal("1000000000000")


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
    )


# ─── Group ───────────────────────────────────────────────────────

class GroupMember(_WireModel):
    """Group participant. Identity is `id`; uniqueness is the caller's job."""
    id: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    payout_address: str = Field(min_length=1)


class Group(_WireModel):
    """Group as authored by the payer — payer must be one of the members."""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    members: list[GroupMember] = Field(min_length=1)
    payer_id: str = Field(min_length=1)

    @model_validator(mode="after")
    def check_payer_is_member(self) -> "Group":
        if not any(m.id == self.payer_id for m in self.members):
            raise ValueError(f"payerId '{self.payer_id}' is not a group member")
        return self


# ─── Expense document ────────────────────────────────────────────

class ReceiptItem(_WireModel):
    """Line item as extracted from a receipt, before ids are assigned."""
    name: str = Field(min_length=1)
    quantity: Decimal = Field(default=Decimal("1"), gt=0, le=9999)
    unit_price: Decimal = Field(ge=0, le=MAX_AMOUNT)
    category: ItemCategory


class LineItem(ReceiptItem):
    """Line item carried inside an invite — addressable by id."""
    id: str = Field(min_length=1)


class _ExpenseFields(_WireModel):
    merchant: str = Field(min_length=1)
    date: str = Field(min_length=1)
    currency: str = Field(default="INR", min_length=1, max_length=8)
    subtotal: Decimal = Field(ge=0, le=MAX_AMOUNT)
    tax: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT)
    service_charge: Decimal | None = Field(default=None, ge=0, le=MAX_AMOUNT)
    sgst: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT)
    cgst: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT)
    discount: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT)
    total: Decimal = Field(ge=0, le=MAX_AMOUNT)
    notes: str | None = Field(default=None, max_length=500)


class ReceiptDocument(_ExpenseFields):
    """Expense document from the extraction collaborator (items without ids)."""
    items: list[ReceiptItem] = Field(min_length=1)


class ExpenseDocument(_ExpenseFields):
    """Expense document as signed into an invite (items carry ids)."""
    items: list[LineItem] = Field(min_length=1)


# ─── Invite / snapshot ───────────────────────────────────────────

class InvitePayload(_WireModel):
    """The exact structure serialized and signed by the invite codec."""
    group_id: str = Field(min_length=1)
    expense_id: str = Field(min_length=1)
    group_name: str = Field(min_length=1)
    payer_id: str = Field(min_length=1)
    members: list[GroupMember] = Field(min_length=1)
    expense: ExpenseDocument
    created_at: str = Field(min_length=1)


class Share(_WireModel):
    """Amount a member owes for the items they claimed, in major units."""
    member_id: str = Field(min_length=1)
    amount: Decimal = Field(ge=0)


class ExpenseSnapshot(_WireModel):
    """Unit of external persistence: group + expense + computed shares."""
    id: str = Field(min_length=1)
    group_id: str = Field(min_length=1)
    group_name: str = Field(min_length=1)
    payer_id: str = Field(min_length=1)
    members: list[GroupMember]
    expense: ExpenseDocument
    shares: list[Share] = Field(default_factory=list)
    created_at: str = Field(min_length=1)
