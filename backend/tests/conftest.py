"""Root conftest — shared test configuration and domain fixtures."""

import os

import pytest

# Ensure tests never touch a real database or a production secret
os.environ.setdefault("INVITE_SECRET", "test-invite-secret")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

from tabsplit.core.expense_schema import InvitePayload, LineItem  # noqa: E402


@pytest.fixture
def secret() -> bytes:
    return b"test-invite-secret"


@pytest.fixture
def members_data() -> list[dict]:
    return [
        {"id": "P", "displayName": "Priya", "payoutAddress": "0xPayer00"},
        {"id": "Q", "displayName": "Quinn", "payoutAddress": "0xQuinn00"},
        {"id": "R", "displayName": "Rafa", "payoutAddress": "0xRafa000"},
    ]


@pytest.fixture
def payload_data(members_data) -> dict:
    """Minimal camelCase invite payload — optionals omitted on purpose."""
    return {
        "groupId": "g-1",
        "expenseId": "exp-1",
        "groupName": "Friday dinner",
        "payerId": "P",
        "members": members_data,
        "expense": {
            "merchant": "Bistro 42",
            "date": "2026-10-16",
            "currency": "USD",
            "items": [
                {"id": "i1", "name": "Pizza", "quantity": "1", "unitPrice": "10.00", "category": "food"},
                {"id": "i2", "name": "Lemonade", "quantity": "3", "unitPrice": "2.50", "category": "drinks"},
            ],
            "subtotal": "17.50",
            "tax": "1.40",
            "total": "18.90",
        },
        "createdAt": "2026-10-16T19:00:00+00:00",
    }


@pytest.fixture
def invite_payload(payload_data) -> InvitePayload:
    return InvitePayload.model_validate(payload_data)


def make_item(item_id: str, price: str, quantity: str = "1") -> LineItem:
    return LineItem(
        id=item_id, name=f"item {item_id}", quantity=quantity,
        unit_price=price, category="other",
    )


@pytest.fixture
def item_factory():
    return make_item
