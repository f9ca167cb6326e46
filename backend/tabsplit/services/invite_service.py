"""Invite Service — builds signed invites for payers and accepts them for claimants.

Invariants:
    - Item ids are assigned here, once, as "{index}-{uuid4}" — never by the codec
    - accept_invite never overwrites an existing snapshot (shares already recomputed
      by this claimant survive re-opening the same link)
    - Tokens are never logged; only expense/group ids are

Design Decisions:
    - Secret and base URL passed in by the route from Settings (ADR: services stay
      testable without environment)
    - id_factory/now injectable so payloads are reproducible in tests
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable
from urllib.parse import urlencode
from uuid import uuid4

from tabsplit.core.expense_schema import (
    ExpenseDocument, ExpenseSnapshot, Group, InvitePayload, LineItem, ReceiptDocument,
)
from tabsplit.core.expense_snapshot import snapshot_from_invite
from tabsplit.core.invite_codec import sign_invite, verify_invite
from tabsplit.core.repository_protocols import ExpenseSnapshotStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InviteLink:
    token: str
    invite_url: str
    payload: InvitePayload


def build_invite_payload(
    group: Group,
    receipt: ReceiptDocument,
    expense_id: str,
    now: datetime,
    id_factory: Callable[[], object] = uuid4,
) -> InvitePayload:
    """Attach item ids to the receipt and wrap it with the group's membership."""
    items = [
        LineItem(id=f"{index}-{id_factory()}", **item.model_dump())
        for index, item in enumerate(receipt.items)
    ]
    expense = ExpenseDocument(**{**receipt.model_dump(exclude={"items"}), "items": items})
    return InvitePayload(
        group_id=group.id,
        expense_id=expense_id,
        group_name=group.name,
        payer_id=group.payer_id,
        members=group.members,
        expense=expense,
        created_at=now.isoformat(),
    )


def invite_url_for(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/join?{urlencode({'token': token})}"


def create_invite(
    group: Group,
    receipt: ReceiptDocument,
    expense_id: str,
    secret: bytes | str | None,
    base_url: str,
    now: datetime | None = None,
    id_factory: Callable[[], object] = uuid4,
) -> InviteLink:
    """Sign a new invite for the payer's group and expense."""
    payload = build_invite_payload(
        group, receipt, expense_id,
        now or datetime.now(timezone.utc), id_factory,
    )
    token = sign_invite(payload, secret)
    logger.info(
        "Invite signed",
        extra={"expense_id": expense_id, "group_id": group.id},
    )
    return InviteLink(
        token=token, invite_url=invite_url_for(base_url, token), payload=payload,
    )


async def accept_invite(
    token: str, secret: bytes | str | None, store: ExpenseSnapshotStore,
) -> ExpenseSnapshot:
    """Verify a token and make sure its expense exists in the store."""
    payload = verify_invite(token, secret)
    existing = await store.get(payload.expense_id)
    if existing is not None:
        return existing
    snapshot = snapshot_from_invite(payload)
    await store.upsert(snapshot)
    logger.info(
        "Invite accepted",
        extra={"expense_id": payload.expense_id, "group_id": payload.group_id},
    )
    return snapshot
