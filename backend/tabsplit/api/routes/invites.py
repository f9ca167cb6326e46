"""Invite Routes — sign invites for payers, verify and accept them for claimants.

Invariants:
    - Tokens never appear in logs; failures are logged by error code only
    - Verification failures (malformed / bad signature) map to 400 "Invalid or expired invite"
    - Missing INVITE_SECRET maps to 500 CONFIGURATION_ERROR on sign/verify only

Design Decisions:
    - Settings injected via Depends(get_settings) so tests override the secret
      without touching the environment
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from tabsplit.api.dependencies import get_store
from tabsplit.config import Settings, get_settings
from tabsplit.core.expense_schema import ExpenseSnapshot, InvitePayload
from tabsplit.core.invite_codec import verify_invite
from tabsplit.infrastructure.snapshot_store import SqlExpenseSnapshotStore
from tabsplit.schemas.invite import InviteAccept, InviteCreate, InviteResponse
from tabsplit.services.invite_service import accept_invite, create_invite

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/invites", tags=["invites"])


@router.post(
    "", response_model=InviteResponse, status_code=status.HTTP_201_CREATED,
)
async def create_invite_link(
    body: InviteCreate, settings: Settings = Depends(get_settings),
):
    """Sign an invite for a group expense and return the shareable link."""
    link = create_invite(
        body.group, body.expense, body.expense_id,
        settings.invite_secret_bytes(), settings.invite_base_url,
    )
    return InviteResponse(token=link.token, invite_url=link.invite_url)


@router.get("/verify", response_model=InvitePayload)
async def verify_invite_token(
    token: str = Query(..., min_length=1),
    settings: Settings = Depends(get_settings),
):
    """Authenticate a token and return its payload. No side effects."""
    return verify_invite(token, settings.invite_secret_bytes())


@router.post("/accept", response_model=ExpenseSnapshot)
async def accept_invite_token(
    body: InviteAccept,
    settings: Settings = Depends(get_settings),
    store: SqlExpenseSnapshotStore = Depends(get_store),
):
    """Verify a token and store its expense snapshot if new."""
    return await accept_invite(body.token, settings.invite_secret_bytes(), store)
