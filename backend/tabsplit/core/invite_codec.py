"""Invite Codec — signs an expense/group payload into a URL-safe token and verifies it back.

Invariants:
    - Token = b64url(canonical payload bytes) + "." + b64url(HMAC-SHA256 tag), both unpadded
    - The signed bytes are the serialization of the NORMALIZED payload, never the raw input,
      so verify(sign(p)) == normalize(p) and re-signing yields a byte-identical token
    - Tag comparison is constant-time (hmac.compare_digest)
    - Only canonical base64url is accepted: any altered character is rejected, never
      silently decoded to the same bytes
    - Pure: no IO, no logging of token contents

Design Decisions:
    - Secret passed explicitly on every call (ADR: no module-level config in core/)
    - Schema errors after a valid signature surface as ValidationError, not as a
      token error, since the signer itself produced a bad payload
"""

import base64
import binascii
import hashlib
import hmac
import re

from pydantic import ValidationError as PydanticValidationError

from tabsplit.core.errors import (
    ConfigurationError, InvalidSignatureError, MalformedTokenError, ValidationError,
)
from tabsplit.core.expense_schema import InvitePayload

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_-]+$")


# ─── base64url ───────────────────────────────────────────────────

def b64url_encode(data: bytes) -> str:
    """URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(segment: str) -> bytes:
    """Decode one unpadded base64url segment. Raises MalformedTokenError."""
    if not _SEGMENT_RE.match(segment) or len(segment) % 4 == 1:
        raise MalformedTokenError("segment is not base64url")
    try:
        data = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    except (binascii.Error, ValueError):
        raise MalformedTokenError("segment is not base64url")
    # Non-zero trailing bits would decode to the same bytes as the canonical form
    if b64url_encode(data) != segment:
        raise MalformedTokenError("segment is not canonical base64url")
    return data


# ─── Normalization ───────────────────────────────────────────────

def _details(exc: PydanticValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]


def normalize_invite_payload(payload: InvitePayload | dict) -> InvitePayload:
    """Validate and default a payload. Raises ValidationError."""
    raw = (
        payload.model_dump(by_alias=True)
        if isinstance(payload, InvitePayload) else payload
    )
    try:
        return InvitePayload.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError("Invite payload failed validation", _details(e))


def serialize_invite_payload(payload: InvitePayload) -> bytes:
    """Canonical byte form of an already-normalized payload."""
    return payload.model_dump_json(by_alias=True).encode("utf-8")


def _require_secret(secret: bytes | str | None) -> bytes:
    if not secret:
        raise ConfigurationError(
            "Missing invite signing secret (INVITE_SECRET)", "invite_secret",
        )
    return secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)


def _tag(key: bytes, data: bytes) -> bytes:
    return hmac.new(key, data, hashlib.sha256).digest()


# ─── Public API ──────────────────────────────────────────────────

def sign_invite(payload: InvitePayload | dict, secret: bytes | str | None) -> str:
    """Normalize, serialize and sign a payload into an invite token."""
    key = _require_secret(secret)
    data = serialize_invite_payload(normalize_invite_payload(payload))
    return f"{b64url_encode(data)}.{b64url_encode(_tag(key, data))}"


def verify_invite(token: str, secret: bytes | str | None) -> InvitePayload:
    """Authenticate a token and return its normalized payload.

    Raises MalformedTokenError, InvalidSignatureError or ValidationError.
    """
    key = _require_secret(secret)
    parts = token.split(".") if isinstance(token, str) else []
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedTokenError("expected two non-empty segments")

    data = b64url_decode(parts[0])
    signature = b64url_decode(parts[1])
    if not hmac.compare_digest(_tag(key, data), signature):
        raise InvalidSignatureError()

    try:
        return InvitePayload.model_validate_json(data)
    except PydanticValidationError as e:
        raise ValidationError("Invite token payload malformed", _details(e))
