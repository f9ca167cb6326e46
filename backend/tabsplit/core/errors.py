"""Error Hierarchy — typed, categorized exceptions for all TabSplit failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller-input errors (400-level) are never retried; configuration/store errors are critical
    - Invite failures never carry the raw token in message or context
    - to_response() produces the REST envelope used by every error handler

Design Decisions:
    - Single hierarchy with TabSplitError base: FastAPI global handler catches all (ADR: uniform error shape)
    - MalformedTokenError and InvalidSignatureError share InvalidInviteError so callers
      can render one "invalid or expired invite" message without distinguishing causes
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    INVITE = "invite"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE = "store"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expense_id: str | None = None
    group_id: str | None = None
    user_message: str | None = None


class TabSplitError(Exception):
    """Base exception for all TabSplit errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "expense_id": self.context.expense_id,
                    "group_id": self.context.group_id,
                },
            }
        }


# ─── Configuration Errors ───────────────────────────────────────

class ConfigurationError(TabSplitError):
    """Required configuration (e.g. the invite secret) is missing."""
    def __init__(self, message: str, setting: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.setting = setting


# ─── Caller-Input Errors (400-level) ────────────────────────────

class ValidationError(TabSplitError):
    """Payload does not conform to its schema."""
    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details or []

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class UnknownReferenceError(ValidationError):
    """Ownership map names an item or member that does not exist."""
    def __init__(
        self, kind: str, reference_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Unknown {kind} '{reference_id}' in ownership map",
            [{"field": kind, "message": "unknown reference", "type": "reference"}],
            context,
        )
        self.kind = kind
        self.reference_id = reference_id


class InvalidInviteError(TabSplitError):
    """Invite token is not usable — structural or cryptographic failure."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        context = context or ErrorContext()
        context.user_message = context.user_message or "Invalid or expired invite"
        super().__init__(
            message, code, ErrorCategory.INVITE,
            ErrorSeverity.WARNING, context, 400,
        )


class MalformedTokenError(InvalidInviteError):
    """Token does not have the two-segment base64url shape."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(f"Malformed invite token: {reason}", "MALFORMED_TOKEN", context)
        self.reason = reason


class InvalidSignatureError(InvalidInviteError):
    """Token signature does not match its payload under the configured secret."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Invite token signature mismatch", "INVALID_SIGNATURE", context)


class ResourceNotFoundError(TabSplitError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(TabSplitError):
    """Snapshot store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
