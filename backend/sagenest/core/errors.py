"""Error Hierarchy — typed, categorized exceptions for SageNest failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Expected bad user input is a ValidationResult inside core; it only becomes
      an exception at the HTTP boundary (CalculationRejectedError)
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SageNestError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from sagenest.core.domain_types import ValidationResult


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field_name: str | None = None
    method: str | None = None
    debug_info: dict[str, Any] | None = None


class SageNestError(Exception):
    """Base exception for all SageNest errors."""

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
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "field": self.context.field_name,
                    "method": self.context.method,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class CalculationRejectedError(SageNestError):
    """Calculator input failed a domain validation rule."""
    def __init__(self, validation: ValidationResult, context: ErrorContext | None = None):
        super().__init__(
            validation.message or "Invalid calculator input.",
            "CALCULATION_REJECTED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )
        self.validation = validation

    def to_response(self) -> dict:
        body = super().to_response()
        body["validation"] = {"valid": False, "message": self.validation.message}
        return body


class ContentTooLargeError(SageNestError):
    """Markdown body exceeds the configured render limit."""
    def __init__(self, length: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Content is {length} characters; the limit is {limit}.",
            "CONTENT_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 413,
        )
        self.limit = limit
