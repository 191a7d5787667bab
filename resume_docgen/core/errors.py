"""Error Hierarchy — typed, categorized exceptions for all document generation failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors are 400/404; assembly and internal errors are 500
    - to_response() produces the flat {error, message, code} envelope every client reads
    - AssemblyError always carries every tag failure, never just the first one
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from resume_docgen.core.domain_types import TagFailure


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    ASSEMBLY = "assembly"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    template_id: str | None = None
    template_name: str | None = None
    debug_info: dict[str, Any] | None = None


class DocGenError(Exception):
    """Base exception for all document generation errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        title: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.title = title
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the public JSON error body."""
        return {
            "error": self.title,
            "message": self.message,
            "code": self.code,
            "category": self.category.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


# ─── Caller Errors (400/404) ────────────────────────────────────

class PayloadValidationError(DocGenError):
    """Request body is missing required data or is malformed."""
    def __init__(self, message: str, title: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            title, ErrorSeverity.WARNING, context, 400,
        )


class MissingUserDataError(PayloadValidationError):
    """POST body has no userData."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Missing userData in request body", "Missing userData", context,
        )


class NotFoundError(DocGenError):
    """Requested resource does not exist."""
    def __init__(
        self, message: str, code: str, title: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.RESOURCE_NOT_FOUND,
            title, ErrorSeverity.WARNING, context, 404,
        )


class TemplateNotFoundError(NotFoundError):
    """No candidate root holds the template file."""
    def __init__(
        self, template_name: str, tried_paths: list[str],
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.template_name = template_name
        super().__init__(
            f"Template not found: {template_name}",
            "TEMPLATE_NOT_FOUND", "Template not found", ctx,
        )
        self.template_name = template_name
        self.tried_paths = tried_paths


class RouteNotFoundError(NotFoundError):
    """No route matches the request method and path."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        super().__init__(
            "The requested endpoint does not exist",
            "ROUTE_NOT_FOUND", "Not Found", context,
        )
        self.path = path


# ─── Assembly Errors (500) ──────────────────────────────────────

class AssemblyError(DocGenError):
    """Merge or repackaging failed; carries every tag-level failure."""
    def __init__(
        self,
        message: str,
        code: str,
        failures: list[TagFailure] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.ASSEMBLY,
            "Error generating resume", ErrorSeverity.ERROR, context, 500,
        )
        self.failures = list(failures or [])

    def to_response(self) -> dict:
        body = super().to_response()
        body["details"] = [f.to_dict() for f in self.failures]
        return body


class MergeError(AssemblyError):
    """Placeholder substitution failed on one or more tags."""
    def __init__(self, failures: list[TagFailure], context: ErrorContext | None = None):
        summary = ", ".join(f"{f.message} (tag: {f.tag})" for f in failures)
        super().__init__(
            f"Template processing error: {summary}",
            "MERGE_ERROR", failures, context,
        )


class ArchiveError(AssemblyError):
    """Template bytes are not a readable document archive."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Template archive is malformed: {reason}",
            "ARCHIVE_ERROR", [], context,
        )
        self.reason = reason
