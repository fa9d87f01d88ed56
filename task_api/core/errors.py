"""Error Hierarchy — typed, categorized exceptions for all Task API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope sent to clients
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskApiError base: one global handler catches all (uniform error shape)
    - Flat {"error": message} envelope for single errors, {"errors": [...]} for
      field validation — the shapes the frontend already consumes
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldError:
    """One failed validation rule, as reported to the client."""
    location: str
    field: str | None
    message: str
    value: Any = None

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "field": self.field,
            "message": self.message,
            "value": self.value,
        }


class TaskApiError(Exception):
    """Base exception for all Task API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to REST error response."""
        return {"error": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class RequestValidationFailed(TaskApiError):
    """One or more field rules rejected the request."""
    def __init__(self, errors: list[FieldError]):
        super().__init__(
            f"{len(errors)} field(s) failed validation",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.errors = errors

    def to_response(self) -> dict:
        return {"errors": [e.to_dict() for e in self.errors]}


class ResourceNotFoundError(TaskApiError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: int | str):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class TaskNotFoundError(ResourceNotFoundError):
    """No task row matches the requested id."""
    def __init__(self, task_id: int):
        super().__init__("Task", task_id)
        self.task_id = task_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TaskApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 503,
        )
        self.operation = operation

    def to_response(self) -> dict:
        return {"error": "Database unavailable"}


class InternalServerError(TaskApiError):
    """Unexpected failure; the original exception is logged, never returned."""
    def __init__(self):
        super().__init__(
            "Internal server error",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, 500,
        )
