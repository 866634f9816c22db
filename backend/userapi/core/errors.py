"""Error Hierarchy — typed, categorized exceptions for every failure the user API can report.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are expected outcomes; infrastructure errors (500-level) are faults
    - to_response() produces the public JSON envelope: {"Error": ...} or {"FieldErrors": {...}}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UserApiError base: FastAPI global handler catches all (ADR: uniform error shape)
    - UserExistsError / UserNotFoundError are sentinels raised by every UserStore implementation,
      so callers branch with `except` instead of comparing messages
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


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
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None


class UserApiError(Exception):
    """Base exception for all user API errors."""

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
        """Convert to the public REST error body."""
        return {"Error": self.message}

    def headers(self) -> dict[str, str] | None:
        return None


# ─── Request Errors (400-level) ─────────────────────────────────

class FailedValidationError(UserApiError):
    """One or more input fields failed a business rule."""
    def __init__(
        self, field_errors: dict[str, str], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Validation failed for: {', '.join(sorted(field_errors))}",
            "FAILED_VALIDATION", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, context, 422,
        )
        self.field_errors = dict(field_errors)

    def to_response(self) -> dict:
        return {"FieldErrors": self.field_errors}


class AuthenticationRequiredError(UserApiError):
    """Route needs an authenticated user and none is present."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You must be authenticated to access this resource",
            "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidAuthenticationTokenError(UserApiError):
    """Bearer token is malformed, expired, mis-scoped or names an unknown user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid authentication token",
            "INVALID_AUTHENTICATION_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )

    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer", "Vary": "Authorization"}


class NotPermittedError(UserApiError):
    """Authenticated user lacks the rights for this resource."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Your user account doesn't have permission to access this resource",
            "NOT_PERMITTED", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Domain Sentinels ───────────────────────────────────────────

class UserExistsError(UserApiError):
    """A user with the given email is already stored."""
    def __init__(self, email: str = "", context: ErrorContext | None = None):
        super().__init__(
            "User with specified email already exists",
            "USER_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.email = email


class UserNotFoundError(UserApiError):
    """The addressed user does not exist."""
    def __init__(self, lookup: str = "", context: ErrorContext | None = None):
        super().__init__(
            "The requested resource could not be found",
            "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.lookup = lookup


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(UserApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation

    def to_response(self) -> dict:
        return {"Error": SERVER_ERROR_MESSAGE}


class PasswordHashError(UserApiError):
    """Stored password hash could not be parsed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Password hash error: {message}",
            "PASSWORD_HASH_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )

    def to_response(self) -> dict:
        return {"Error": SERVER_ERROR_MESSAGE}


SERVER_ERROR_MESSAGE = "The server encountered a problem and could not process your request"
NOT_FOUND_MESSAGE = "The requested resource could not be found"
