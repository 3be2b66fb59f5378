"""Error Hierarchy — typed, categorized exceptions for every Users API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400/404) are recoverable; store errors (500) are critical
    - to_response() produces the REST envelope {"error": {...}}
    - No driver or internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UsersApiError base: FastAPI global handler catches all (ADR: uniform error shape)
    - StoreOperationError message chosen per operation, driver error kept on .cause for logs only
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
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    TIMEOUT = "timeout"
    ROUTING = "routing"


class StoreOperation(str, Enum):
    """Store calls a handler can issue — one per request."""
    FIND = "find"
    DECODE = "decode"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    CLOSE = "close"


_OPERATION_MESSAGES = {
    StoreOperation.FIND: "Failed to fetch users",
    StoreOperation.DECODE: "Failed to decode users",
    StoreOperation.INSERT: "Failed to create user",
    StoreOperation.UPDATE: "Failed to update user",
    StoreOperation.DELETE: "Failed to delete user",
    StoreOperation.CLOSE: "Failed to close database connection",
}


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_name: str | None = None


class UsersApiError(Exception):
    """Base exception for all Users API errors."""

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
            }
        }


# ─── Startup Errors (fatal) ─────────────────────────────────────

class ConfigurationError(UsersApiError):
    """Required configuration missing or invalid."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class StoreConnectionError(UsersApiError):
    """Initial connect or ping to the store failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store connection failed: {message}",
            "STORE_CONNECTION_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Client Errors (400-level) ──────────────────────────────────

class UserValidationError(UsersApiError):
    """User input failed a presence check."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class UserNotFoundError(UsersApiError):
    """No user document matched the given name."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_name = name
        super().__init__(
            "User not found", "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


# ─── Store Errors (500-level) ───────────────────────────────────

class StoreOperationError(UsersApiError):
    """A request-time store call failed or missed its deadline."""
    def __init__(
        self,
        operation: StoreOperation,
        cause: Exception | None = None,
        timed_out: bool = False,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            _OPERATION_MESSAGES[operation], "DATABASE_ERROR",
            ErrorCategory.TIMEOUT if timed_out else ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
        self.cause = cause
        self.timed_out = timed_out
