"""Error Hierarchy — typed, categorized exceptions for all registry failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors (400-level) are recoverable; store errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with RegistryError base: FastAPI global handler catches all
    - UniqueViolationError subclasses StoreError: callers that do not care about
      conflicts still see a generic store failure
    - "Not found" for single-row lookups is None, not an exception; ResourceNotFoundError
      is raised only where absence must become a 404
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    STORE = "store"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    identifier: str | None = None
    entity_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class RegistryError(Exception):
    """Base exception for all registry errors."""

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
                    "identifier": self.context.identifier,
                    "entity_id": self.context.entity_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class InvalidIdentifierError(RegistryError):
    """Identifier failed syntactic validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_FORMAT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class ReservedIdentifierError(RegistryError):
    """Identifier is on the reserved list."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(identifier=username)
        super().__init__(
            "This username is reserved",
            "RESERVED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 403,
        )
        self.username = username


class IdentifierTakenError(RegistryError):
    """Username is already bound (store uniqueness constraint)."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(identifier=username)
        super().__init__(
            "Username already taken",
            "USERNAME_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.username = username


class SlugExistsError(RegistryError):
    """Slug is already mapped to an entity."""
    def __init__(self, slug: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(identifier=slug)
        super().__init__(
            "Slug already exists",
            "SLUG_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.slug = slug


class UnauthorizedError(RegistryError):
    """Requester is not on the entity's moderator list."""
    def __init__(self, entity_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(entity_id=entity_id)
        super().__init__(
            "Not authorized to update this topic",
            "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


class AdminKeyError(RegistryError):
    """Administrative endpoint called without a valid admin key."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Missing or invalid admin key",
            "ADMIN_KEY_REQUIRED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(RegistryError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext(identifier=resource_id)
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


# ─── Store Errors (500-level) ───────────────────────────────────

class StoreError(RegistryError):
    """Row store operation failed."""
    def __init__(
        self, message: str, operation: str, table: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext(operation=operation)
        super().__init__(
            f"Store {operation} on {table} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.table = table

    @property
    def unique_violation(self) -> bool:
        return False


class UniqueViolationError(StoreError):
    """Insert or update hit a unique constraint."""
    def __init__(self, table: str, context: ErrorContext | None = None):
        super().__init__("unique constraint violated", "insert", table, context)
        self.code = "UNIQUE_VIOLATION"
        self.category = ErrorCategory.CONFLICT
        self.severity = ErrorSeverity.WARNING
        self.http_status = 409

    @property
    def unique_violation(self) -> bool:
        return True
