"""Error Hierarchy: typed, categorized exceptions for all Well of Power failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with WellOfPowerError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Invalid game commands are NOT exceptions: the machine returns rejection dicts
      (see enforce_commands); exceptions are reserved for configuration, storage
      and surfaced "save unavailable" conditions
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
    DATABASE = "database"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    slot: str | None = None
    command: str | None = None
    position: int | None = None
    debug_info: dict[str, Any] | None = None


class WellOfPowerError(Exception):
    """Base exception for all Well of Power errors."""

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
                    "slot": self.context.slot,
                    "command": self.context.command,
                    "position": self.context.position,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class SaveUnavailableError(WellOfPowerError):
    """continue_game requested while the save slot holds no loadable record."""
    def __init__(self, slot: str, context: ErrorContext | None = None):
        context = context or ErrorContext(slot=slot, command="continue_game")
        super().__init__(
            f"No saved game in slot '{slot}'",
            "SAVE_UNAVAILABLE", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.slot = slot


class CorruptSaveError(WellOfPowerError):
    """Persisted blob is undecodable or does not match the save schema."""
    def __init__(self, reason: str, slot: str | None = None):
        super().__init__(
            f"Save record rejected: {reason}",
            "CORRUPT_SAVE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ErrorContext(slot=slot), 422,
        )
        self.reason = reason


# ─── Configuration Errors (startup) ─────────────────────────────

class CatalogError(WellOfPowerError):
    """Dilemma catalog data is malformed."""
    def __init__(self, message: str, dilemma_index: int | None = None):
        super().__init__(
            f"Invalid dilemma catalog: {message}",
            "CATALOG_INVALID", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL,
            ErrorContext(position=dilemma_index), 500,
        )
        self.detail = message
        self.dilemma_index = dilemma_index


class InvalidPhaseBandsError(WellOfPowerError):
    """Phase band configuration does not partition the catalog."""
    def __init__(self, message: str):
        super().__init__(
            f"Invalid phase bands: {message}",
            "PHASE_BANDS_INVALID", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL, None, 500,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class SaveStorageError(WellOfPowerError):
    """Reading or writing the save slot failed at the storage layer."""
    def __init__(self, message: str, operation: str, slot: str | None = None):
        super().__init__(
            f"Save storage {operation} failed: {message}",
            "SAVE_STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ErrorContext(slot=slot), 503,
        )
        self.operation = operation


class DatabaseError(WellOfPowerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
