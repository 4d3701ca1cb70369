# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import date, datetime, time
from typing import Any
from uuid import UUID
from zoneinfo import ZoneInfo

from pydantic import TypeAdapter, ValidationError

_DATETIME = TypeAdapter(datetime)


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        event_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        event_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Timestamp Utilities
# =============================================================================

def _parse_iso(value: str) -> datetime | None:
    # PostgREST trims trailing zeros from fractional seconds ("01:00:00.12345"),
    # which datetime.fromisoformat rejects before Python 3.11
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_timestamp(
    value: Any,
    default_tz: ZoneInfo | None = None,
) -> datetime | None:
    """
    Parse a PostgREST timestamp into an aware datetime.

    Accepts ISO strings (with "Z" or an offset), date-only strings,
    datetime and date objects. Naive values are interpreted in
    default_tz (UTC when not given). Unparseable input returns None.

    Args:
        value: Raw column value from a database row
        default_tz: Zone for naive values

    Returns:
        Timezone-aware datetime, or None

    Example:
        parse_timestamp("2024-01-15T10:30:00Z")
        # datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    """
    if value is None or value == "":
        return None

    tz = default_tz or ZoneInfo("UTC")

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        parsed = _parse_iso(value)
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
