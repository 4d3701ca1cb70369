# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response carries a machine code and, where possible, a hint on
# how to recover.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class LocalSceneException(Exception):
    """
    Base exception for the LocalScene API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "LOCALSCENE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Lookup Exceptions
# =============================================================================

# Where a client should land when a detail page has nothing to show
DIRECTORY_PATHS = {
    "event": "/events",
    "artist": "/artists",
    "venue": "/venues",
}


class EntityNotFoundError(LocalSceneException):
    """Raised when an event, artist or venue slug/id doesn't exist."""

    def __init__(self, entity_type: str, key: str):
        redirect_to = DIRECTORY_PATHS.get(entity_type, "/")
        super().__init__(
            message=f"{entity_type.capitalize()} not found: {key}",
            code=f"{entity_type.upper()}_NOT_FOUND",
            status_code=404,
            suggestion=f"Browse the directory at {redirect_to}",
            details={"entity_type": entity_type, "key": key, "redirect_to": redirect_to},
        )
        self.redirect_to = redirect_to


class InvalidEntityTypeError(LocalSceneException):
    """Raised when an entity_type path segment is not recognised."""

    def __init__(self, entity_type: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid entity type: {entity_type}",
            code="INVALID_ENTITY_TYPE",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"entity_type": entity_type, "allowed": allowed},
        )


class InvalidTimezoneError(LocalSceneException):
    """Raised when the viewer's time zone header is not an IANA zone."""

    def __init__(self, tz_name: str):
        super().__init__(
            message=f"Unknown time zone: {tz_name}",
            code="INVALID_TIMEZONE",
            status_code=400,
            suggestion="Send an IANA zone name such as America/Chicago",
            details={"timezone": tz_name},
        )


class InvalidSortError(LocalSceneException):
    """Raised when a directory is asked for a sort it does not offer."""

    def __init__(self, sort: str, allowed: list[str]):
        super().__init__(
            message=f"Unsupported sort: {sort}",
            code="INVALID_SORT",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"sort": sort, "allowed": allowed},
        )


class AuthenticationRequiredError(LocalSceneException):
    """Raised when an anonymous viewer calls a per-user endpoint."""

    def __init__(self):
        super().__init__(
            message="Sign in to use this feature",
            code="AUTHENTICATION_REQUIRED",
            status_code=401,
            suggestion="Send a valid Supabase access token as a Bearer header",
        )


# =============================================================================
# Social Exceptions
# =============================================================================

class DuplicateReviewError(LocalSceneException):
    """Raised when a user reviews the same entity twice."""

    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(
            message=f"You have already reviewed this {entity_type}",
            code="DUPLICATE_REVIEW",
            status_code=409,
            suggestion="Each entity accepts one review per user",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )


# =============================================================================
# Upstream Exceptions
# =============================================================================

class UpstreamError(LocalSceneException):
    """Raised when a directory snapshot cannot be fetched from the backend."""

    def __init__(self, resource: str, error: str):
        super().__init__(
            message=f"Failed to load {resource}: {error}",
            code="UPSTREAM_ERROR",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details={"resource": resource},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def localscene_exception_handler(
    request: Request,
    exc: LocalSceneException
) -> JSONResponse:
    """
    Convert LocalSceneException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
