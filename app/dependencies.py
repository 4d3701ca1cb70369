# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# ViewerContext is built once per request from:
# - the (optional) authenticated user
# - the viewer's IANA zone: X-Timezone header, then ?tz=, then
#   settings.DEFAULT_TIMEZONE
# =============================================================================

from typing import Annotated
from zoneinfo import ZoneInfoNotFoundError

from fastapi import Depends, Header, Query

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.config import settings
from app.exceptions import InvalidTimezoneError
from core.models.viewer import ViewerContext
from lib.supabase_client import SupabaseClient


def get_supabase_client() -> type[SupabaseClient]:
    """
    Get Supabase client instance.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


def _build_viewer(user: AuthUser | None, tz_name: str | None) -> ViewerContext:
    tz_name = tz_name or settings.DEFAULT_TIMEZONE
    try:
        return ViewerContext.create(
            user_id=str(user.id) if user else None,
            tz_name=tz_name,
        )
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidTimezoneError(tz_name)


async def get_viewer(
    user: AuthUser | None = Depends(get_current_user_optional),
    x_timezone: Annotated[str | None, Header(description="Viewer's IANA time zone")] = None,
    tz: Annotated[str | None, Query(description="Viewer's IANA time zone")] = None,
) -> ViewerContext:
    """Viewer for public endpoints; user_id is None when anonymous."""
    return _build_viewer(user, x_timezone or tz)


async def get_signed_in_viewer(
    user: AuthUser = Depends(get_current_user),
    x_timezone: Annotated[str | None, Header(description="Viewer's IANA time zone")] = None,
    tz: Annotated[str | None, Query(description="Viewer's IANA time zone")] = None,
) -> ViewerContext:
    """Viewer for per-user endpoints; responds 401 without a valid token."""
    return _build_viewer(user, x_timezone or tz)


# Type aliases for dependency injection
SupabaseDep = Annotated[type[SupabaseClient], Depends(get_supabase_client)]
ViewerDep = Annotated[ViewerContext, Depends(get_viewer)]
SignedInViewerDep = Annotated[ViewerContext, Depends(get_signed_in_viewer)]
