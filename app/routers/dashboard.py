# =============================================================================
# app/routers/dashboard.py - Dashboard & Feed Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import SignedInViewerDep
from core.models.dashboard import DashboardSummary
from core.models.feed import Feed
from core.services.dashboard_service import DashboardService
from core.services.feed_service import FeedService

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSummary)
async def get_dashboard(viewer: SignedInViewerDep):
    """
    The signed-in user's dashboard.

    Sections whose fetch failed come back empty and are listed in
    failed_sections; the response is still 200.
    """
    return await DashboardService.get_summary(viewer)


@router.get("/feed", response_model=Feed)
async def get_feed(
    limit: Annotated[int | None, Query(ge=1, le=100, description="Max items (default 20)")] = None,
):
    """Latest menu posts and reviews, newest first."""
    return await FeedService.get_feed(max_items=limit)
