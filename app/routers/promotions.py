# =============================================================================
# app/routers/promotions.py - Public Banner Endpoints
# =============================================================================
# Public: no sign-in needed. The viewer only supplies the clock and zone.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from app.dependencies import ViewerDep
from core.models.promotions import ActiveAdvertisement, AdClickResult, Announcement
from core.services.promotion_service import PromotionService

router = APIRouter()


@router.get("/advertisements/active", response_model=ActiveAdvertisement | None)
def get_active_advertisement(viewer: ViewerDep):
    """
    The advertisement running today, or null.

    Serving it counts one view.
    """
    return PromotionService.get_active_advertisement(viewer)


@router.post("/advertisements/{ad_id}/click", response_model=AdClickResult)
def record_advertisement_click(
    ad_id: Annotated[UUID, Path(description="Advertisement UUID")],
):
    """
    Count a click on the banner button.

    Always 200; recorded is false when the counter could not be updated.
    """
    return PromotionService.record_click(ad_id)


@router.get("/announcements/active", response_model=list[Announcement])
def list_active_announcements(viewer: ViewerDep):
    """Live announcements, highest priority first."""
    return PromotionService.list_active_announcements(viewer)
