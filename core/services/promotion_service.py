# =============================================================================
# core/services/promotion_service.py - Public Banners
# =============================================================================
# The running advertisement and the live announcements shown to every
# visitor, plus the view/click counters the dashboard's CTR is built from.
#
# Banners are decorative: a failed fetch is logged at WARNING and the banner
# is simply left out, and counter updates never fail a request.
# =============================================================================

import logging
from uuid import UUID

from core.dashboard import live_announcements, running_advertisement
from core.models.entities import parse_rows
from core.models.promotions import (
    ActiveAdvertisement,
    AdClickResult,
    Advertisement,
    Announcement,
)
from core.models.viewer import ViewerContext
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)


class PromotionService:
    """
    Service for the public advertisement and announcement banners.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def get_active_advertisement(viewer: ViewerContext) -> ActiveAdvertisement | None:
        """
        The advertisement running on the viewer's local date, counting a view.

        Returns:
            ActiveAdvertisement, or None when nothing is running or the
            lookup failed
        """
        try:
            row = SupabaseClient.fetch_active_advertisement(viewer.local_today())
        except SupabaseClientError as e:
            logger.warning(f"Advertisement banner unavailable: {e}")
            return None

        ad = running_advertisement(parse_rows([row] if row else [], Advertisement), viewer)
        if ad is None:
            return None

        SupabaseClient.record_ad_view(ad.id, ad.views)
        return ActiveAdvertisement.from_advertisement(ad)

    @staticmethod
    def record_click(ad_id: str | UUID) -> AdClickResult:
        """Count a banner click. Never raises on backend failure."""
        ad_id = normalize_uuid(ad_id)
        recorded = SupabaseClient.record_ad_click(ad_id)
        if recorded:
            logger.debug(f"Recorded click on advertisement {ad_id}")
        return AdClickResult(advertisement_id=ad_id, recorded=recorded)

    @staticmethod
    def list_active_announcements(viewer: ViewerContext) -> list[Announcement]:
        """
        Announcements flagged active and not yet expired, highest priority
        first. Empty when the lookup failed.
        """
        try:
            rows = SupabaseClient.fetch_active_announcements(viewer.now)
        except SupabaseClientError as e:
            logger.warning(f"Announcement banner unavailable: {e}")
            return []
        return live_announcements(parse_rows(rows, Announcement), viewer.now)
