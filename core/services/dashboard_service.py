# =============================================================================
# core/services/dashboard_service.py - Dashboard Aggregation
# =============================================================================
# Builds the signed-in user's DashboardSummary.
#
# The Supabase client is synchronous, so every fetch runs in a worker thread
# and the fetches are joined with asyncio.gather(return_exceptions=True).
# A failing fetch empties its own section and is reported in
# failed_sections; the other sections are still returned.
#
#   round 1: follows (artist, venue), RSVPs (going, interested),
#            announcements, advertisements
#   round 2: events at followed venues + events featuring followed artists
# =============================================================================

import asyncio
import logging
from typing import Any

from app.config import settings
from app.exceptions import AuthenticationRequiredError
from core.dashboard import (
    follow_entity_ids,
    hydrate,
    merge_upcoming,
    resolve_follow_targets,
    summarize_advertisements,
    summarize_announcements,
    upcoming_only,
)
from core.models.dashboard import DashboardSummary
from core.models.entities import Artist, EntityType, Event, Venue, parse_rows
from core.models.promotions import Advertisement, Announcement
from core.models.social import RSVPStatus
from core.models.viewer import ViewerContext
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


def _settle(name: str, result: Any, failed: list[str]) -> Any:
    """Return a gathered result, or None after recording a failed section."""
    if isinstance(result, Exception):
        logger.error(f"Dashboard section '{name}' failed: {result}")
        failed.append(name)
        return None
    return result


class DashboardService:
    """Service for the personalised dashboard."""

    @staticmethod
    async def get_summary(viewer: ViewerContext) -> DashboardSummary:
        """
        Aggregate everything the dashboard shows for one user.

        Args:
            viewer: Signed-in viewer; supplies user id, clock and zone

        Returns:
            DashboardSummary; failed_sections lists sections that came back
            empty because their fetch failed

        Raises:
            AuthenticationRequiredError: If the viewer is anonymous
        """
        if not viewer.is_authenticated:
            raise AuthenticationRequiredError()

        user_id = viewer.user_id
        failed: list[str] = []

        (
            artist_follows,
            venue_follows,
            going_rows,
            interested_rows,
            announcement_rows,
            advertisement_rows,
        ) = await asyncio.gather(
            asyncio.to_thread(SupabaseClient.fetch_follows, user_id, EntityType.ARTIST.value),
            asyncio.to_thread(SupabaseClient.fetch_follows, user_id, EntityType.VENUE.value),
            asyncio.to_thread(SupabaseClient.fetch_rsvp_events, user_id, RSVPStatus.GOING.value),
            asyncio.to_thread(SupabaseClient.fetch_rsvp_events, user_id, RSVPStatus.INTERESTED.value),
            asyncio.to_thread(SupabaseClient.fetch_announcements, user_id),
            asyncio.to_thread(SupabaseClient.fetch_advertisements, user_id),
            return_exceptions=True,
        )

        artist_follows = _settle("followed_artists", artist_follows, failed)
        venue_follows = _settle("followed_venues", venue_follows, failed)
        going_rows = _settle("going_events", going_rows, failed)
        interested_rows = _settle("interested_events", interested_rows, failed)
        announcement_rows = _settle("announcements", announcement_rows, failed)
        advertisement_rows = _settle("advertisements", advertisement_rows, failed)

        upcoming = await DashboardService._upcoming_from_followed(
            viewer, artist_follows, venue_follows, failed
        )

        summary = DashboardSummary(
            followed_artists=hydrate(
                resolve_follow_targets(artist_follows or [], EntityType.ARTIST.value), Artist
            ),
            followed_venues=hydrate(
                resolve_follow_targets(venue_follows or [], EntityType.VENUE.value), Venue
            ),
            going_events=upcoming_only(parse_rows(going_rows or [], Event), viewer),
            interested_events=upcoming_only(parse_rows(interested_rows or [], Event), viewer),
            upcoming_from_followed=upcoming,
            announcements=summarize_announcements(
                parse_rows(announcement_rows or [], Announcement), viewer
            ),
            advertisements=summarize_advertisements(
                parse_rows(advertisement_rows or [], Advertisement), viewer
            ),
            failed_sections=failed,
        )

        logger.info(
            f"Dashboard for {user_id}: {summary.counts.model_dump()}"
            + (f", failed: {failed}" if failed else "")
        )
        return summary

    @staticmethod
    async def _upcoming_from_followed(
        viewer: ViewerContext,
        artist_follows: list[dict[str, Any]] | None,
        venue_follows: list[dict[str, Any]] | None,
        failed: list[str],
    ) -> list[Event]:
        """
        Upcoming events at followed venues or featuring followed artists.

        Marked failed when either follow list or either event fetch failed,
        since the union would silently be missing events.
        """
        name = "upcoming_from_followed"
        if artist_follows is None or venue_follows is None:
            failed.append(name)
            return []

        artist_ids = follow_entity_ids(artist_follows)
        venue_ids = follow_entity_ids(venue_follows)
        if not artist_ids and not venue_ids:
            return []

        limit = settings.DASHBOARD_UPCOMING_LIMIT
        venue_rows, artist_rows = await asyncio.gather(
            asyncio.to_thread(SupabaseClient.fetch_events_at_venues, venue_ids, viewer.now, limit),
            asyncio.to_thread(SupabaseClient.fetch_events_featuring, artist_ids, viewer.now, limit),
            return_exceptions=True,
        )

        section_failed: list[str] = []
        venue_rows = _settle(name, venue_rows, section_failed)
        artist_rows = _settle(name, artist_rows, section_failed)
        if section_failed:
            failed.append(name)
            return []

        return merge_upcoming(
            parse_rows(venue_rows, Event),
            parse_rows(artist_rows, Event),
            viewer,
            limit=limit,
        )
