# =============================================================================
# core/services/directory_service.py - Directory Business Logic
# =============================================================================
# Fetches directory snapshots and detail pages, then hands them to the pure
# filter engine in core/directory.py.
#
# Error policy:
# - fetch failure on a directory or detail page -> UpstreamError (502)
# - unknown slug -> EntityNotFoundError (404, with redirect_to)
# - unsupported sort -> InvalidSortError (400)
# =============================================================================

import logging
from datetime import timedelta
from typing import Any, Callable

from app.config import settings
from app.exceptions import EntityNotFoundError, InvalidSortError, UpstreamError
from core.directory import (
    ARTISTS_DIRECTORY,
    VENUES_DIRECTORY,
    count_events_by_venue,
    events_directory,
    filter_artists,
    filter_events,
    filter_venues,
)
from core.models.detail import ArtistDetail, EventDetail, VenueDetail
from core.models.directory import DirectoryFilters, FilteredList, SortKey
from core.models.entities import Artist, EntityType, Event, Venue, parse_rows
from core.models.social import Review
from core.models.viewer import ViewerContext
from core.dashboard import upcoming_only
from core.social import count_rsvps, stored_rsvp_status, summarize_ratings
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


def _load(resource: str, fetch: Callable[..., Any], *args: Any) -> Any:
    """Run a query, turning a backend failure into a 502."""
    try:
        return fetch(*args)
    except SupabaseClientError as e:
        logger.error(f"Failed to load {resource}: {e}")
        raise UpstreamError(resource, e.message)


def _check_sort(filters: DirectoryFilters, allowed: tuple[SortKey, ...]) -> None:
    if filters.sort is not None and filters.sort not in allowed:
        raise InvalidSortError(filters.sort.value, [s.value for s in allowed])


class DirectoryService:
    """
    Service for the events, artists and venues directories.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Directories
    # -------------------------------------------------------------------------

    @staticmethod
    def fetch_upcoming_events(viewer: ViewerContext) -> list[Event]:
        """
        Events from local midnight (minus the lookback) onwards.

        Raises:
            UpstreamError: If the events query fails
        """
        since = viewer.today_start() - timedelta(days=settings.DIRECTORY_LOOKBACK_DAYS)
        rows = _load("events", SupabaseClient.fetch_events, since)
        return parse_rows(rows, Event)

    @staticmethod
    def list_events(viewer: ViewerContext, filters: DirectoryFilters) -> FilteredList[Event]:
        """
        Events directory.

        Args:
            viewer: Supplies the clock and zone for date buckets
            filters: Search, facet selections, date bucket and sort

        Returns:
            FilteredList of events with event_types and date counts

        Raises:
            UpstreamError: If the events query fails
            InvalidSortError: If the sort isn't offered for events
        """
        _check_sort(filters, events_directory(viewer).allowed_sorts)
        events = DirectoryService.fetch_upcoming_events(viewer)
        result = filter_events(events, filters, viewer)
        logger.debug(f"Events directory: {result.total}/{len(events)} after filters")
        return result

    @staticmethod
    def list_artists(filters: DirectoryFilters) -> FilteredList[Artist]:
        """
        Artists directory.

        Raises:
            UpstreamError: If the artists query fails
            InvalidSortError: If the sort isn't offered for artists
        """
        _check_sort(filters, ARTISTS_DIRECTORY.allowed_sorts)
        artists = parse_rows(_load("artists", SupabaseClient.fetch_artists), Artist)
        return filter_artists(artists, filters)

    @staticmethod
    def list_venues(viewer: ViewerContext, filters: DirectoryFilters) -> FilteredList[Venue]:
        """
        Venues directory.

        Upcoming events are only fetched when sorting by event count.

        Raises:
            UpstreamError: If a query fails
            InvalidSortError: If the sort isn't offered for venues
        """
        _check_sort(filters, VENUES_DIRECTORY.allowed_sorts)
        venues = parse_rows(_load("venues", SupabaseClient.fetch_venues), Venue)

        event_counts = None
        if filters.sort == SortKey.EVENT_COUNT_DESC:
            events = DirectoryService.fetch_upcoming_events(viewer)
            event_counts = count_events_by_venue(upcoming_only(events, viewer))

        return filter_venues(venues, filters, event_counts=event_counts)

    # -------------------------------------------------------------------------
    # Detail Pages
    # -------------------------------------------------------------------------

    @staticmethod
    def _rating(entity_type: EntityType, entity_id: str):
        rows = _load("reviews", SupabaseClient.fetch_reviews, entity_type.value, entity_id)
        return summarize_ratings(parse_rows(rows, Review))

    @staticmethod
    def _is_following(viewer: ViewerContext, entity_type: EntityType, entity_id: str) -> bool | None:
        if not viewer.is_authenticated:
            return None
        follow = _load(
            "follows",
            SupabaseClient.fetch_follow,
            viewer.user_id,
            entity_type.value,
            entity_id,
        )
        return follow is not None

    @staticmethod
    def get_event(slug: str, viewer: ViewerContext) -> EventDetail:
        """
        Event detail by slug.

        Raises:
            EntityNotFoundError: If no event has this slug
            UpstreamError: If a query fails
        """
        row = _load("event", SupabaseClient.fetch_event_by_slug, slug)
        if not row:
            raise EntityNotFoundError(EntityType.EVENT.value, slug)
        event = Event.from_row(row)

        rsvp_counts = count_rsvps(_load("rsvps", SupabaseClient.fetch_event_rsvps, event.id))

        my_rsvp = None
        if viewer.is_authenticated:
            mine = _load("rsvp", SupabaseClient.fetch_rsvp, viewer.user_id, event.id)
            my_rsvp = stored_rsvp_status(mine)

        SupabaseClient.track_page_view(EntityType.EVENT.value, event.id, viewer.user_id)

        return EventDetail(
            event=event,
            rsvp_counts=rsvp_counts,
            my_rsvp=my_rsvp,
            rating=DirectoryService._rating(EntityType.EVENT, event.id),
        )

    @staticmethod
    def get_artist(slug: str, viewer: ViewerContext) -> ArtistDetail:
        """
        Artist detail by slug, with the artist's upcoming events.

        Raises:
            EntityNotFoundError: If no artist has this slug
            UpstreamError: If a query fails
        """
        row = _load("artist", SupabaseClient.fetch_artist_by_slug, slug)
        if not row:
            raise EntityNotFoundError(EntityType.ARTIST.value, slug)
        artist = Artist.from_row(row)

        rows = _load("events", SupabaseClient.fetch_events_featuring, [artist.id], viewer.now)
        SupabaseClient.track_page_view(EntityType.ARTIST.value, artist.id, viewer.user_id)

        return ArtistDetail(
            artist=artist,
            upcoming_events=upcoming_only(parse_rows(rows, Event), viewer),
            follower_count=_load(
                "followers", SupabaseClient.count_followers, EntityType.ARTIST.value, artist.id
            ),
            is_following=DirectoryService._is_following(viewer, EntityType.ARTIST, artist.id),
            rating=DirectoryService._rating(EntityType.ARTIST, artist.id),
        )

    @staticmethod
    def get_venue(slug: str, viewer: ViewerContext) -> VenueDetail:
        """
        Venue detail by slug, with the venue's upcoming events.

        Raises:
            EntityNotFoundError: If no venue has this slug
            UpstreamError: If a query fails
        """
        row = _load("venue", SupabaseClient.fetch_venue_by_slug, slug)
        if not row:
            raise EntityNotFoundError(EntityType.VENUE.value, slug)
        venue = Venue.from_row(row)

        rows = _load("events", SupabaseClient.fetch_events_at_venues, [venue.id], viewer.now)
        SupabaseClient.track_page_view(EntityType.VENUE.value, venue.id, viewer.user_id)

        return VenueDetail(
            venue=venue,
            upcoming_events=upcoming_only(parse_rows(rows, Event), viewer),
            follower_count=_load(
                "followers", SupabaseClient.count_followers, EntityType.VENUE.value, venue.id
            ),
            is_following=DirectoryService._is_following(viewer, EntityType.VENUE, venue.id),
            rating=DirectoryService._rating(EntityType.VENUE, venue.id),
        )
