# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - Directory snapshots (events, artists, venues) and slug lookups
# - Follows, RSVPs and reviews (reads and writes)
# - Feed sources (menu posts, recent reviews)
# - Owner dashboards (announcements, advertisements)
# - Public banners (running advertisement, live announcements, ad counters)
# - Page-view tracking
#
# Every method is synchronous; async callers wrap them in asyncio.to_thread.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_events(since=viewer.today_start())
# =============================================================================

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)


# Embedded relations every event row carries
EVENT_SELECT = "*, venue:venues(*), event_artists(is_featured, artist:artists(*))"

# PostgREST code for ".single()" matching no rows
NOT_FOUND_CODE = "PGRST116"


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Errors should tell HOW to fix, not just WHAT failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


def _iso(value: datetime) -> str:
    """UTC ISO string safe to embed in a PostgREST filter."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S+00:00")


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Events directory snapshot
        rows = SupabaseClient.fetch_events(since=viewer.today_start())

        # Venue detail page
        venue = SupabaseClient.fetch_venue_by_slug("the-vault")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        Ownership filters (follower_id, user_id, created_by) are therefore
        always applied explicitly by the methods below.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Directory Snapshots
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_events(cls, since: datetime) -> list[dict[str, Any]]:
        """
        Fetch every event starting at or after `since`.

        Rows missing start_date are matched on the legacy event_date column
        instead, so older events still show up.

        Args:
            since: Lower bound, normally local midnight minus the lookback

        Returns:
            Event rows with venue and event_artists embedded, ordered by
            start_date ascending

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        since_iso = _iso(since)

        try:
            response = (
                client.table("events")
                .select(EVENT_SELECT)
                .or_(
                    f"start_date.gte.{since_iso},"
                    f"and(start_date.is.null,event_date.gte.{since.date().isoformat()})"
                )
                .order("start_date", desc=False)
                .execute()
            )
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} events since {since_iso}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch events: {e}",
                code="FETCH_EVENTS_FAILED",
                suggestion="Check that the events table and its venue/artist relations are accessible",
                details={"since": since_iso}
            )

    @classmethod
    def fetch_artists(cls) -> list[dict[str, Any]]:
        """
        Fetch every artist, ordered by name.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = client.table("artists").select("*").order("name").execute()
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} artists")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch artists: {e}",
                code="FETCH_ARTISTS_FAILED",
                suggestion="Check that the artists table is accessible"
            )

    @classmethod
    def fetch_venues(cls) -> list[dict[str, Any]]:
        """
        Fetch every venue, ordered by name.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = client.table("venues").select("*").order("name").execute()
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} venues")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch venues: {e}",
                code="FETCH_VENUES_FAILED",
                suggestion="Check that the venues table is accessible"
            )

    # -------------------------------------------------------------------------
    # Slug Lookups
    # -------------------------------------------------------------------------

    @classmethod
    def _fetch_by_slug(cls, table: str, select: str, slug: str) -> dict[str, Any] | None:
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(select)
                .eq("slug", slug)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NOT_FOUND_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} by slug: {e}",
                code=f"FETCH_{table.upper()}_FAILED",
                suggestion="Check that the slug is unique in the table",
                details={"slug": slug}
            )

    @classmethod
    def fetch_event_by_slug(cls, slug: str) -> dict[str, Any] | None:
        """
        Fetch one event with venue and artists embedded.

        Returns:
            Event row, or None if no event has this slug
        """
        return cls._fetch_by_slug("events", EVENT_SELECT, slug)

    @classmethod
    def fetch_artist_by_slug(cls, slug: str) -> dict[str, Any] | None:
        return cls._fetch_by_slug("artists", "*", slug)

    @classmethod
    def fetch_venue_by_slug(cls, slug: str) -> dict[str, Any] | None:
        return cls._fetch_by_slug("venues", "*", slug)

    # -------------------------------------------------------------------------
    # Upcoming Events by Venue / Artist
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_events_at_venues(
        cls,
        venue_ids: list[str],
        since: datetime,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch events at any of the given venues starting at or after `since`.

        Args:
            venue_ids: Venue UUIDs; an empty list returns [] without a query
            since: Lower bound on start_date
            limit: Optional row cap

        Raises:
            SupabaseClientError: If query fails
        """
        if not venue_ids:
            return []

        client = cls.get_client()

        try:
            query = (
                client.table("events")
                .select(EVENT_SELECT)
                .in_("venue_id", venue_ids)
                .gte("start_date", _iso(since))
                .order("start_date", desc=False)
            )
            if limit is not None:
                query = query.limit(limit)
            return query.execute().data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch venue events: {e}",
                code="FETCH_VENUE_EVENTS_FAILED",
                details={"venue_ids": venue_ids}
            )

    @classmethod
    def fetch_events_featuring(
        cls,
        artist_ids: list[str],
        since: datetime,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch events featuring any of the given artists.

        Filtering goes through an inner-joined alias of event_artists so the
        embedded event_artists list still holds every artist on the bill.

        Raises:
            SupabaseClientError: If query fails
        """
        if not artist_ids:
            return []

        client = cls.get_client()

        try:
            query = (
                client.table("events")
                .select(f"{EVENT_SELECT}, featuring:event_artists!inner(artist_id)")
                .in_("featuring.artist_id", artist_ids)
                .gte("start_date", _iso(since))
                .order("start_date", desc=False)
            )
            if limit is not None:
                query = query.limit(limit)
            rows = query.execute().data or []
            for row in rows:
                row.pop("featuring", None)
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch artist events: {e}",
                code="FETCH_ARTIST_EVENTS_FAILED",
                details={"artist_ids": artist_ids}
            )

    # -------------------------------------------------------------------------
    # Follows
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_follows(cls, follower_id: str | UUID, entity_type: str) -> list[dict[str, Any]]:
        """
        Fetch a user's follows of one entity type with the target embedded.

        The target sits under the entity type's key ("artist" or "venue")
        and is null when the followed row no longer exists.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        follower = normalize_uuid(follower_id)
        target = f"{entity_type}:{entity_type}s(*)"

        try:
            response = (
                client.table("follows")
                .select(f"*, {target}")
                .eq("follower_id", follower)
                .eq("entity_type", entity_type)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch follows: {e}",
                code="FETCH_FOLLOWS_FAILED",
                details={"follower_id": follower, "entity_type": entity_type}
            )

    @classmethod
    def fetch_follow(
        cls,
        follower_id: str | UUID,
        entity_type: str,
        entity_id: str | UUID,
    ) -> dict[str, Any] | None:
        """
        Fetch one follow row, or None if the user doesn't follow the entity.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("follows")
                .select("*")
                .eq("follower_id", normalize_uuid(follower_id))
                .eq("entity_type", entity_type)
                .eq("entity_id", normalize_uuid(entity_id))
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch follow: {e}",
                code="FETCH_FOLLOW_FAILED",
                details={"entity_type": entity_type, "entity_id": str(entity_id)}
            )

    @classmethod
    def insert_follow(
        cls,
        follower_id: str | UUID,
        entity_type: str,
        entity_id: str | UUID,
    ) -> None:
        """
        Follow an entity. Following twice is a no-op.

        Raises:
            SupabaseClientError: If the write fails
        """
        client = cls.get_client()
        data = {
            "follower_id": normalize_uuid(follower_id),
            "entity_type": entity_type,
            "entity_id": normalize_uuid(entity_id),
        }

        try:
            (
                client.table("follows")
                .upsert(
                    data,
                    on_conflict="follower_id,entity_type,entity_id",
                    ignore_duplicates=True,
                )
                .execute()
            )

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to follow {entity_type}: {e}",
                code="INSERT_FOLLOW_FAILED",
                details={"entity_type": entity_type, "entity_id": data["entity_id"]}
            )

    @classmethod
    def delete_follow(
        cls,
        follower_id: str | UUID,
        entity_type: str,
        entity_id: str | UUID,
    ) -> None:
        """
        Unfollow an entity.

        Raises:
            SupabaseClientError: If the write fails
        """
        client = cls.get_client()

        try:
            (
                client.table("follows")
                .delete()
                .eq("follower_id", normalize_uuid(follower_id))
                .eq("entity_type", entity_type)
                .eq("entity_id", normalize_uuid(entity_id))
                .execute()
            )

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to unfollow {entity_type}: {e}",
                code="DELETE_FOLLOW_FAILED",
                details={"entity_type": entity_type, "entity_id": str(entity_id)}
            )

    @classmethod
    def count_followers(cls, entity_type: str, entity_id: str | UUID) -> int:
        """
        Count followers of an entity without fetching the rows.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("follows")
                .select("id", count="exact")
                .eq("entity_type", entity_type)
                .eq("entity_id", normalize_uuid(entity_id))
                .execute()
            )
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count followers: {e}",
                code="COUNT_FOLLOWERS_FAILED",
                details={"entity_type": entity_type, "entity_id": str(entity_id)}
            )

    # -------------------------------------------------------------------------
    # RSVPs
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_rsvp(cls, user_id: str | UUID, event_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a user's RSVP row for an event, or None.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("event_rsvps")
                .select("*")
                .eq("user_id", normalize_uuid(user_id))
                .eq("event_id", normalize_uuid(event_id))
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch RSVP: {e}",
                code="FETCH_RSVP_FAILED",
                details={"event_id": str(event_id)}
            )

    @classmethod
    def upsert_rsvp(
        cls,
        user_id: str | UUID,
        event_id: str | UUID,
        status: str,
    ) -> dict[str, Any] | None:
        """
        Create or replace a user's RSVP for an event.

        One row per (event_id, user_id); a new status overwrites the old one.

        Raises:
            SupabaseClientError: If the write fails
        """
        client = cls.get_client()
        data = {
            "user_id": normalize_uuid(user_id),
            "event_id": normalize_uuid(event_id),
            "status": status,
        }

        try:
            response = (
                client.table("event_rsvps")
                .upsert(data, on_conflict="event_id,user_id")
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to save RSVP: {e}",
                code="UPSERT_RSVP_FAILED",
                suggestion="Check that the event exists",
                details={"event_id": data["event_id"], "status": status}
            )

    @classmethod
    def delete_rsvp(cls, user_id: str | UUID, event_id: str | UUID) -> None:
        """
        Remove a user's RSVP for an event.

        Raises:
            SupabaseClientError: If the write fails
        """
        client = cls.get_client()

        try:
            (
                client.table("event_rsvps")
                .delete()
                .eq("user_id", normalize_uuid(user_id))
                .eq("event_id", normalize_uuid(event_id))
                .execute()
            )

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to remove RSVP: {e}",
                code="DELETE_RSVP_FAILED",
                details={"event_id": str(event_id)}
            )

    @classmethod
    def fetch_event_rsvps(cls, event_id: str | UUID) -> list[dict[str, Any]]:
        """
        Fetch the status column of every RSVP for an event.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("event_rsvps")
                .select("status")
                .eq("event_id", normalize_uuid(event_id))
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch RSVPs: {e}",
                code="FETCH_RSVPS_FAILED",
                details={"event_id": str(event_id)}
            )

    @classmethod
    def fetch_rsvp_events(cls, user_id: str | UUID, status: str) -> list[dict[str, Any]]:
        """
        Fetch the events a user RSVP'd to with the given status.

        Returns:
            Event rows (embedded through the RSVP); RSVPs whose event was
            deleted are dropped. Past events are NOT filtered out here.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user = normalize_uuid(user_id)

        try:
            response = (
                client.table("event_rsvps")
                .select(f"*, event:events({EVENT_SELECT})")
                .eq("user_id", user)
                .eq("status", status)
                .execute()
            )
            return [row["event"] for row in response.data or [] if row.get("event")]

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch RSVP events: {e}",
                code="FETCH_RSVP_EVENTS_FAILED",
                details={"user_id": user, "status": status}
            )

    # -------------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_reviews(
        cls,
        entity_type: str | None = None,
        entity_id: str | UUID | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch reviews, newest first, with the author's profile embedded.

        Args:
            entity_type: Restrict to one entity type (optional)
            entity_id: Restrict to one entity (optional)
            limit: Optional row cap (the feed uses FEED_PAGE_SIZE)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = (
                client.table("reviews")
                .select("*, profile:profiles(username, full_name, avatar_url)")
            )
            if entity_type is not None:
                query = query.eq("entity_type", entity_type)
            if entity_id is not None:
                query = query.eq("entity_id", normalize_uuid(entity_id))
            query = query.order("created_at", desc=True)
            if limit is not None:
                query = query.limit(limit)
            return query.execute().data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch reviews: {e}",
                code="FETCH_REVIEWS_FAILED",
                details={"entity_type": entity_type, "entity_id": str(entity_id) if entity_id else None}
            )

    @classmethod
    def fetch_user_review(
        cls,
        user_id: str | UUID,
        entity_type: str,
        entity_id: str | UUID,
    ) -> dict[str, Any] | None:
        """
        Fetch a user's existing review of an entity, or None.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("reviews")
                .select("id")
                .eq("user_id", normalize_uuid(user_id))
                .eq("entity_type", entity_type)
                .eq("entity_id", normalize_uuid(entity_id))
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to check existing review: {e}",
                code="FETCH_REVIEW_FAILED",
                details={"entity_type": entity_type, "entity_id": str(entity_id)}
            )

    @classmethod
    def insert_review(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a review row.

        Args:
            data: Column values (user_id, entity_type, entity_id, rating, ...)

        Returns:
            Inserted review dict with generated id and created_at

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table("reviews").insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert review: {e}",
                code="INSERT_REVIEW_FAILED",
                details={"entity_type": data.get("entity_type"), "entity_id": data.get("entity_id")}
            )

    # -------------------------------------------------------------------------
    # Feed Sources
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_menu_posts(cls, limit: int = 10) -> list[dict[str, Any]]:
        """
        Fetch the most recent menu posts with venue and author embedded.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("menu_procs")
                .select("*, venue:venues(*), user:profiles(username, full_name)")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch menu posts: {e}",
                code="FETCH_MENU_POSTS_FAILED",
                details={"limit": limit}
            )

    # -------------------------------------------------------------------------
    # Owner Content
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_announcements(cls, created_by: str | UUID) -> list[dict[str, Any]]:
        """
        Fetch announcements a user created, highest priority first.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("announcements")
                .select("*")
                .eq("created_by", normalize_uuid(created_by))
                .order("priority", desc=True)
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch announcements: {e}",
                code="FETCH_ANNOUNCEMENTS_FAILED",
                details={"created_by": str(created_by)}
            )

    @classmethod
    def fetch_advertisements(cls, user_id: str | UUID) -> list[dict[str, Any]]:
        """
        Fetch advertisements a user owns, newest first.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("advertisements")
                .select("*")
                .eq("user_id", normalize_uuid(user_id))
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch advertisements: {e}",
                code="FETCH_ADVERTISEMENTS_FAILED",
                details={"user_id": str(user_id)}
            )

    # -------------------------------------------------------------------------
    # Public Banners
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_active_advertisement(cls, today: date) -> dict[str, Any] | None:
        """
        Fetch the newest advertisement whose date range covers today.

        Args:
            today: The viewer's local date

        Returns:
            Advertisement row, or None when nothing is running

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("advertisements")
                .select("*")
                .lte("start_date", today.isoformat())
                .gte("end_date", today.isoformat())
                .order("created_at", desc=True)
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch active advertisement: {e}",
                code="FETCH_ACTIVE_ADVERTISEMENT_FAILED",
                details={"today": today.isoformat()}
            )

    @classmethod
    def fetch_active_announcements(cls, now: datetime) -> list[dict[str, Any]]:
        """
        Fetch announcements flagged active that have not expired,
        highest priority first.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("announcements")
                .select("*")
                .eq("active", True)
                .or_(f"expires_at.is.null,expires_at.gt.{_iso(now)}")
                .order("priority", desc=True)
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch active announcements: {e}",
                code="FETCH_ACTIVE_ANNOUNCEMENTS_FAILED",
                suggestion="Check that the announcements table allows public reads",
            )

    @classmethod
    def _bump_ad_counter(cls, ad_id: str | UUID, column: str, current: int | None) -> bool:
        ad_id = normalize_uuid(ad_id)
        client = cls.get_client()

        try:
            if current is None:
                response = (
                    client.table("advertisements")
                    .select(column)
                    .eq("id", ad_id)
                    .limit(1)
                    .execute()
                )
                if not response.data:
                    logger.warning(f"Advertisement {ad_id} not found; {column} not recorded")
                    return False
                current = response.data[0].get(column) or 0

            client.table("advertisements").update({column: current + 1}).eq("id", ad_id).execute()
            return True

        except Exception as e:
            logger.warning(f"Failed to record {column} for advertisement {ad_id}: {e}")
            return False

    @classmethod
    def record_ad_view(cls, ad_id: str | UUID, views: int) -> bool:
        """
        Increment an advertisement's view counter.

        Best effort like track_page_view: failures are logged at WARNING.

        Args:
            ad_id: The advertisement UUID
            views: Counter value the row was read with

        Returns:
            True if the update went through
        """
        return cls._bump_ad_counter(ad_id, "views", views)

    @classmethod
    def record_ad_click(cls, ad_id: str | UUID) -> bool:
        """
        Increment an advertisement's click counter.

        Reads the current count first. Failures (including an unknown id)
        are logged at WARNING and reported as False.
        """
        return cls._bump_ad_counter(ad_id, "clicks", None)

    # -------------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------------

    @classmethod
    def track_page_view(
        cls,
        page_type: str,
        page_id: str | UUID,
        user_id: str | UUID | None = None,
    ) -> None:
        """
        Record a detail-page view.

        Best effort: a failure is logged and swallowed so a page never fails
        because analytics did.
        """
        data = {
            "page_type": page_type,
            "page_id": normalize_uuid(page_id),
            "user_id": normalize_uuid(user_id) if user_id else None,
        }

        try:
            cls.get_client().table("page_views").insert(data).execute()
        except Exception as e:
            logger.warning(f"Failed to track {page_type} view {data['page_id']}: {e}")

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @classmethod
    def ping(cls) -> None:
        """
        Cheapest possible round trip, used by the readiness check.

        Raises:
            Exception: Whatever the client raises when the database is unreachable
        """
        cls.get_client().table("events").select("id").limit(1).execute()
