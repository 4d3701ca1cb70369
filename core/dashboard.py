# =============================================================================
# core/dashboard.py - Dashboard Aggregation
# =============================================================================
# Pure derivations behind the dashboard. Network access lives in
# core/services/dashboard_service.py; everything here works on rows that
# were already fetched, so the null-dropping and de-duplication rules can be
# tested on their own. The public banner selectors reuse the same status
# rules.
#
# Follow hydration is a two-step pipeline:
#   1. resolve   - follow rows -> embedded target rows (may be null)
#   2. hydrate   - drop unresolved targets, validate the rest as models
# =============================================================================

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel

from core.models.entities import Event, parse_rows
from core.models.promotions import (
    Advertisement,
    AdvertisementStatus,
    AdvertisementSummary,
    Announcement,
    AnnouncementStatus,
    AnnouncementSummary,
)
from core.models.viewer import ViewerContext

M = TypeVar("M", bound=BaseModel)


# =============================================================================
# Follow hydration
# =============================================================================

def resolve_follow_targets(
    follow_rows: Iterable[dict[str, Any]],
    target_key: str,
) -> list[dict[str, Any] | None]:
    """
    Pull the embedded target out of each follow row.

    Orphaned follows (the artist or venue was deleted) resolve to None.

    Example:
        resolve_follow_targets([{"entity_id": "a1", "artist": {...}}], "artist")
    """
    return [row.get(target_key) for row in follow_rows]


def hydrate(targets: Iterable[dict[str, Any] | None], model: type[M]) -> list[M]:
    """Validate resolved targets as models, dropping the unresolved ones."""
    return parse_rows((target for target in targets if target), model)


def follow_entity_ids(follow_rows: Iterable[dict[str, Any]]) -> list[str]:
    """Distinct entity ids of follow rows, in first-seen order."""
    seen: dict[str, None] = {}
    for row in follow_rows:
        entity_id = row.get("entity_id")
        if entity_id:
            seen.setdefault(str(entity_id), None)
    return list(seen)


# =============================================================================
# Upcoming from followed
# =============================================================================

def merge_upcoming(
    venue_events: Iterable[Event],
    artist_events: Iterable[Event],
    viewer: ViewerContext,
    limit: int | None = None,
) -> list[Event]:
    """
    Union of events at followed venues and events featuring followed artists.

    An event reachable through both paths appears once. Only events starting
    at or after viewer.now are kept, sorted by start time (title breaks ties).

    Args:
        venue_events: Events at any followed venue
        artist_events: Events featuring any followed artist
        viewer: Supplies "now" and the zone for legacy date-only events
        limit: Optional cap applied after sorting

    Returns:
        De-duplicated, ascending list of upcoming events
    """
    unique: dict[str, Event] = {}
    for event in [*venue_events, *artist_events]:
        unique.setdefault(event.id, event)

    upcoming = []
    for event in unique.values():
        starts_at = event.starts_at(viewer.tz)
        if starts_at is not None and starts_at >= viewer.now:
            upcoming.append((starts_at, event))

    upcoming.sort(key=lambda pair: (pair[0], pair[1].title.casefold()))
    events = [event for _, event in upcoming]
    return events[:limit] if limit is not None else events


def upcoming_only(events: Iterable[Event], viewer: ViewerContext) -> list[Event]:
    """Events starting at or after now, ascending. Used for RSVP lists."""
    return merge_upcoming(events, [], viewer)


# =============================================================================
# Status derivation
# =============================================================================

def announcement_status(announcement: Announcement, now: datetime) -> AnnouncementStatus:
    """
    expired if expires_at is in the past, else active/inactive per the flag.
    """
    if announcement.expires_at is not None and announcement.expires_at < now:
        return AnnouncementStatus.EXPIRED
    return AnnouncementStatus.ACTIVE if announcement.active else AnnouncementStatus.INACTIVE


def _range_bounds(
    start: datetime | date,
    end: datetime | date,
    viewer: ViewerContext,
) -> tuple[datetime, datetime]:
    # A plain end date covers that whole local day
    if not isinstance(start, datetime):
        start = viewer.local_midnight(start)
    if not isinstance(end, datetime):
        end = viewer.local_midnight(end + timedelta(days=1)) - timedelta(microseconds=1)
    return start, end


def advertisement_status(ad: Advertisement, viewer: ViewerContext) -> AdvertisementStatus:
    """
    active if now is within [start_date, end_date], expired if end_date has
    passed, pending otherwise.
    """
    start, end = _range_bounds(ad.start_date, ad.end_date, viewer)
    if end < viewer.now:
        return AdvertisementStatus.EXPIRED
    if start <= viewer.now:
        return AdvertisementStatus.ACTIVE
    return AdvertisementStatus.PENDING


def click_through_rate(clicks: int, views: int) -> float | None:
    """clicks / views, or None when there are no views."""
    if not views or views <= 0:
        return None
    return clicks / views


def summarize_announcements(
    announcements: Iterable[Announcement],
    viewer: ViewerContext,
) -> list[AnnouncementSummary]:
    return [
        AnnouncementSummary(
            id=a.id,
            title=a.title,
            status=announcement_status(a, viewer.now),
            priority=a.priority,
            expires_at=a.expires_at,
            created_at=a.created_at,
        )
        for a in announcements
    ]


def summarize_advertisements(
    ads: Iterable[Advertisement],
    viewer: ViewerContext,
) -> list[AdvertisementSummary]:
    return [
        AdvertisementSummary(
            id=ad.id,
            title=ad.title,
            status=advertisement_status(ad, viewer),
            start_date=ad.start_date,
            end_date=ad.end_date,
            views=ad.views,
            clicks=ad.clicks,
            click_through_rate=click_through_rate(ad.clicks, ad.views),
        )
        for ad in ads
    ]


# =============================================================================
# Public banners
# =============================================================================

def live_announcements(
    announcements: Iterable[Announcement],
    now: datetime,
) -> list[Announcement]:
    """Announcements whose status is active at `now`, order kept."""
    return [a for a in announcements if announcement_status(a, now) == AnnouncementStatus.ACTIVE]


def running_advertisement(
    ads: Iterable[Advertisement],
    viewer: ViewerContext,
) -> Advertisement | None:
    """
    First advertisement running right now, or None.

    An ad whose end timestamp passed earlier today is not running.
    """
    for ad in ads:
        if advertisement_status(ad, viewer) == AdvertisementStatus.ACTIVE:
            return ad
    return None
