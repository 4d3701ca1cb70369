# =============================================================================
# core/social.py - Follow, RSVP & Review Rules
# =============================================================================
# Pure decisions behind the social buttons. The service layer reads the
# current state, asks these helpers what the next state is, and writes it.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable

from core.models.entities import FOLLOWABLE_TYPES, EntityType
from core.models.social import RatingSummary, Review, RSVPCounts, RSVPStatus

logger = logging.getLogger(__name__)


def next_rsvp_status(
    current: RSVPStatus | None,
    requested: RSVPStatus,
) -> RSVPStatus | None:
    """
    Status after the user taps an RSVP button.

    Tapping the status you already have clears it; anything else replaces it.

    Example:
        next_rsvp_status(None, RSVPStatus.GOING)                # GOING
        next_rsvp_status(RSVPStatus.GOING, RSVPStatus.GOING)    # None
        next_rsvp_status(RSVPStatus.GOING, RSVPStatus.INTERESTED)  # INTERESTED
    """
    if current == requested:
        return None
    return requested


def next_follow_state(is_following: bool) -> bool:
    return not is_following


def count_rsvps(rows: Iterable[dict[str, Any]]) -> RSVPCounts:
    """Tally going / interested; other statuses are ignored."""
    going = interested = 0
    for row in rows:
        status = row.get("status")
        if status == RSVPStatus.GOING.value:
            going += 1
        elif status == RSVPStatus.INTERESTED.value:
            interested += 1
    return RSVPCounts(going=going, interested=interested)


def summarize_ratings(reviews: Iterable[Review]) -> RatingSummary:
    """
    Count, mean and 1..5 histogram of an entity's reviews.

    Returns:
        RatingSummary with average None when there are no reviews
    """
    summary = RatingSummary()
    total = 0
    for review in reviews:
        summary.histogram[review.rating] += 1
        summary.count += 1
        total += review.rating
    if summary.count:
        summary.average = round(total / summary.count, 2)
    return summary


def parse_entity_type(value: str, followable_only: bool = False) -> EntityType | None:
    """Map a path segment to an EntityType, or None if not accepted."""
    try:
        entity_type = EntityType(value)
    except ValueError:
        return None
    if followable_only and entity_type not in FOLLOWABLE_TYPES:
        return None
    return entity_type


def stored_rsvp_status(row: dict[str, Any] | None) -> RSVPStatus | None:
    """Status of an event_rsvps row; unknown values read as no RSVP."""
    if not row:
        return None
    try:
        return RSVPStatus(row.get("status"))
    except ValueError:
        logger.warning(f"Unknown RSVP status {row.get('status')!r} on event {row.get('event_id')}")
        return None
