# =============================================================================
# core/models/detail.py - Detail Page Schemas
# =============================================================================
# One entity plus what its detail page shows around it.
# Per-viewer fields (my_rsvp, is_following) are None for anonymous viewers.
# =============================================================================

from pydantic import BaseModel, Field

from .entities import Artist, Event, Venue
from .social import RatingSummary, RSVPCounts, RSVPStatus


class EventDetail(BaseModel):
    event: Event
    rsvp_counts: RSVPCounts = Field(default_factory=RSVPCounts)
    my_rsvp: RSVPStatus | None = None
    rating: RatingSummary = Field(default_factory=RatingSummary)


class ArtistDetail(BaseModel):
    """Artist with its upcoming events, ascending by start."""
    artist: Artist
    upcoming_events: list[Event] = Field(default_factory=list)
    follower_count: int = 0
    is_following: bool | None = None
    rating: RatingSummary = Field(default_factory=RatingSummary)


class VenueDetail(BaseModel):
    """Venue with its upcoming events, ascending by start."""
    venue: Venue
    upcoming_events: list[Event] = Field(default_factory=list)
    follower_count: int = 0
    is_following: bool | None = None
    rating: RatingSummary = Field(default_factory=RatingSummary)
