# =============================================================================
# core/models/social.py - Follow, RSVP & Review Schemas
# =============================================================================
# User-to-entity relations:
# - Follow: (follower_id, entity_type, entity_id), unique on the triple
# - RSVP: (user_id, event_id) -> status, one row per pair (upsert)
# - Review: (user_id, entity_type, entity_id) -> rating 1..5 + optional text
#
# MutationResult is what every write returns: the caller can always restore
# previous_value when ok is False.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .entities import RowModel


class RSVPStatus(str, Enum):
    """
    Attendance intent for an event.

    Only GOING and INTERESTED are shown as counters; NOT_GOING is kept so a
    user can record a decline without deleting the row.
    """
    GOING = "going"
    INTERESTED = "interested"
    NOT_GOING = "not_going"


class Follow(RowModel):
    """A follows row."""
    id: str | None = None
    follower_id: str
    entity_type: str
    entity_id: str
    created_at: datetime | None = None


class RSVP(RowModel):
    """An event_rsvps row."""
    id: str | None = None
    user_id: str
    event_id: str
    status: RSVPStatus
    created_at: datetime | None = None


class RSVPCounts(BaseModel):
    """Going / interested tallies for one event."""
    going: int = Field(default=0, ge=0)
    interested: int = Field(default=0, ge=0)


# =============================================================================
# Reviews
# =============================================================================

class ReviewAuthor(BaseModel):
    """Embedded profiles row on a review."""
    username: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.username or "Anonymous"


class Review(RowModel):
    """A reviews row, optionally with its author's profile embedded."""
    id: str
    user_id: str | None = None
    entity_type: str
    entity_id: str
    rating: int = Field(..., ge=1, le=5)
    title: str | None = None
    content: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None
    profile: ReviewAuthor | None = None


class ReviewCreate(BaseModel):
    """
    Body for submitting a review.

    Example:
        {"rating": 5, "title": "Great night", "content": "Loved the set"}
    """
    rating: int = Field(
        default=5,
        ge=1,
        le=5,
        description="Star rating from 1 to 5"
    )
    title: str | None = Field(
        default=None,
        max_length=200,
        description="Optional headline"
    )
    content: str | None = Field(
        default=None,
        max_length=5000,
        description="Optional review body"
    )
    image_url: str | None = Field(
        default=None,
        description="Optional image URL"
    )


class RatingSummary(BaseModel):
    """Aggregate of an entity's reviews."""
    count: int = 0
    average: float | None = None
    histogram: dict[int, int] = Field(
        default_factory=lambda: {star: 0 for star in range(1, 6)}
    )


# =============================================================================
# Mutation Results
# =============================================================================

class MutationResult(BaseModel):
    """
    Outcome of a follow/RSVP/review write.

    current_value is the state the caller should display. On failure it
    equals previous_value, so a UI that flipped optimistically can roll back
    by reading it.

    Example:
        {"ok": false, "previous_value": "going", "current_value": "going",
         "error": "[UPSERT_RSVP_FAILED] ..."}
    """
    ok: bool
    previous_value: Any = None
    current_value: Any = None
    error: str | None = None


class ReviewList(BaseModel):
    """Reviews of one entity, newest first, with their aggregate."""
    reviews: list[Review] = Field(default_factory=list)
    summary: RatingSummary = Field(default_factory=RatingSummary)
