# =============================================================================
# core/models/feed.py - Feed Schemas
# =============================================================================
# The community feed mixes two sources:
# - menu posts: short posts about a dish or a venue (menu_procs table)
# - reviews: star ratings of any event, artist or venue
#
# FeedItem carries a `type` discriminant plus only what a summary card needs.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class FeedItemType(str, Enum):
    MENU_POST = "menu_post"
    REVIEW = "review"


class MenuPostSummary(BaseModel):
    """Card fields for a menu post."""
    title: str
    content: str | None = None
    image_url: str | None = Field(
        default=None,
        description="First image of the post, if any"
    )
    venue_id: str | None = None
    venue_name: str | None = None
    author_name: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "MenuPostSummary":
        """Build from a menu_procs row with venue and user embedded."""
        venue = row.get("venue") or {}
        user = row.get("user") or {}
        images = row.get("images") or []
        return cls(
            title=row.get("title") or "",
            content=row.get("content"),
            image_url=images[0] if images else None,
            venue_id=row.get("venue_id"),
            venue_name=venue.get("name"),
            author_name=user.get("full_name") or user.get("username"),
        )


class ReviewSummary(BaseModel):
    """Card fields for a review."""
    rating: int = Field(..., ge=1, le=5)
    title: str | None = None
    content: str | None = None
    entity_type: str
    entity_id: str
    author_name: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ReviewSummary":
        """Build from a reviews row with the author's profile embedded."""
        profile = row.get("profile") or {}
        return cls(
            rating=row["rating"],
            title=row.get("title"),
            content=row.get("content"),
            entity_type=row["entity_type"],
            entity_id=str(row["entity_id"]),
            author_name=profile.get("full_name") or profile.get("username"),
        )


class MenuPostItem(BaseModel):
    type: Literal[FeedItemType.MENU_POST] = FeedItemType.MENU_POST
    id: str
    created_at: datetime | None = None
    data: MenuPostSummary


class ReviewItem(BaseModel):
    type: Literal[FeedItemType.REVIEW] = FeedItemType.REVIEW
    id: str
    created_at: datetime | None = None
    data: ReviewSummary


FeedItem = Annotated[Union[MenuPostItem, ReviewItem], Field(discriminator="type")]


class Feed(BaseModel):
    """
    Composed feed response.

    Example:
        {"items": [{"type": "review", "id": "r1", ...}], "failed_sources": []}
    """
    items: list[FeedItem] = Field(default_factory=list)
    failed_sources: list[str] = Field(default_factory=list)
