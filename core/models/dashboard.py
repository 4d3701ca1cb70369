# =============================================================================
# core/models/dashboard.py - Dashboard Schemas
# =============================================================================
# The signed-in user's personalised summary. Counts are computed from the
# lists they describe, so a count can never disagree with its list.
# =============================================================================

from pydantic import BaseModel, Field, computed_field

from .entities import Artist, Event, Venue
from .promotions import AdvertisementSummary, AnnouncementSummary


class DashboardCounts(BaseModel):
    """Header tiles of the dashboard."""
    followed_artists: int = 0
    followed_venues: int = 0
    going: int = 0
    interested: int = 0
    upcoming_from_followed: int = 0
    announcements: int = 0
    advertisements: int = 0


class DashboardSummary(BaseModel):
    """
    Everything the dashboard shows.

    failed_sections names the fetches that errored; those sections are
    empty rather than failing the whole response.
    """

    followed_artists: list[Artist] = Field(default_factory=list)
    followed_venues: list[Venue] = Field(default_factory=list)
    going_events: list[Event] = Field(default_factory=list)
    interested_events: list[Event] = Field(default_factory=list)
    upcoming_from_followed: list[Event] = Field(default_factory=list)
    announcements: list[AnnouncementSummary] = Field(default_factory=list)
    advertisements: list[AdvertisementSummary] = Field(default_factory=list)
    failed_sections: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def counts(self) -> DashboardCounts:
        return DashboardCounts(
            followed_artists=len(self.followed_artists),
            followed_venues=len(self.followed_venues),
            going=len(self.going_events),
            interested=len(self.interested_events),
            upcoming_from_followed=len(self.upcoming_from_followed),
            announcements=len(self.announcements),
            advertisements=len(self.advertisements),
        )

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_sections)
