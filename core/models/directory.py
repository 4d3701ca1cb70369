# =============================================================================
# core/models/directory.py - Directory Filter Schemas
# =============================================================================
# Inputs and outputs of the Directory Filter Engine (core/directory.py):
# - DirectoryFilters: search string, per-facet selections, date bucket, sort
# - FacetCount: label -> count for one facet
# - FilteredList: filtered + sorted items with their facet counts
#
# Facet vocabularies live here too, so the API can list every option even
# when no item currently carries it.
# =============================================================================

from datetime import date
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, computed_field

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Fixed vocabularies
# -----------------------------------------------------------------------------

EVENT_TYPES = (
    "Art", "Entertainment", "Lifestyle", "Local Flavor", "Live Music",
    "Party For A Cause", "Community / Cultural", "Shop Local",
)

ARTIST_TYPES = ("Musician", "Visual", "Performance", "Literary")

MUSICAL_GENRES = (
    "Rock", "Pop", "Jazz", "Classical", "Electronic", "Hip-Hop", "Country",
    "Reggae", "Blues", "Folk", "Singer-Songwriter", "Spoken Word", "Motown",
    "Funk", "Americana", "Punk", "Grunge", "Jam Band", "Tejano", "Latin", "DJ",
)

VISUAL_MEDIUMS = (
    "Photography", "Digital", "Conceptual", "Fiber Arts", "Sculpture / Clay",
    "Airbrush / Street / Mural", "Painting", "Jewelry", "Illustration",
)

VENUE_TYPES = (
    "Art Gallery", "Live Music", "Bar/Tavern", "Retail", "Restaurant",
    "Event Space", "Brewery/Winery", "Outdoor Space", "Theatre", "Studio/Class",
    "Community Space", "First Friday ArtWalk", "Coffee Shop", "Church",
    "Experiences", "Trades + Services",
)

NEIGHBORHOODS = (
    "Downtown", "NOTO", "North Topeka", "Oakland", "Westboro Mart",
    "College Hill", "Lake Shawnee", "Golden Mile", "A Short Drive",
    "South Topeka", "Midtown", "West Topeka",
)


DATE_FACET = "date"


class DateBucket(str, Enum):
    """
    Coarse date ranges for the events directory.

    All windows start at local midnight today:
    - today: until local midnight tomorrow
    - week: until local midnight 7 days from today
    - month: until the same calendar day next month
    """
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class SortKey(str, Enum):
    START_ASC = "start_asc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    EVENT_COUNT_DESC = "event_count_desc"


class DirectoryFilters(BaseModel):
    """
    Active filter selections for one directory view.

    Example:
        DirectoryFilters(
            search="jazz",
            selections={"event_types": {"Live Music"}},
            date_bucket=DateBucket.WEEK,
        )
    """

    search: str = Field(
        default="",
        description="Case-insensitive substring; blank means no text filter"
    )

    selections: dict[str, set[str]] = Field(
        default_factory=dict,
        description="Selected labels per facet (OR within a facet)"
    )

    date_bucket: DateBucket = Field(
        default=DateBucket.ALL,
        description="Events only: coarse date range"
    )

    sort: SortKey | None = Field(
        default=None,
        description="Sort key; None uses the directory's default"
    )

    def selected(self, facet: str) -> frozenset[str]:
        """Selected labels of a facet; the date facet reads date_bucket."""
        if facet == DATE_FACET:
            if self.date_bucket == DateBucket.ALL:
                return frozenset()
            return frozenset({self.date_bucket.value})
        return frozenset(self.selections.get(facet) or ())

    @property
    def active_filter_count(self) -> int:
        """Number of selected chips, as shown on the Filters button badge."""
        count = sum(len(labels) for labels in self.selections.values())
        if self.date_bucket != DateBucket.ALL:
            count += 1
        return count


class FacetCount(BaseModel):
    """
    Counts for one facet.

    Each count is measured against every other active filter but not this
    facet's own selection.
    """
    facet: str
    counts: dict[str, int] = Field(default_factory=dict)
    selected: list[str] = Field(default_factory=list)


class FilteredList(BaseModel, Generic[T]):
    """Result of running a directory through the filter engine."""

    items: list[T] = Field(default_factory=list)
    facets: dict[str, FacetCount] = Field(default_factory=dict)
    filters: DirectoryFilters = Field(default_factory=DirectoryFilters)

    @computed_field
    @property
    def total(self) -> int:
        return len(self.items)

    @computed_field
    @property
    def active_filter_count(self) -> int:
        return self.filters.active_filter_count


class DateGroup(BaseModel, Generic[T]):
    """Events sharing one local calendar day."""
    day: date
    items: list[T] = Field(default_factory=list)
