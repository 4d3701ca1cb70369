# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - entities.py: Event, Artist, Venue rows
# - viewer.py: ViewerContext (who is asking, in which time zone)
# - directory.py: Filter inputs, facet counts, filtered lists
# - detail.py: Detail page payloads
# - social.py: Follows, RSVPs, reviews, mutation results
# - promotions.py: Announcements and advertisements
# - dashboard.py: DashboardSummary
# - feed.py: Feed items
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Entity Models - Directory rows
# -----------------------------------------------------------------------------
from .entities import (
    FOLLOWABLE_TYPES,
    Artist,
    ArtistType,
    EntityType,
    Event,
    EventArtist,
    Venue,
    parse_rows,
)

# -----------------------------------------------------------------------------
# Viewer
# -----------------------------------------------------------------------------
from .viewer import ViewerContext

# -----------------------------------------------------------------------------
# Directory Models - Filter engine inputs/outputs
# -----------------------------------------------------------------------------
from .directory import (
    DateBucket,
    DateGroup,
    DirectoryFilters,
    FacetCount,
    FilteredList,
    SortKey,
)

# -----------------------------------------------------------------------------
# Detail Models
# -----------------------------------------------------------------------------
from .detail import ArtistDetail, EventDetail, VenueDetail

# -----------------------------------------------------------------------------
# Social Models - Follows, RSVPs, reviews
# -----------------------------------------------------------------------------
from .social import (
    RSVP,
    Follow,
    MutationResult,
    RatingSummary,
    Review,
    ReviewAuthor,
    ReviewCreate,
    ReviewList,
    RSVPCounts,
    RSVPStatus,
)

# -----------------------------------------------------------------------------
# Promotion & Dashboard Models
# -----------------------------------------------------------------------------
from .promotions import (
    ActiveAdvertisement,
    AdClickResult,
    Advertisement,
    AdvertisementStatus,
    AdvertisementSummary,
    Announcement,
    AnnouncementStatus,
    AnnouncementSummary,
)
from .dashboard import DashboardCounts, DashboardSummary

# -----------------------------------------------------------------------------
# Feed Models
# -----------------------------------------------------------------------------
from .feed import (
    Feed,
    FeedItem,
    FeedItemType,
    MenuPostItem,
    MenuPostSummary,
    ReviewItem,
    ReviewSummary,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    # Entities
    "FOLLOWABLE_TYPES",
    "Artist",
    "ArtistType",
    "EntityType",
    "Event",
    "EventArtist",
    "Venue",
    "parse_rows",
    # Viewer
    "ViewerContext",
    # Directory
    "DateBucket",
    "DateGroup",
    "DirectoryFilters",
    "FacetCount",
    "FilteredList",
    "SortKey",
    # Detail
    "ArtistDetail",
    "EventDetail",
    "VenueDetail",
    # Social
    "RSVP",
    "Follow",
    "MutationResult",
    "RatingSummary",
    "Review",
    "ReviewAuthor",
    "ReviewCreate",
    "ReviewList",
    "RSVPCounts",
    "RSVPStatus",
    # Promotions & dashboard
    "ActiveAdvertisement",
    "AdClickResult",
    "Advertisement",
    "AdvertisementStatus",
    "AdvertisementSummary",
    "Announcement",
    "AnnouncementStatus",
    "AnnouncementSummary",
    "DashboardCounts",
    "DashboardSummary",
    # Feed
    "Feed",
    "FeedItem",
    "FeedItemType",
    "MenuPostItem",
    "MenuPostSummary",
    "ReviewItem",
    "ReviewSummary",
]
