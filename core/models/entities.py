# =============================================================================
# core/models/entities.py - Directory Entity Schemas
# =============================================================================
# Read-only views over the remote events, artists and venues tables:
# - Venue: a place that hosts events
# - Artist: a performer or maker, typed by ArtistType
# - Event: a dated happening at a venue, featuring artists
#
# Rows come from PostgREST with one level of embedded relations
# (event.venue, event.event_artists[].artist). Every model accepts a raw
# row via model_validate(); list columns that are NULL become [] and
# timestamps are always timezone-aware.
# =============================================================================

import logging
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Iterable, TypeVar
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field, ValidationError, field_validator

from lib.utils import parse_timestamp

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def parse_rows(rows: Iterable[dict[str, Any]], model: type[M]) -> list[M]:
    """
    Validate rows as `model`, skipping (and logging) malformed ones.

    One bad row never takes a whole list down with it.
    """
    items = []
    for row in rows:
        try:
            items.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed {model.__name__} row {row.get('id')}: "
                f"{e.error_count()} validation error(s)"
            )
    return items


class ArtistType(str, Enum):
    """Fixed artist categories used by the artists directory."""
    MUSICIAN = "Musician"
    VISUAL = "Visual"
    PERFORMANCE = "Performance"
    LITERARY = "Literary"


class EntityType(str, Enum):
    """
    Kinds of entity a user can review.

    Followable entities are the ARTIST and VENUE subset (see FOLLOWABLE_TYPES).
    """
    EVENT = "event"
    ARTIST = "artist"
    VENUE = "venue"


FOLLOWABLE_TYPES = (EntityType.ARTIST, EntityType.VENUE)


class RowModel(BaseModel):
    """Shared parsing rules for rows coming back from Supabase."""

    @field_validator("created_at", mode="before", check_fields=False)
    @classmethod
    def parse_created_at(cls, v: Any) -> datetime | None:
        return parse_timestamp(v)

    @classmethod
    def from_row(cls, row: dict[str, Any]):
        """Build from a PostgREST row, embedded relations included."""
        return cls.model_validate(row)


# =============================================================================
# Venue
# =============================================================================

class Venue(RowModel):
    """A venue row. Only name is guaranteed besides the id."""

    id: str
    name: str
    slug: str | None = None
    description: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    venue_type: str | None = None
    venue_types: list[str] = Field(default_factory=list)
    neighborhood: str | None = None
    image_url: str | None = None
    website: str | None = None
    created_at: datetime | None = None

    @field_validator("venue_types", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> list[str]:
        return v or []

    @property
    def neighborhood_tags(self) -> list[str]:
        """Neighborhood as a tag list so it filters like any other facet."""
        return [self.neighborhood] if self.neighborhood else []


# =============================================================================
# Artist
# =============================================================================

class Artist(RowModel):
    """
    An artist row.

    artist_type defaults to Musician when the column is NULL. Unknown
    types are kept as-is so one odd row can't break the directory.
    """

    id: str
    name: str
    slug: str | None = None
    bio: str | None = None
    genre: str | None = None
    tagline: str | None = None
    artist_type: str = ArtistType.MUSICIAN.value
    musical_genres: list[str] = Field(default_factory=list)
    visual_mediums: list[str] = Field(default_factory=list)
    image_url: str | None = None
    avatar_url: str | None = None
    website: str | None = None
    audio_file_url: str | None = None
    audio_title: str | None = None
    video_url: str | None = None
    video_title: str | None = None
    purchase_link: str | None = None
    verified: bool = False
    created_at: datetime | None = None

    @field_validator("artist_type", mode="before")
    @classmethod
    def default_type(cls, v: Any) -> str:
        if isinstance(v, ArtistType):
            return v.value
        return v or ArtistType.MUSICIAN.value

    @field_validator("musical_genres", "visual_mediums", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> list[str]:
        return v or []

    @field_validator("verified", mode="before")
    @classmethod
    def none_to_false(cls, v: Any) -> bool:
        return bool(v)

    @property
    def type_tags(self) -> list[str]:
        return [self.artist_type]


# =============================================================================
# Event
# =============================================================================

class EventArtist(BaseModel):
    """Join row between an event and one of its artists."""
    artist: Artist
    is_featured: bool = False

    @field_validator("is_featured", mode="before")
    @classmethod
    def none_to_false(cls, v: Any) -> bool:
        return bool(v)


class Event(RowModel):
    """
    An event row with its embedded venue and artists.

    start_date is the canonical timestamp. event_date is a legacy date-only
    column; it is used only when start_date is missing (see starts_at()).
    """

    id: str
    title: str
    slug: str | None = None
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    event_date: date | None = None
    venue_id: str | None = None
    venue: Venue | None = None
    event_types: list[str] = Field(default_factory=list)
    event_artists: list[EventArtist] = Field(default_factory=list)
    ticket_price: float | None = None
    ticket_url: str | None = None
    image_url: str | None = None
    star: bool = False
    created_at: datetime | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> datetime | None:
        return parse_timestamp(v)

    @field_validator("event_date", mode="before")
    @classmethod
    def parse_event_date(cls, v: Any) -> Any:
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v or None

    @field_validator("event_types", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> list[str]:
        return v or []

    @field_validator("event_artists", mode="before")
    @classmethod
    def drop_orphaned_artists(cls, v: Any) -> list[Any]:
        # Join rows whose artist was deleted embed as {"artist": null}
        return [row for row in (v or []) if row and row.get("artist")]

    @field_validator("star", mode="before")
    @classmethod
    def none_to_false(cls, v: Any) -> bool:
        return bool(v)

    def starts_at(self, tz: ZoneInfo) -> datetime | None:
        """
        Canonical start instant.

        Falls back to local midnight of the legacy event_date in the
        viewer's zone when start_date is missing.
        """
        if self.start_date is not None:
            return self.start_date
        if self.event_date is not None:
            return datetime.combine(self.event_date, time.min, tzinfo=tz)
        return None

    @property
    def artist_names(self) -> list[str]:
        return [ea.artist.name for ea in self.event_artists]

    @property
    def featured_artists(self) -> list[Artist]:
        return [ea.artist for ea in self.event_artists if ea.is_featured]

    @property
    def venue_name(self) -> str | None:
        return self.venue.name if self.venue else None
