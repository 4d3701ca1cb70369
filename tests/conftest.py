# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Pins "now" to Wednesday 2024-06-12 15:00 in America/Chicago (UTC-5)
# - Provides row factories shaped like PostgREST responses
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from core.models.entities import Artist, Event, Venue
from core.models.viewer import ViewerContext

CHICAGO = ZoneInfo("America/Chicago")
NOW = datetime(2024, 6, 12, 15, 0, tzinfo=CHICAGO)
USER_ID = "11111111-1111-1111-1111-111111111111"


# =============================================================================
# Viewer Fixtures
# =============================================================================

@pytest.fixture
def viewer():
    """Signed-in viewer in Chicago, Wednesday afternoon."""
    return ViewerContext.create(user_id=USER_ID, tz_name="America/Chicago", now=NOW)


@pytest.fixture
def anonymous_viewer():
    """Anonymous viewer with the same clock."""
    return ViewerContext.create(tz_name="America/Chicago", now=NOW)


# =============================================================================
# Row Factories
# =============================================================================

@pytest.fixture
def venue_rows():
    """Venues: two Downtown music rooms, a NOTO gallery and an untagged cafe."""
    return [
        {
            "id": "v1",
            "name": "The Vault",
            "slug": "the-vault",
            "address": "100 Main St",
            "city": "Topeka",
            "venue_types": ["Live Music", "Bar/Tavern"],
            "neighborhood": "Downtown",
        },
        {
            "id": "v2",
            "name": "Red Door Gallery",
            "slug": "red-door-gallery",
            "description": "Rotating local exhibitions",
            "venue_types": ["Art Gallery"],
            "neighborhood": "NOTO",
        },
        {
            "id": "v3",
            "name": "apex hall",
            "slug": "apex-hall",
            "venue_types": ["Live Music"],
            "neighborhood": "Downtown",
        },
        {
            "id": "v4",
            "name": "Quiet Cafe",
            "slug": "quiet-cafe",
            "venue_types": None,
            "neighborhood": None,
        },
    ]


@pytest.fixture
def artist_rows():
    """Artists covering every artist_type edge: explicit, missing, unknown."""
    return [
        {
            "id": "a1",
            "name": "Miles Quartet",
            "slug": "miles-quartet",
            "bio": "Hard bop standards",
            "genre": "Jazz",
            "artist_type": "Musician",
            "musical_genres": ["Jazz"],
        },
        {
            "id": "a2",
            "name": "ada paints",
            "slug": "ada-paints",
            "artist_type": "Visual",
            "visual_mediums": ["Painting", "Illustration"],
        },
        {
            "id": "a3",
            "name": "Nora Keys",
            "slug": "nora-keys",
            "artist_type": None,
            "musical_genres": None,
        },
        {
            "id": "a4",
            "name": "Zed Poet",
            "slug": "zed-poet",
            "artist_type": "Literary",
        },
        {
            "id": "a5",
            "name": "Brisket Bros",
            "slug": "brisket-bros",
            "artist_type": "Culinary",
        },
    ]


@pytest.fixture
def make_event(venue_rows, artist_rows):
    """Build an event row with venue and artists embedded."""
    venues = {row["id"]: row for row in venue_rows}
    artists = {row["id"]: row for row in artist_rows}

    def _make(
        event_id: str,
        title: str,
        start_date: str | None,
        venue_id: str | None = None,
        event_types: list[str] | None = None,
        artist_ids: tuple[str, ...] = (),
        **extra,
    ) -> dict:
        return {
            "id": event_id,
            "title": title,
            "slug": event_id,
            "start_date": start_date,
            "venue_id": venue_id,
            "venue": venues.get(venue_id),
            "event_types": event_types,
            "event_artists": [
                {"is_featured": i == 0, "artist": artists[artist_id]}
                for i, artist_id in enumerate(artist_ids)
            ],
            **extra,
        }

    return _make


@pytest.fixture
def event_rows(make_event):
    """
    Five events around NOW (Wed 2024-06-12 15:00 CDT).

    - e1 tonight 20:00 CDT (already June 13 in UTC)
    - e5 legacy date-only row for today
    - e2 Saturday, inside this week
    - e3 June 30, inside this month
    - e4 August 1, outside every bucket but "all"
    """
    return [
        make_event(
            "e1", "Jazz Night", "2024-06-12T20:00:00-05:00",
            venue_id="v1", event_types=["Live Music"], artist_ids=("a1",),
            description="Late set",
        ),
        make_event(
            "e2", "Gallery Opening", "2024-06-15T18:00:00-05:00",
            venue_id="v2", event_types=["Art"], artist_ids=("a2",),
        ),
        make_event(
            "e3", "Rock Fest", "2024-06-30T19:00:00-05:00",
            venue_id="v1", event_types=["Live Music", "Entertainment"],
        ),
        make_event(
            "e4", "Winter Market", "2024-08-01T10:00:00-05:00",
            venue_id="v3", event_types=["Shop Local"],
        ),
        make_event(
            "e5", "Legacy Show", None,
            venue_id="v3", event_types=None, event_date="2024-06-12",
        ),
    ]


@pytest.fixture
def events(event_rows):
    return [Event.from_row(row) for row in event_rows]


@pytest.fixture
def artists(artist_rows):
    return [Artist.from_row(row) for row in artist_rows]


@pytest.fixture
def venues(venue_rows):
    return [Venue.from_row(row) for row in venue_rows]
