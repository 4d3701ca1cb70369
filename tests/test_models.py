# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# This module contains tests for:
# - Row parsing (NULL lists, legacy dates, orphaned joins)
# - ViewerContext construction
# - parse_timestamp edge cases
# =============================================================================

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from core.models.directory import DateBucket, DirectoryFilters
from core.models.entities import Artist, Event, Venue, parse_rows
from core.models.viewer import ViewerContext
from lib.utils import parse_timestamp


# =============================================================================
# Entity Tests
# =============================================================================

class TestEvent:
    """Test Event row parsing."""

    def test_from_row_with_embedded_relations(self, event_rows):
        event = Event.from_row(event_rows[0])

        assert event.venue_name == "The Vault"
        assert event.artist_names == ["Miles Quartet"]
        assert [a.id for a in event.featured_artists] == ["a1"]
        assert event.start_date.tzinfo is not None

    def test_orphaned_event_artists_dropped(self):
        event = Event.from_row({
            "id": "e1",
            "title": "Show",
            "event_artists": [{"is_featured": True, "artist": None}, None],
        })

        assert event.event_artists == []

    def test_legacy_event_date_fallback(self):
        chicago = ZoneInfo("America/Chicago")
        event = Event.from_row({"id": "e1", "title": "Old", "event_date": "2024-06-12T00:00:00"})

        assert event.event_date == date(2024, 6, 12)
        assert event.starts_at(chicago) == datetime(2024, 6, 12, tzinfo=chicago)

    def test_start_date_wins_over_event_date(self):
        event = Event.from_row({
            "id": "e1",
            "title": "Both",
            "start_date": "2024-06-13T01:00:00Z",
            "event_date": "2024-06-01",
        })

        assert event.starts_at(ZoneInfo("UTC")) == datetime(2024, 6, 13, 1, tzinfo=timezone.utc)

    def test_start_date_with_trimmed_fraction_is_dated(self):
        event = Event.from_row({"id": "e1", "title": "Late", "start_date": "2024-06-13T01:00:00.12345+00:00"})

        assert event.starts_at(ZoneInfo("America/Chicago")) == datetime(
            2024, 6, 12, 20, 0, 0, 123450, tzinfo=ZoneInfo("America/Chicago")
        )

    def test_null_lists_become_empty(self):
        event = Event.from_row({"id": "e1", "title": "Bare", "event_types": None, "event_artists": None})

        assert event.event_types == []
        assert event.event_artists == []
        assert event.starts_at(ZoneInfo("UTC")) is None


class TestArtistAndVenue:
    """Test Artist and Venue row parsing."""

    def test_artist_type_defaults_to_musician(self):
        assert Artist.from_row({"id": "a1", "name": "X", "artist_type": None}).artist_type == "Musician"
        assert Artist.from_row({"id": "a1", "name": "X"}).artist_type == "Musician"

    def test_unknown_artist_type_kept(self):
        assert Artist.from_row({"id": "a1", "name": "X", "artist_type": "Culinary"}).type_tags == ["Culinary"]

    def test_venue_neighborhood_tags(self):
        assert Venue.from_row({"id": "v1", "name": "V", "neighborhood": "NOTO"}).neighborhood_tags == ["NOTO"]
        assert Venue.from_row({"id": "v1", "name": "V", "venue_types": None}).neighborhood_tags == []

    def test_parse_rows_skips_malformed(self):
        venues = parse_rows([{"id": "v1", "name": "Ok"}, {"id": "v2"}], Venue)

        assert [v.id for v in venues] == ["v1"]


# =============================================================================
# Viewer & Filter Tests
# =============================================================================

class TestViewerContext:
    """Test ViewerContext construction."""

    def test_naive_now_is_localized(self):
        viewer = ViewerContext.create(tz_name="America/Chicago", now=datetime(2024, 6, 12, 23, 30))

        assert viewer.local_today() == date(2024, 6, 12)
        assert viewer.now.tzinfo is not None

    def test_local_today_differs_from_utc(self):
        # 02:00 UTC on the 13th is still the 12th in Chicago
        viewer = ViewerContext.create(
            tz_name="America/Chicago",
            now=datetime(2024, 6, 13, 2, 0, tzinfo=timezone.utc),
        )

        assert viewer.local_today() == date(2024, 6, 12)
        assert viewer.today_start() == datetime(2024, 6, 12, tzinfo=ZoneInfo("America/Chicago"))

    def test_unknown_zone_raises(self):
        with pytest.raises(ZoneInfoNotFoundError):
            ViewerContext.create(tz_name="Mars/Olympus_Mons")

    def test_anonymous(self):
        assert not ViewerContext.create().is_authenticated


class TestDirectoryFilters:
    """Test filter selections."""

    def test_date_facet_reads_bucket(self):
        filters = DirectoryFilters(date_bucket=DateBucket.TODAY)

        assert filters.selected("date") == frozenset({"today"})
        assert DirectoryFilters().selected("date") == frozenset()

    def test_active_filter_count(self):
        filters = DirectoryFilters(
            selections={"venue_types": {"Art Gallery", "Retail"}, "neighborhood": set()},
        )

        assert filters.active_filter_count == 2


# =============================================================================
# Timestamp Tests
# =============================================================================

class TestParseTimestamp:
    """Test PostgREST timestamp parsing."""

    def test_zulu_suffix(self):
        assert parse_timestamp("2024-01-15T10:30:00Z") == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_naive_uses_default_zone(self):
        chicago = ZoneInfo("America/Chicago")

        assert parse_timestamp("2024-01-15T10:30:00", chicago).tzinfo == chicago

    def test_date_only(self):
        assert parse_timestamp(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=ZoneInfo("UTC"))

    @pytest.mark.parametrize("value", [None, "", "not a date", 12345])
    def test_unparseable_returns_none(self, value):
        assert parse_timestamp(value) is None

    def test_trimmed_fractional_seconds(self):
        # PostgREST drops trailing zeros: .123450 arrives as .12345
        parsed = parse_timestamp("2024-06-13T01:00:00.12345+00:00")

        assert parsed == datetime(2024, 6, 13, 1, 0, 0, 123450, tzinfo=timezone.utc)

    def test_single_digit_fraction(self):
        assert parse_timestamp("2024-06-13T01:00:00.5Z") == datetime(2024, 6, 13, 1, 0, 0, 500000, tzinfo=timezone.utc)
