# =============================================================================
# tests/test_dashboard.py - Dashboard Aggregator Tests
# =============================================================================
# This module contains tests for:
# - Follow hydration (resolve -> hydrate -> drop unresolved)
# - Upcoming-from-followed merging
# - Announcement / advertisement status and click-through rate
# - DashboardService with mocked Supabase, including partial failures
# =============================================================================

from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from app.exceptions import AuthenticationRequiredError
from core.dashboard import (
    advertisement_status,
    announcement_status,
    click_through_rate,
    follow_entity_ids,
    hydrate,
    merge_upcoming,
    resolve_follow_targets,
)
from core.models.dashboard import DashboardSummary
from core.models.entities import Artist, Event
from core.models.promotions import (
    Advertisement,
    AdvertisementStatus,
    Announcement,
    AnnouncementStatus,
)
from core.services.dashboard_service import DashboardService
from lib.supabase_client import SupabaseClientError


# =============================================================================
# Follow Hydration Tests
# =============================================================================

class TestFollowHydration:
    """Test the resolve -> hydrate pipeline."""

    def test_orphaned_follows_are_dropped(self, artist_rows):
        follow_rows = [
            {"entity_id": "a1", "artist": artist_rows[0]},
            {"entity_id": "gone", "artist": None},
            {"entity_id": "a2", "artist": artist_rows[1]},
        ]

        targets = resolve_follow_targets(follow_rows, "artist")
        artists = hydrate(targets, Artist)

        assert targets[1] is None
        assert [a.id for a in artists] == ["a1", "a2"]

    def test_malformed_target_is_skipped(self):
        artists = hydrate([{"id": "a9"}], Artist)

        assert artists == []

    def test_follow_entity_ids_are_distinct(self):
        rows = [{"entity_id": "v1"}, {"entity_id": "v2"}, {"entity_id": "v1"}, {}]

        assert follow_entity_ids(rows) == ["v1", "v2"]


# =============================================================================
# Upcoming Tests
# =============================================================================

class TestMergeUpcoming:
    """Test the union of venue- and artist-reachable events."""

    def test_union_is_deduplicated_and_sorted(self, events, viewer):
        by_id = {e.id: e for e in events}
        venue_events = [by_id["e3"], by_id["e1"]]
        artist_events = [by_id["e1"], by_id["e2"]]

        merged = merge_upcoming(venue_events, artist_events, viewer)

        assert [e.id for e in merged] == ["e1", "e2", "e3"]

    def test_past_events_are_dropped(self, events, viewer):
        # e5 is a legacy row at local midnight today, already past at 15:00
        merged = merge_upcoming(events, [], viewer)

        assert "e5" not in [e.id for e in merged]

    def test_ties_break_by_title(self, make_event, viewer):
        start = "2024-06-20T19:00:00-05:00"
        b = Event.from_row(make_event("x1", "beta", start))
        a = Event.from_row(make_event("x2", "Alpha", start))

        assert [e.title for e in merge_upcoming([b], [a], viewer)] == ["Alpha", "beta"]

    def test_limit_applies_after_sort(self, events, viewer):
        merged = merge_upcoming(list(reversed(events)), [], viewer, limit=2)

        assert [e.id for e in merged] == ["e1", "e2"]


# =============================================================================
# Status Tests
# =============================================================================

class TestAnnouncementStatus:
    """Test derived announcement status."""

    def test_expiry_wins_over_active_flag(self, viewer):
        announcement = Announcement(
            id="n1", title="Old", active=True,
            expires_at=viewer.now - timedelta(hours=1),
        )

        assert announcement_status(announcement, viewer.now) == AnnouncementStatus.EXPIRED

    def test_active_flag(self, viewer):
        on = Announcement(id="n1", title="On", active=True, expires_at=viewer.now + timedelta(days=1))
        off = Announcement(id="n2", title="Off", active=False)

        assert announcement_status(on, viewer.now) == AnnouncementStatus.ACTIVE
        assert announcement_status(off, viewer.now) == AnnouncementStatus.INACTIVE


class TestAdvertisementStatus:
    """Test derived advertisement status."""

    def test_pending_active_expired(self, viewer):
        now = viewer.now
        pending = Advertisement(id="ad1", title="Soon", start_date=now + timedelta(days=1), end_date=now + timedelta(days=5))
        active = Advertisement(id="ad2", title="Now", start_date=now - timedelta(days=1), end_date=now + timedelta(days=1))
        expired = Advertisement(id="ad3", title="Done", start_date=now - timedelta(days=5), end_date=now - timedelta(days=1))

        assert advertisement_status(pending, viewer) == AdvertisementStatus.PENDING
        assert advertisement_status(active, viewer) == AdvertisementStatus.ACTIVE
        assert advertisement_status(expired, viewer) == AdvertisementStatus.EXPIRED

    def test_date_only_end_covers_the_whole_day(self, viewer):
        ad = Advertisement.model_validate(
            {"id": "ad4", "title": "Today only", "start_date": "2024-06-12", "end_date": "2024-06-12"}
        )

        assert ad.end_date == date(2024, 6, 12)
        assert advertisement_status(ad, viewer) == AdvertisementStatus.ACTIVE

    def test_click_through_rate(self):
        assert click_through_rate(0, 0) is None
        assert click_through_rate(5, -1) is None
        assert click_through_rate(5, 20) == 0.25


class TestDashboardSummary:
    """Test that counts are derived from the lists."""

    def test_counts_match_lists(self, events, artists):
        summary = DashboardSummary(followed_artists=artists[:2], going_events=events[:3])

        assert summary.counts.followed_artists == 2
        assert summary.counts.going == 3
        assert summary.counts.followed_venues == 0
        assert summary.model_dump()["counts"]["going"] == 3
        assert not summary.is_partial


# =============================================================================
# DashboardService Tests (mocked Supabase)
# =============================================================================

class TestDashboardService:
    """Test aggregation with mocked Supabase responses."""

    @pytest.fixture
    def mock_client(self, artist_rows, venue_rows, event_rows):
        by_id = {row["id"]: row for row in event_rows}

        with patch("core.services.dashboard_service.SupabaseClient") as mock:
            mock.fetch_follows.side_effect = lambda user_id, kind: (
                [
                    {"entity_id": "a1", "artist": artist_rows[0]},
                    {"entity_id": "a-deleted", "artist": None},
                ]
                if kind == "artist"
                else [{"entity_id": "v2", "venue": venue_rows[1]}]
            )
            mock.fetch_rsvp_events.side_effect = lambda user_id, status: (
                [by_id["e3"], by_id["e5"]] if status == "going" else [by_id["e2"]]
            )
            mock.fetch_announcements.return_value = [
                {"id": "n1", "title": "Summer lineup", "active": True, "priority": 2},
            ]
            mock.fetch_advertisements.return_value = [
                {
                    "id": "ad1", "title": "Banner", "views": 40, "clicks": 4,
                    "start_date": "2024-06-01", "end_date": "2024-06-30",
                },
            ]
            mock.fetch_events_at_venues.return_value = [by_id["e2"]]
            mock.fetch_events_featuring.return_value = [by_id["e1"], by_id["e2"]]
            yield mock

    def test_full_summary(self, mock_client, viewer):
        summary = asyncio.run(DashboardService.get_summary(viewer))

        assert [a.id for a in summary.followed_artists] == ["a1"]
        assert [v.id for v in summary.followed_venues] == ["v2"]
        assert [e.id for e in summary.going_events] == ["e3"]
        assert [e.id for e in summary.interested_events] == ["e2"]
        assert [e.id for e in summary.upcoming_from_followed] == ["e1", "e2"]
        assert summary.announcements[0].status == AnnouncementStatus.ACTIVE
        assert summary.advertisements[0].status == AdvertisementStatus.ACTIVE
        assert summary.advertisements[0].click_through_rate == 0.1
        assert summary.failed_sections == []
        assert summary.counts.upcoming_from_followed == 2

        # Follow rows feed the upcoming queries with their entity ids
        venue_call = mock_client.fetch_events_at_venues.call_args
        assert venue_call.args[0] == ["v2"]
        artist_call = mock_client.fetch_events_featuring.call_args
        assert artist_call.args[0] == ["a1", "a-deleted"]

    def test_failed_section_is_isolated(self, mock_client, viewer):
        mock_client.fetch_announcements.side_effect = SupabaseClientError(
            message="timeout", code="FETCH_ANNOUNCEMENTS_FAILED"
        )

        summary = asyncio.run(DashboardService.get_summary(viewer))

        assert summary.failed_sections == ["announcements"]
        assert summary.announcements == []
        assert summary.is_partial
        assert [a.id for a in summary.followed_artists] == ["a1"]
        assert [e.id for e in summary.going_events] == ["e3"]

    def test_failed_follows_also_fail_upcoming(self, mock_client, viewer):
        mock_client.fetch_follows.side_effect = SupabaseClientError(message="down")

        summary = asyncio.run(DashboardService.get_summary(viewer))

        assert set(summary.failed_sections) == {
            "followed_artists", "followed_venues", "upcoming_from_followed",
        }
        assert summary.upcoming_from_followed == []
        assert [e.id for e in summary.interested_events] == ["e2"]
        mock_client.fetch_events_at_venues.assert_not_called()

    def test_failed_upcoming_query(self, mock_client, viewer):
        mock_client.fetch_events_featuring.side_effect = SupabaseClientError(message="down")

        summary = asyncio.run(DashboardService.get_summary(viewer))

        assert summary.failed_sections == ["upcoming_from_followed"]
        assert summary.upcoming_from_followed == []

    def test_anonymous_viewer_rejected(self, mock_client, anonymous_viewer):
        with pytest.raises(AuthenticationRequiredError):
            asyncio.run(DashboardService.get_summary(anonymous_viewer))

        mock_client.fetch_follows.assert_not_called()
