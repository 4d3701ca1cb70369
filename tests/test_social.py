# =============================================================================
# tests/test_social.py - Follow, RSVP & Review Tests
# =============================================================================
# This module contains tests for:
# - Pure rules (next RSVP status, tallies, rating summary)
# - SocialService mutations with a stateful mocked Supabase
# - Rollback values on failed writes
# =============================================================================

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from app.exceptions import (
    AuthenticationRequiredError,
    DuplicateReviewError,
    InvalidEntityTypeError,
    UpstreamError,
)
from core.models.social import Review, ReviewCreate, RSVPStatus
from core.services.social_service import SocialService
from core.social import count_rsvps, next_rsvp_status, stored_rsvp_status, summarize_ratings
from lib.supabase_client import SupabaseClientError

VENUE_ID = "22222222-2222-2222-2222-222222222222"
EVENT_ID = "33333333-3333-3333-3333-333333333333"


# =============================================================================
# Rule Tests
# =============================================================================

class TestRules:
    """Test the pure decision helpers."""

    def test_next_rsvp_status(self):
        assert next_rsvp_status(None, RSVPStatus.GOING) == RSVPStatus.GOING
        assert next_rsvp_status(RSVPStatus.GOING, RSVPStatus.GOING) is None
        assert next_rsvp_status(RSVPStatus.GOING, RSVPStatus.INTERESTED) == RSVPStatus.INTERESTED

    def test_count_rsvps_ignores_not_going(self):
        rows = [{"status": "going"}, {"status": "going"}, {"status": "interested"}, {"status": "not_going"}]
        counts = count_rsvps(rows)

        assert counts.going == 2
        assert counts.interested == 1

    def test_stored_rsvp_status(self):
        assert stored_rsvp_status({"status": "interested"}) == RSVPStatus.INTERESTED
        assert stored_rsvp_status({"status": "maybe"}) is None
        assert stored_rsvp_status({"status": None}) is None
        assert stored_rsvp_status(None) is None

    def test_summarize_ratings(self):
        reviews = [
            Review(id=str(i), entity_type="venue", entity_id=VENUE_ID, rating=rating)
            for i, rating in enumerate([5, 4, 4, 1])
        ]
        summary = summarize_ratings(reviews)

        assert summary.count == 4
        assert summary.average == 3.5
        assert summary.histogram == {1: 1, 2: 0, 3: 0, 4: 2, 5: 1}

    def test_summarize_no_ratings(self):
        summary = summarize_ratings([])

        assert summary.count == 0
        assert summary.average is None

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_outside_range_rejected(self, rating):
        with pytest.raises(ValidationError):
            ReviewCreate(rating=rating)


# =============================================================================
# Follow Tests
# =============================================================================

class TestToggleFollow:
    """Test follow toggling against an in-memory follows table."""

    @pytest.fixture
    def mock_client(self):
        follows: set[tuple[str, str, str]] = set()

        with patch("core.services.social_service.SupabaseClient") as mock:
            mock.fetch_follow.side_effect = lambda user, kind, entity: (
                {"id": "f1"} if (user, kind, entity) in follows else None
            )
            mock.insert_follow.side_effect = lambda user, kind, entity: follows.add((user, kind, entity))
            mock.delete_follow.side_effect = lambda user, kind, entity: follows.discard((user, kind, entity))
            mock.follows = follows
            yield mock

    def test_toggle_twice_returns_to_not_following(self, mock_client, viewer):
        first = SocialService.toggle_follow(viewer, "venue", VENUE_ID)
        second = SocialService.toggle_follow(viewer, "venue", VENUE_ID)

        assert first.ok and first.previous_value is False and first.current_value is True
        assert second.ok and second.previous_value is True and second.current_value is False
        assert mock_client.follows == set()

    def test_failed_write_restores_previous(self, mock_client, viewer):
        mock_client.insert_follow.side_effect = SupabaseClientError(message="denied", code="INSERT_FOLLOW_FAILED")

        result = SocialService.toggle_follow(viewer, "venue", VENUE_ID)

        assert not result.ok
        assert result.previous_value is False
        assert result.current_value is False
        assert "INSERT_FOLLOW_FAILED" in result.error

    def test_events_cannot_be_followed(self, mock_client, viewer):
        with pytest.raises(InvalidEntityTypeError):
            SocialService.toggle_follow(viewer, "event", EVENT_ID)

    def test_anonymous_viewer_rejected(self, mock_client, anonymous_viewer):
        with pytest.raises(AuthenticationRequiredError):
            SocialService.toggle_follow(anonymous_viewer, "artist", VENUE_ID)


# =============================================================================
# RSVP Tests
# =============================================================================

class TestSetRSVP:
    """Test RSVP toggling and rollback."""

    @pytest.fixture
    def mock_client(self):
        with patch("core.services.social_service.SupabaseClient") as mock:
            mock.fetch_rsvp.return_value = None
            yield mock

    def test_first_rsvp_upserts(self, mock_client, viewer):
        result = SocialService.set_rsvp(viewer, EVENT_ID, RSVPStatus.GOING)

        assert result.ok
        assert result.previous_value is None
        assert result.current_value == "going"
        mock_client.upsert_rsvp.assert_called_once_with(viewer.user_id, EVENT_ID, "going")

    def test_same_status_removes(self, mock_client, viewer):
        mock_client.fetch_rsvp.return_value = {"status": "going"}

        result = SocialService.set_rsvp(viewer, EVENT_ID, RSVPStatus.GOING)

        assert result.current_value is None
        mock_client.delete_rsvp.assert_called_once_with(viewer.user_id, EVENT_ID)
        mock_client.upsert_rsvp.assert_not_called()

    def test_unknown_stored_status_reads_as_none(self, mock_client, viewer):
        mock_client.fetch_rsvp.return_value = {"event_id": EVENT_ID, "status": "maybe"}

        result = SocialService.set_rsvp(viewer, EVENT_ID, RSVPStatus.GOING)

        assert result.ok
        assert result.previous_value is None
        assert result.current_value == "going"
        mock_client.upsert_rsvp.assert_called_once_with(viewer.user_id, EVENT_ID, "going")

    def test_failed_write_restores_previous_status(self, mock_client, viewer):
        mock_client.fetch_rsvp.return_value = {"status": "interested"}
        mock_client.upsert_rsvp.side_effect = SupabaseClientError(message="down", code="UPSERT_RSVP_FAILED")

        result = SocialService.set_rsvp(viewer, EVENT_ID, RSVPStatus.GOING)

        assert not result.ok
        assert result.previous_value == "interested"
        assert result.current_value == "interested"

    def test_failed_read_reports_error(self, mock_client, viewer):
        mock_client.fetch_rsvp.side_effect = SupabaseClientError(message="down")

        result = SocialService.set_rsvp(viewer, EVENT_ID, RSVPStatus.GOING)

        assert not result.ok
        mock_client.upsert_rsvp.assert_not_called()

    def test_rsvp_counts(self, mock_client):
        mock_client.fetch_event_rsvps.return_value = [{"status": "going"}, {"status": "interested"}]

        counts = SocialService.get_rsvp_counts(EVENT_ID)

        assert (counts.going, counts.interested) == (1, 1)

    def test_rsvp_counts_upstream_error(self, mock_client):
        mock_client.fetch_event_rsvps.side_effect = SupabaseClientError(message="down")

        with pytest.raises(UpstreamError):
            SocialService.get_rsvp_counts(EVENT_ID)


# =============================================================================
# Review Tests
# =============================================================================

class TestReviews:
    """Test review submission and listing."""

    @pytest.fixture
    def mock_client(self):
        with patch("core.services.social_service.SupabaseClient") as mock:
            mock.fetch_user_review.return_value = None
            mock.insert_review.side_effect = lambda data: {
                "id": "r1", "created_at": "2024-06-12T20:00:00Z", **data,
            }
            yield mock

    def test_submit_review(self, mock_client, viewer):
        result = SocialService.submit_review(
            viewer, "venue", VENUE_ID, ReviewCreate(rating=4, title="Great room"),
        )

        assert result.ok
        assert result.current_value.rating == 4
        assert result.current_value.entity_id == VENUE_ID
        inserted = mock_client.insert_review.call_args.args[0]
        assert inserted["user_id"] == viewer.user_id
        assert inserted["entity_type"] == "venue"

    def test_duplicate_review_rejected(self, mock_client, viewer):
        mock_client.fetch_user_review.return_value = {"id": "r0"}

        with pytest.raises(DuplicateReviewError):
            SocialService.submit_review(viewer, "venue", VENUE_ID, ReviewCreate(rating=5))

        mock_client.insert_review.assert_not_called()

    def test_unique_violation_on_insert_is_a_duplicate(self, mock_client, viewer):
        mock_client.insert_review.side_effect = SupabaseClientError(
            message="Failed to insert review: duplicate key (23505)",
            code="INSERT_REVIEW_FAILED",
        )

        with pytest.raises(DuplicateReviewError):
            SocialService.submit_review(viewer, "venue", VENUE_ID, ReviewCreate(rating=5))

    def test_unknown_entity_type(self, mock_client, viewer):
        with pytest.raises(InvalidEntityTypeError):
            SocialService.submit_review(viewer, "dish", VENUE_ID, ReviewCreate())

    def test_list_reviews_with_summary(self, mock_client):
        mock_client.fetch_reviews.return_value = [
            {"id": "r1", "entity_type": "venue", "entity_id": VENUE_ID, "rating": 5,
             "profile": {"username": "ana", "full_name": "Ana"}},
            {"id": "r2", "entity_type": "venue", "entity_id": VENUE_ID, "rating": 2, "profile": None},
        ]

        listing = SocialService.list_reviews("venue", VENUE_ID)

        assert [r.id for r in listing.reviews] == ["r1", "r2"]
        assert listing.reviews[0].profile.display_name == "Ana"
        assert listing.summary.average == 3.5
