# =============================================================================
# core/services/social_service.py - Follows, RSVPs & Reviews
# =============================================================================
# Every write returns a MutationResult instead of raising on backend
# failure. The flow is always:
#   1. read the current state          -> previous_value
#   2. decide the next state (core/social.py)
#   3. write it                        -> current_value
# If step 1 or 3 fails, ok is False and current_value == previous_value.
#
# Caller mistakes (bad entity type, duplicate review) still raise, since
# there is nothing to roll back.
# =============================================================================

import logging
from uuid import UUID

from app.exceptions import (
    AuthenticationRequiredError,
    DuplicateReviewError,
    InvalidEntityTypeError,
    UpstreamError,
)
from core.models.entities import FOLLOWABLE_TYPES, EntityType, parse_rows
from core.models.social import (
    MutationResult,
    Review,
    ReviewCreate,
    ReviewList,
    RSVPCounts,
    RSVPStatus,
)
from core.models.viewer import ViewerContext
from core.social import (
    count_rsvps,
    next_follow_state,
    next_rsvp_status,
    parse_entity_type,
    stored_rsvp_status,
    summarize_ratings,
)
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


def _require_user(viewer: ViewerContext) -> str:
    if not viewer.is_authenticated:
        raise AuthenticationRequiredError()
    return viewer.user_id


def _entity_type(value: str, followable_only: bool = False) -> EntityType:
    entity_type = parse_entity_type(value, followable_only=followable_only)
    if entity_type is None:
        allowed = FOLLOWABLE_TYPES if followable_only else tuple(EntityType)
        raise InvalidEntityTypeError(value, [t.value for t in allowed])
    return entity_type


class SocialService:
    """
    Service for follow, RSVP and review operations.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Follows
    # -------------------------------------------------------------------------

    @staticmethod
    def toggle_follow(
        viewer: ViewerContext,
        entity_type: str,
        entity_id: str | UUID,
    ) -> MutationResult:
        """
        Follow the entity if not followed, unfollow otherwise.

        Args:
            viewer: Signed-in viewer
            entity_type: "artist" or "venue"
            entity_id: The entity UUID

        Returns:
            MutationResult whose values are the is-following flag

        Raises:
            AuthenticationRequiredError: If the viewer is anonymous
            InvalidEntityTypeError: If entity_type can't be followed
        """
        user_id = _require_user(viewer)
        kind = _entity_type(entity_type, followable_only=True)
        entity_id = normalize_uuid(entity_id)

        try:
            previous = SupabaseClient.fetch_follow(user_id, kind.value, entity_id) is not None
        except SupabaseClientError as e:
            logger.error(f"Failed to read follow state for {kind.value} {entity_id}: {e}")
            return MutationResult(ok=False, error=str(e))

        following = next_follow_state(previous)

        try:
            if following:
                SupabaseClient.insert_follow(user_id, kind.value, entity_id)
            else:
                SupabaseClient.delete_follow(user_id, kind.value, entity_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to toggle follow on {kind.value} {entity_id}: {e}")
            return MutationResult(
                ok=False,
                previous_value=previous,
                current_value=previous,
                error=str(e),
            )

        logger.info(f"User {user_id} {'followed' if following else 'unfollowed'} {kind.value} {entity_id}")
        return MutationResult(ok=True, previous_value=previous, current_value=following)

    # -------------------------------------------------------------------------
    # RSVPs
    # -------------------------------------------------------------------------

    @staticmethod
    def set_rsvp(
        viewer: ViewerContext,
        event_id: str | UUID,
        status: RSVPStatus,
    ) -> MutationResult:
        """
        Apply an RSVP button tap.

        Tapping the current status again removes the RSVP.

        Returns:
            MutationResult whose values are status strings (None = no RSVP)

        Raises:
            AuthenticationRequiredError: If the viewer is anonymous
        """
        user_id = _require_user(viewer)
        event_id = normalize_uuid(event_id)

        try:
            row = SupabaseClient.fetch_rsvp(user_id, event_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to read RSVP for event {event_id}: {e}")
            return MutationResult(ok=False, error=str(e))

        previous = stored_rsvp_status(row)
        target = next_rsvp_status(previous, status)
        previous_value = previous.value if previous else None

        try:
            if target is None:
                SupabaseClient.delete_rsvp(user_id, event_id)
            else:
                SupabaseClient.upsert_rsvp(user_id, event_id, target.value)
        except SupabaseClientError as e:
            logger.error(f"Failed to save RSVP for event {event_id}: {e}")
            return MutationResult(
                ok=False,
                previous_value=previous_value,
                current_value=previous_value,
                error=str(e),
            )

        current_value = target.value if target else None
        logger.info(f"User {user_id} RSVP on event {event_id}: {previous_value} -> {current_value}")
        return MutationResult(ok=True, previous_value=previous_value, current_value=current_value)

    @staticmethod
    def get_rsvp_counts(event_id: str | UUID) -> RSVPCounts:
        """
        Going / interested tallies for an event.

        Raises:
            UpstreamError: If the query fails
        """
        try:
            rows = SupabaseClient.fetch_event_rsvps(normalize_uuid(event_id))
        except SupabaseClientError as e:
            logger.error(f"Failed to count RSVPs for event {event_id}: {e}")
            raise UpstreamError("rsvps", e.message)
        return count_rsvps(rows)

    # -------------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------------

    @staticmethod
    def list_reviews(entity_type: str, entity_id: str | UUID) -> ReviewList:
        """
        Reviews of one entity with their rating summary.

        Raises:
            InvalidEntityTypeError: If entity_type is unknown
            UpstreamError: If the query fails
        """
        kind = _entity_type(entity_type)

        try:
            rows = SupabaseClient.fetch_reviews(kind.value, normalize_uuid(entity_id))
        except SupabaseClientError as e:
            logger.error(f"Failed to load reviews for {kind.value} {entity_id}: {e}")
            raise UpstreamError("reviews", e.message)

        reviews = parse_rows(rows, Review)
        return ReviewList(reviews=reviews, summary=summarize_ratings(reviews))

    @staticmethod
    def submit_review(
        viewer: ViewerContext,
        entity_type: str,
        entity_id: str | UUID,
        review: ReviewCreate,
    ) -> MutationResult:
        """
        Add the viewer's review of an entity.

        Returns:
            MutationResult with current_value set to the stored Review

        Raises:
            AuthenticationRequiredError: If the viewer is anonymous
            InvalidEntityTypeError: If entity_type is unknown
            DuplicateReviewError: If the viewer already reviewed the entity
        """
        user_id = _require_user(viewer)
        kind = _entity_type(entity_type)
        entity_id = normalize_uuid(entity_id)

        try:
            existing = SupabaseClient.fetch_user_review(user_id, kind.value, entity_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to check existing review on {kind.value} {entity_id}: {e}")
            return MutationResult(ok=False, error=str(e))

        if existing:
            raise DuplicateReviewError(kind.value, entity_id)

        data = {
            "user_id": user_id,
            "entity_type": kind.value,
            "entity_id": entity_id,
            **review.model_dump(),
        }

        try:
            row = SupabaseClient.insert_review(data)
        except SupabaseClientError as e:
            if UNIQUE_VIOLATION in e.message:
                raise DuplicateReviewError(kind.value, entity_id)
            logger.error(f"Failed to insert review on {kind.value} {entity_id}: {e}")
            return MutationResult(ok=False, error=str(e))

        logger.info(f"User {user_id} reviewed {kind.value} {entity_id} ({review.rating}/5)")
        return MutationResult(ok=True, previous_value=None, current_value=Review.from_row(row))
