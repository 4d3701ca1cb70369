# =============================================================================
# app/routers/social.py - Follow & Review Endpoints
# =============================================================================
# Mounted twice in main.py: once under /follows, once under /reviews.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from app.dependencies import SignedInViewerDep
from app.responses import mutation_response
from core.models.social import MutationResult, ReviewCreate, ReviewList
from core.services.social_service import SocialService

follows_router = APIRouter()
reviews_router = APIRouter()


@follows_router.post("/{entity_type}/{entity_id}", response_model=MutationResult)
def toggle_follow(
    entity_type: Annotated[str, Path(description="artist or venue")],
    entity_id: Annotated[UUID, Path(description="Entity UUID")],
    viewer: SignedInViewerDep,
):
    """
    Follow or unfollow an artist or venue.

    current_value is true when the viewer now follows the entity.
    """
    return mutation_response(SocialService.toggle_follow(viewer, entity_type, entity_id))


@reviews_router.get("/{entity_type}/{entity_id}", response_model=ReviewList)
def list_reviews(
    entity_type: Annotated[str, Path(description="event, artist or venue")],
    entity_id: Annotated[UUID, Path(description="Entity UUID")],
):
    """Reviews of an entity, newest first, with count, average and histogram."""
    return SocialService.list_reviews(entity_type, entity_id)


@reviews_router.post("/{entity_type}/{entity_id}", response_model=MutationResult, status_code=201)
def submit_review(
    entity_type: Annotated[str, Path(description="event, artist or venue")],
    entity_id: Annotated[UUID, Path(description="Entity UUID")],
    review: ReviewCreate,
    viewer: SignedInViewerDep,
):
    """
    Review an entity.

    One review per user per entity; a second one returns 409.
    Ratings outside 1..5 are rejected with 422.
    """
    return mutation_response(SocialService.submit_review(viewer, entity_type, entity_id, review))
