# =============================================================================
# app/routers/events.py - Events Directory & Detail Endpoints
# =============================================================================
# Browsing is public. RSVPs require a signed-in user.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel, Field

from app.dependencies import SignedInViewerDep, ViewerDep
from app.responses import mutation_response
from core.directory import group_by_local_date
from core.models.detail import EventDetail
from core.models.directory import (
    DateBucket,
    DateGroup,
    DirectoryFilters,
    FilteredList,
    SortKey,
)
from core.models.entities import Event
from core.models.social import MutationResult, RSVPCounts, RSVPStatus
from core.services.directory_service import DirectoryService
from core.services.social_service import SocialService

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class EventsDirectory(FilteredList[Event]):
    """Events directory page, optionally grouped by local day."""
    groups: list[DateGroup[Event]] | None = Field(
        default=None,
        description="Items bucketed by the viewer's local date (grouped=true only)"
    )


class RSVPRequest(BaseModel):
    """Which RSVP button was tapped."""
    status: RSVPStatus = Field(..., examples=["going"])

    model_config = {
        "json_schema_extra": {
            "examples": [{"status": "going"}, {"status": "interested"}]
        }
    }


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=EventsDirectory)
def list_events(
    viewer: ViewerDep,
    search: Annotated[str, Query(description="Matches title, description, venue and artist names")] = "",
    event_types: Annotated[list[str], Query(description="Event types (any of)")] = [],
    date: Annotated[DateBucket, Query(description="Date range")] = DateBucket.ALL,
    sort: Annotated[SortKey | None, Query(description="start_asc (default), name_asc, name_desc")] = None,
    grouped: Annotated[bool, Query(description="Also group results by local date")] = False,
):
    """
    Events directory.

    Returns upcoming events matching the filters, with per-facet counts
    for the event type chips and the date range tabs.
    """
    filters = DirectoryFilters(
        search=search,
        selections={"event_types": set(event_types)} if event_types else {},
        date_bucket=date,
        sort=sort,
    )
    result = DirectoryService.list_events(viewer, filters)

    return EventsDirectory(
        items=result.items,
        facets=result.facets,
        filters=result.filters,
        groups=group_by_local_date(result.items, viewer) if grouped else None,
    )


@router.get("/{slug}", response_model=EventDetail)
def get_event(
    slug: Annotated[str, Path(description="Event slug")],
    viewer: ViewerDep,
):
    """
    Event detail.

    Unknown slugs return 404 with details.redirect_to = "/events".
    """
    return DirectoryService.get_event(slug, viewer)


@router.post("/{event_id}/rsvp", response_model=MutationResult)
def set_rsvp(
    event_id: Annotated[UUID, Path(description="Event UUID")],
    request: RSVPRequest,
    viewer: SignedInViewerDep,
):
    """
    Tap an RSVP button.

    Sending the status you already have removes your RSVP.
    A failed write responds 502 with current_value equal to previous_value.
    """
    return mutation_response(SocialService.set_rsvp(viewer, event_id, request.status))


@router.get("/{event_id}/rsvps", response_model=RSVPCounts)
def get_rsvp_counts(
    event_id: Annotated[UUID, Path(description="Event UUID")],
):
    """Going / interested counts for an event."""
    return SocialService.get_rsvp_counts(event_id)
