# =============================================================================
# app/routers/venues.py - Venues Directory & Detail Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.dependencies import ViewerDep
from core.models.detail import VenueDetail
from core.models.directory import DirectoryFilters, FilteredList, SortKey
from core.models.entities import Venue
from core.services.directory_service import DirectoryService

router = APIRouter()


@router.get("", response_model=FilteredList[Venue])
def list_venues(
    viewer: ViewerDep,
    search: Annotated[str, Query(description="Matches name, description, address and city")] = "",
    venue_types: Annotated[list[str], Query(description="Venue types (any of)")] = [],
    neighborhood: Annotated[list[str], Query(description="Neighborhoods (any of)")] = [],
    sort: Annotated[
        SortKey | None,
        Query(description="name_asc (default), name_desc or event_count_desc"),
    ] = None,
):
    """
    Venues directory.

    sort=event_count_desc orders by number of upcoming events, busiest first.
    """
    selections = {
        facet: set(labels)
        for facet, labels in (("venue_types", venue_types), ("neighborhood", neighborhood))
        if labels
    }
    filters = DirectoryFilters(search=search, selections=selections, sort=sort)
    return DirectoryService.list_venues(viewer, filters)


@router.get("/{slug}", response_model=VenueDetail)
def get_venue(
    slug: Annotated[str, Path(description="Venue slug")],
    viewer: ViewerDep,
):
    """
    Venue detail with upcoming events.

    Unknown slugs return 404 with details.redirect_to = "/venues".
    """
    return DirectoryService.get_venue(slug, viewer)
