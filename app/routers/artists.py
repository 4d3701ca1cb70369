# =============================================================================
# app/routers/artists.py - Artists Directory & Detail Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.dependencies import ViewerDep
from core.models.detail import ArtistDetail
from core.models.directory import DirectoryFilters, FilteredList, SortKey
from core.models.entities import Artist
from core.services.directory_service import DirectoryService

router = APIRouter()


@router.get("", response_model=FilteredList[Artist])
def list_artists(
    search: Annotated[str, Query(description="Matches name, bio and genre")] = "",
    artist_type: Annotated[list[str], Query(description="Musician, Visual, Performance, Literary (any of)")] = [],
    musical_genres: Annotated[list[str], Query(description="Genres (any of)")] = [],
    visual_mediums: Annotated[list[str], Query(description="Mediums (any of)")] = [],
    sort: Annotated[SortKey | None, Query(description="name_asc (default) or name_desc")] = None,
):
    """
    Artists directory.

    Returns artists matching the filters with per-facet counts.
    """
    selections = {
        facet: set(labels)
        for facet, labels in (
            ("artist_type", artist_type),
            ("musical_genres", musical_genres),
            ("visual_mediums", visual_mediums),
        )
        if labels
    }
    filters = DirectoryFilters(search=search, selections=selections, sort=sort)
    return DirectoryService.list_artists(filters)


@router.get("/{slug}", response_model=ArtistDetail)
def get_artist(
    slug: Annotated[str, Path(description="Artist slug")],
    viewer: ViewerDep,
):
    """
    Artist detail with upcoming events.

    Unknown slugs return 404 with details.redirect_to = "/artists".
    """
    return DirectoryService.get_artist(slug, viewer)
