# =============================================================================
# core/directory.py - Directory Filter Engine
# =============================================================================
# Pure functions turning a fetched entity list plus filter selections into a
# filtered, sorted view with per-facet counts.
#
# Pipeline (re-run from scratch on every filter change):
#   1. search   - case-insensitive substring over a fixed set of fields
#   2. facets   - OR within a facet, AND across facets
#   3. sort     - stable, by the requested key
#   4. counts   - per facet, against every *other* active filter
#
# Usage:
#   from core.directory import filter_events
#   result = filter_events(events, DirectoryFilters(search="jazz"), viewer)
#   result.items, result.facets["event_types"].counts
# =============================================================================

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Generic, Iterable, Mapping, TypeVar

from core.models.directory import (
    ARTIST_TYPES,
    DATE_FACET,
    EVENT_TYPES,
    MUSICAL_GENRES,
    NEIGHBORHOODS,
    VENUE_TYPES,
    VISUAL_MEDIUMS,
    DateBucket,
    DateGroup,
    DirectoryFilters,
    FacetCount,
    FilteredList,
    SortKey,
)
from core.models.entities import Artist, Event, Venue
from core.models.viewer import ViewerContext

T = TypeVar("T")


# =============================================================================
# Facets
# =============================================================================

@dataclass(frozen=True)
class Facet(Generic[T]):
    """
    One filterable dimension.

    Attributes:
        name: Key used in DirectoryFilters.selections and in the counts
        matches: (item, label) -> whether the item carries that label
        options: Labels always listed, even at zero
        values: Optional item -> labels, used to discover labels missing
            from options
    """
    name: str
    matches: Callable[[T, str], bool]
    options: tuple[str, ...] = ()
    values: Callable[[T], Iterable[str]] | None = None

    def passes(self, item: T, selected: frozenset[str]) -> bool:
        if not selected:
            return True
        return any(self.matches(item, label) for label in selected)

    def labels(self, items: Iterable[T]) -> list[str]:
        labels = list(self.options)
        if self.values is None:
            return labels
        known = set(labels)
        extra = {value for item in items for value in self.values(item) if value and value not in known}
        return labels + sorted(extra, key=str.casefold)


def tag_facet(
    name: str,
    values: Callable[[T], Iterable[str]],
    options: tuple[str, ...] = (),
) -> Facet[T]:
    """Facet over a tag list. An item without tags never matches a label."""
    return Facet(
        name=name,
        matches=lambda item, label: label in (values(item) or ()),
        options=options,
        values=values,
    )


# =============================================================================
# Date Buckets
# =============================================================================

def add_months(day: date, months: int) -> date:
    """
    Same calendar day N months later, clamped to the target month's end.

    Example:
        add_months(date(2024, 1, 31), 1)  # date(2024, 2, 29)
    """
    index = day.month - 1 + months
    year = day.year + index // 12
    month = index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def bucket_window(
    bucket: DateBucket,
    viewer: ViewerContext,
) -> tuple[datetime, datetime] | None:
    """
    Half-open [start, end) window for a bucket, in the viewer's zone.

    Returns None for DateBucket.ALL (no date filtering).
    """
    if bucket == DateBucket.ALL:
        return None

    today = viewer.local_today()
    start = viewer.local_midnight(today)

    if bucket == DateBucket.TODAY:
        end_day = today + timedelta(days=1)
    elif bucket == DateBucket.WEEK:
        end_day = today + timedelta(days=7)
    else:
        end_day = add_months(today, 1)

    return start, viewer.local_midnight(end_day)


def in_bucket(event: Event, bucket: DateBucket, viewer: ViewerContext) -> bool:
    window = bucket_window(bucket, viewer)
    if window is None:
        return True
    starts_at = event.starts_at(viewer.tz)
    if starts_at is None:
        return False
    start, end = window
    return start <= starts_at < end


def date_facet(viewer: ViewerContext) -> Facet[Event]:
    """Facet whose labels are DateBucket values, evaluated at viewer.now."""
    return Facet(
        name=DATE_FACET,
        matches=lambda event, label: in_bucket(event, DateBucket(label), viewer),
        options=tuple(bucket.value for bucket in DateBucket),
    )


# =============================================================================
# Search
# =============================================================================

def matches_search(fields: Iterable[str | None], search: str) -> bool:
    """
    Case-insensitive substring match across text fields.

    A blank search matches everything; missing fields never match.
    """
    needle = search.strip().casefold()
    if not needle:
        return True
    return any(needle in field.casefold() for field in fields if field)


def event_search_fields(event: Event) -> list[str | None]:
    return [event.title, event.description, event.venue_name, *event.artist_names]


def artist_search_fields(artist: Artist) -> list[str | None]:
    return [artist.name, artist.bio, artist.genre]


def venue_search_fields(venue: Venue) -> list[str | None]:
    return [venue.name, venue.description, venue.address, venue.city]


# =============================================================================
# Sorting
# =============================================================================

def sort_items(
    items: list[T],
    sort: SortKey,
    name: Callable[[T], str],
    start: Callable[[T], float | None] | None = None,
    event_counts: Mapping[str, int] | None = None,
) -> list[T]:
    """
    Stable sort by the requested key.

    event_count_desc breaks ties by case-insensitive name; name_desc keeps
    the incoming order for equal names.
    """
    if sort == SortKey.NAME_ASC:
        return sorted(items, key=lambda item: name(item).casefold())

    if sort == SortKey.NAME_DESC:
        return sorted(items, key=lambda item: name(item).casefold(), reverse=True)

    if sort == SortKey.EVENT_COUNT_DESC:
        counts = event_counts or {}
        return sorted(
            items,
            key=lambda item: (-counts.get(item.id, 0), name(item).casefold()),
        )

    if sort == SortKey.START_ASC:
        if start is None:
            raise ValueError("start_asc needs a start accessor")

        def start_key(item: T) -> tuple[bool, float]:
            value = start(item)
            # Undated items go last
            return (value is None, value if value is not None else 0.0)

        return sorted(items, key=start_key)

    raise ValueError(f"Unsupported sort key: {sort}")


# =============================================================================
# Engine
# =============================================================================

@dataclass(frozen=True)
class DirectoryDefinition(Generic[T]):
    """How one entity type is searched, faceted and sorted."""
    search_fields: Callable[[T], Iterable[str | None]]
    facets: list[Facet[T]]
    name: Callable[[T], str]
    default_sort: SortKey
    allowed_sorts: tuple[SortKey, ...]
    start: Callable[[T], float | None] | None = None


def apply_directory(
    items: list[T],
    definition: DirectoryDefinition[T],
    filters: DirectoryFilters,
    event_counts: Mapping[str, int] | None = None,
) -> FilteredList[T]:
    """
    Filter, sort and count one directory.

    Pure: the same (items, filters) always yields the same result and the
    input list is never mutated.

    Args:
        items: Full entity list as fetched
        definition: Search fields, facets and sorts for the entity type
        filters: Active selections
        event_counts: Venue id -> upcoming event count (event_count_desc only)

    Returns:
        FilteredList with items and one FacetCount per facet

    Raises:
        ValueError: If filters.sort is not allowed for this directory
    """
    sort = filters.sort or definition.default_sort
    if sort not in definition.allowed_sorts:
        raise ValueError(f"Sort '{sort.value}' is not available here")

    selections = {facet.name: filters.selected(facet.name) for facet in definition.facets}
    searched = [item for item in items if matches_search(definition.search_fields(item), filters.search)]

    def passes_other_facets(item: T, skip: str | None) -> bool:
        return all(
            facet.passes(item, selections[facet.name])
            for facet in definition.facets
            if facet.name != skip
        )

    filtered = [item for item in searched if passes_other_facets(item, None)]

    facets: dict[str, FacetCount] = {}
    for facet in definition.facets:
        base = [item for item in searched if passes_other_facets(item, facet.name)]
        facets[facet.name] = FacetCount(
            facet=facet.name,
            counts={
                label: sum(1 for item in base if facet.matches(item, label))
                for label in facet.labels(items)
            },
            selected=sorted(selections[facet.name]),
        )

    ordered = sort_items(
        filtered,
        sort,
        name=definition.name,
        start=definition.start,
        event_counts=event_counts,
    )

    return FilteredList(items=ordered, facets=facets, filters=filters)


# =============================================================================
# Per-directory definitions
# =============================================================================

def events_directory(viewer: ViewerContext) -> DirectoryDefinition[Event]:
    def start(event: Event) -> float | None:
        starts_at = event.starts_at(viewer.tz)
        return starts_at.timestamp() if starts_at else None

    return DirectoryDefinition(
        search_fields=event_search_fields,
        facets=[
            tag_facet("event_types", lambda e: e.event_types, EVENT_TYPES),
            date_facet(viewer),
        ],
        name=lambda e: e.title,
        default_sort=SortKey.START_ASC,
        allowed_sorts=(SortKey.START_ASC, SortKey.NAME_ASC, SortKey.NAME_DESC),
        start=start,
    )


ARTISTS_DIRECTORY: DirectoryDefinition[Artist] = DirectoryDefinition(
    search_fields=artist_search_fields,
    facets=[
        tag_facet("artist_type", lambda a: a.type_tags, ARTIST_TYPES),
        tag_facet("musical_genres", lambda a: a.musical_genres, MUSICAL_GENRES),
        tag_facet("visual_mediums", lambda a: a.visual_mediums, VISUAL_MEDIUMS),
    ],
    name=lambda a: a.name,
    default_sort=SortKey.NAME_ASC,
    allowed_sorts=(SortKey.NAME_ASC, SortKey.NAME_DESC),
)


VENUES_DIRECTORY: DirectoryDefinition[Venue] = DirectoryDefinition(
    search_fields=venue_search_fields,
    facets=[
        tag_facet("venue_types", lambda v: v.venue_types, VENUE_TYPES),
        tag_facet("neighborhood", lambda v: v.neighborhood_tags, NEIGHBORHOODS),
    ],
    name=lambda v: v.name,
    default_sort=SortKey.NAME_ASC,
    allowed_sorts=(SortKey.NAME_ASC, SortKey.NAME_DESC, SortKey.EVENT_COUNT_DESC),
)


def filter_events(
    events: list[Event],
    filters: DirectoryFilters,
    viewer: ViewerContext,
) -> FilteredList[Event]:
    """
    Events directory view.

    The date bucket is applied as the "date" facet so its counts
    (all/today/week/month) honour search and type selections.
    """
    return apply_directory(events, events_directory(viewer), filters)


def filter_artists(artists: list[Artist], filters: DirectoryFilters) -> FilteredList[Artist]:
    return apply_directory(artists, ARTISTS_DIRECTORY, filters)


def filter_venues(
    venues: list[Venue],
    filters: DirectoryFilters,
    event_counts: Mapping[str, int] | None = None,
) -> FilteredList[Venue]:
    return apply_directory(venues, VENUES_DIRECTORY, filters, event_counts=event_counts)


def count_events_by_venue(events: Iterable[Event]) -> dict[str, int]:
    """Venue id -> number of events, for the "most events" sort."""
    counts: dict[str, int] = {}
    for event in events:
        if event.venue_id:
            counts[event.venue_id] = counts.get(event.venue_id, 0) + 1
    return counts


def group_by_local_date(
    events: list[Event],
    viewer: ViewerContext,
) -> list[DateGroup[Event]]:
    """
    Bucket events by the viewer's local calendar day.

    Groups come out in date order and each group is sorted by start time.
    Events without any date are left out.
    """
    grouped: dict[date, list[tuple[datetime, Event]]] = {}
    for event in events:
        starts_at = event.starts_at(viewer.tz)
        if starts_at is None:
            continue
        day = starts_at.astimezone(viewer.tz).date()
        grouped.setdefault(day, []).append((starts_at, event))

    return [
        DateGroup[Event](
            day=day,
            items=[event for _, event in sorted(grouped[day], key=lambda pair: pair[0])],
        )
        for day in sorted(grouped)
    ]
