# =============================================================================
# core/feed.py - Feed Composer
# =============================================================================
# Merges the menu-post and review streams into one reverse-chronological feed.
#
# Rules:
# - newest first by created_at
# - equal timestamps keep source order (menu posts, then reviews, each in
#   the order fetched)
# - items without a timestamp sort last
# - the cap is applied after sorting, so the smaller source is not starved
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable

from lib.utils import parse_timestamp
from core.models.feed import (
    FeedItem,
    MenuPostItem,
    MenuPostSummary,
    ReviewItem,
    ReviewSummary,
)

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def menu_post_items(rows: Iterable[dict[str, Any]]) -> list[MenuPostItem]:
    items = []
    for row in rows:
        try:
            summary = MenuPostSummary.from_row(row)
            item_id = str(row["id"])
        except (KeyError, ValueError) as e:
            logger.warning(f"Skipping malformed menu post {row.get('id')}: {e}")
            continue
        items.append(
            MenuPostItem(
                id=item_id,
                created_at=parse_timestamp(row.get("created_at")),
                data=summary,
            )
        )
    return items


def review_items(rows: Iterable[dict[str, Any]]) -> list[ReviewItem]:
    items = []
    for row in rows:
        try:
            summary = ReviewSummary.from_row(row)
        except (KeyError, ValueError) as e:
            logger.warning(f"Skipping malformed review {row.get('id')}: {e}")
            continue
        items.append(
            ReviewItem(
                id=str(row["id"]),
                created_at=parse_timestamp(row.get("created_at")),
                data=summary,
            )
        )
    return items


def compose_feed(
    menu_posts: Iterable[MenuPostItem],
    reviews: Iterable[ReviewItem],
    limit: int = 20,
) -> list[FeedItem]:
    """
    Merge both sources into a single feed, newest first.

    Args:
        menu_posts: Menu post items, newest first as fetched
        reviews: Review items, newest first as fetched
        limit: Max items returned, applied after the merge sort

    Returns:
        Up to `limit` items ordered by created_at descending

    Example:
        # A = [t=10, t=8], B = [t=9]  ->  [t=10, t=9, t=8]
        compose_feed(a_items, b_items, limit=20)
    """
    merged: list[FeedItem] = [*menu_posts, *reviews]
    # sorted() is stable with reverse=True, so ties keep their merge order
    merged = sorted(merged, key=lambda item: item.created_at or _OLDEST, reverse=True)
    return merged[:limit]
