# =============================================================================
# core/services/feed_service.py - Community Feed
# =============================================================================
# Fetches the two feed sources side by side and merges them with
# core.feed.compose_feed. A failing source is logged and left empty.
# =============================================================================

import asyncio
import logging

from app.config import settings
from core.feed import compose_feed, menu_post_items, review_items
from core.models.feed import Feed
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class FeedService:
    """Service for the community feed."""

    @staticmethod
    async def get_feed(
        page_size: int | None = None,
        max_items: int | None = None,
    ) -> Feed:
        """
        Latest menu posts and reviews, newest first.

        Args:
            page_size: Rows fetched per source (default FEED_PAGE_SIZE)
            max_items: Items kept after merging (default FEED_MAX_ITEMS)

        Returns:
            Feed with items and the names of any sources that failed
        """
        page_size = page_size or settings.FEED_PAGE_SIZE
        max_items = max_items or settings.FEED_MAX_ITEMS

        menu_rows, review_rows = await asyncio.gather(
            asyncio.to_thread(SupabaseClient.fetch_menu_posts, page_size),
            asyncio.to_thread(SupabaseClient.fetch_reviews, None, None, page_size),
            return_exceptions=True,
        )

        failed: list[str] = []
        if isinstance(menu_rows, Exception):
            logger.error(f"Feed source 'menu_posts' failed: {menu_rows}")
            failed.append("menu_posts")
            menu_rows = []
        if isinstance(review_rows, Exception):
            logger.error(f"Feed source 'reviews' failed: {review_rows}")
            failed.append("reviews")
            review_rows = []

        items = compose_feed(menu_post_items(menu_rows), review_items(review_rows), limit=max_items)
        logger.debug(f"Feed composed: {len(items)} items from {len(menu_rows)} posts, {len(review_rows)} reviews")
        return Feed(items=items, failed_sources=failed)
