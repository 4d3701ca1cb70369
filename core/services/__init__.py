# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .directory_service import DirectoryService
from .dashboard_service import DashboardService
from .feed_service import FeedService
from .promotion_service import PromotionService
from .social_service import SocialService

__all__ = [
    "DirectoryService",
    "DashboardService",
    "FeedService",
    "PromotionService",
    "SocialService",
]
