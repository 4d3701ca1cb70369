# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - events.py: Events directory, detail and RSVPs
# - artists.py: Artists directory and detail
# - venues.py: Venues directory and detail
# - social.py: Follows and reviews
# - dashboard.py: Personal dashboard and community feed
# - promotions.py: Public advertisement and announcement banners
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import events
from . import artists
from . import venues
from . import social
from . import dashboard
from . import promotions

__all__ = [
    "health",
    "events",
    "artists",
    "venues",
    "social",
    "dashboard",
    "promotions",
]
