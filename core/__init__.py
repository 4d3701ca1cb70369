# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Pydantic schemas for rows, filters and responses
# - directory.py: Directory Filter Engine (search, facets, counts, sort)
# - dashboard.py: Dashboard derivations (follow hydration, statuses, CTR)
# - feed.py: Feed Composer (merge menu posts and reviews)
# - social.py: Follow / RSVP / rating rules
# - services/: Supabase-backed orchestration used by the API routers
#
# Everything outside services/ is pure and never touches the network.
# =============================================================================
