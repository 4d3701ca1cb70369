# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the LocalScene API:
# - test_models.py: Row parsing, viewer context and filter models
# - test_directory.py: Directory filter engine (search, facets, sorting)
# - test_dashboard.py: Dashboard aggregation and section isolation
# - test_feed.py: Feed composition across menu posts and reviews
# - test_social.py: Follows, RSVPs and reviews
# - test_promotions.py: Public advertisement and announcement banners
# - test_api.py: HTTP endpoints with Supabase mocked
#
# Run tests with: pytest
# =============================================================================
