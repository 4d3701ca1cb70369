# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the LocalScene API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import LocalSceneException, localscene_exception_handler
from app.routers import artists, dashboard, events, health, promotions, social, venues

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup logs the effective configuration; the Supabase client is
    created lazily on first use.
    """
    logger.info(f"Starting LocalScene API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Default viewer time zone: {settings.DEFAULT_TIMEZONE}")

    yield

    logger.info("Shutting down LocalScene API")


# Create FastAPI application
app = FastAPI(
    title="LocalScene API",
    description="""
## Community Directory API

Browse a city's events, artists and venues, follow what you like, and keep
track of where you're going.

### Directories

Every directory takes a free-text `search`, repeatable facet parameters
(OR within a facet, AND across facets) and a `sort`. Responses include
per-facet counts computed against every *other* active filter, so each
chip shows how many results selecting it would give.

| Directory | Facets | Sorts |
|-----------|--------|-------|
| **Events** | `event_types`, `date` (all/today/week/month) | start_asc, name_asc, name_desc |
| **Artists** | `artist_type`, `musical_genres`, `visual_mediums` | name_asc, name_desc |
| **Venues** | `venue_types`, `neighborhood` | name_asc, name_desc, event_count_desc |

Date ranges are evaluated in the viewer's time zone: send `X-Timezone`
(or `?tz=`) with an IANA zone name.

### Quick Start

```bash
# This week's live music
curl "http://localhost:8000/api/v1/events?date=week&event_types=Live%20Music" \\
  -H "X-Timezone: America/Chicago"

# Follow a venue
curl -X POST http://localhost:8000/api/v1/follows/venue/{venue_id} \\
  -H "Authorization: Bearer $TOKEN"

# Your dashboard
curl http://localhost:8000/api/v1/dashboard -H "Authorization: Bearer $TOKEN"
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Events",
            "description": "Events directory, event detail and RSVPs",
        },
        {
            "name": "Artists",
            "description": "Artists directory and artist detail",
        },
        {
            "name": "Venues",
            "description": "Venues directory and venue detail",
        },
        {
            "name": "Follows",
            "description": "Follow and unfollow artists and venues",
        },
        {
            "name": "Reviews",
            "description": "Read and write star reviews",
        },
        {
            "name": "Dashboard",
            "description": "Personal dashboard and community feed",
        },
        {
            "name": "Promotions",
            "description": "Public advertisement and announcement banners",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(LocalSceneException)
async def handle_localscene_exception(request: Request, exc: LocalSceneException):
    """Handle custom LocalScene exceptions."""
    return await localscene_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Directory endpoints
app.include_router(
    events.router,
    prefix="/api/v1/events",
    tags=["Events"]
)

app.include_router(
    artists.router,
    prefix="/api/v1/artists",
    tags=["Artists"]
)

app.include_router(
    venues.router,
    prefix="/api/v1/venues",
    tags=["Venues"]
)

# Social endpoints
app.include_router(
    social.follows_router,
    prefix="/api/v1/follows",
    tags=["Follows"]
)

app.include_router(
    social.reviews_router,
    prefix="/api/v1/reviews",
    tags=["Reviews"]
)

# Dashboard & feed endpoints
app.include_router(
    dashboard.router,
    prefix="/api/v1",
    tags=["Dashboard"]
)

# Public banner endpoints
app.include_router(
    promotions.router,
    prefix="/api/v1",
    tags=["Promotions"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "LocalScene API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )
