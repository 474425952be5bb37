"""Health & Metadata — liveness probe and service description.

Invariants:
    - GET /api/health always returns 200 if the process is up (no upstream call)
    - GET / lists every public endpoint
"""

from fastapi import APIRouter, Depends, status

from animeproxy import __version__
from animeproxy.api.dependencies import get_app_settings
from animeproxy.config import Settings
from animeproxy.core.errors import utc_timestamp

router = APIRouter(tags=["health"])


@router.get("/api/health", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_app_settings)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "ok",
        "message": "API server is running",
        "environment": settings.environment_name,
        "timestamp": utc_timestamp(),
    }


@router.get("/")
async def service_metadata():
    return {
        "message": "Anime API Server",
        "status": "running",
        "version": __version__,
        "endpoints": {
            "health": "/api/health",
            "stats": "/api/stats",
            "deadanime": {
                "list": "/api/deadanime/list",
                "anime": "/api/deadanime/anime",
                "episode": "/api/deadanime/episode",
                "movie": "/api/deadanime/movie",
                "pack": "/api/deadanime/pack",
            },
        },
    }
