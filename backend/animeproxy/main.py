"""Anime Proxy API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ProxyError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One ResilientUpstreamClient per app, closed on shutdown via lifespan

Design Decisions:
    - create_app factory: tests inject Settings and an upstream client with a
      mock transport; the module-level `app` serves `uvicorn animeproxy.main:app`
    - Upstream client built in the factory, not in lifespan: ASGI test transports
      don't run lifespan, and routes need the client either way
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from animeproxy import __version__
from animeproxy.api.error_handlers import register_error_handlers
from animeproxy.api.routes import deadanime, health, stats
from animeproxy.config import Settings, get_settings
from animeproxy.infrastructure.observability import setup_logging
from animeproxy.infrastructure.upstream_client import ResilientUpstreamClient
from animeproxy.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    if not settings.verify_tls:
        logger.warning("Upstream TLS verification disabled (development only)")
    if settings.is_production and not settings.frontend_url:
        logger.warning("FRONTEND_URL unset in production: CORS allows no origins")
    logger.info(
        f"Anime API server v{__version__} online on port {settings.port} "
        f"[{settings.environment_name}] → {settings.upstream_base_url}",
    )
    yield
    await app.state.upstream.aclose()
    logger.info("Anime API server shutting down")


def create_app(
    settings: Settings | None = None,
    upstream: ResilientUpstreamClient | None = None,
) -> FastAPI:
    """Build the FastAPI app with its upstream client and handlers."""
    settings = settings or get_settings()
    upstream = upstream or ResilientUpstreamClient(settings)

    app = FastAPI(
        title="Anime API Server", version=__version__, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.upstream = upstream
    app.state.catalog_service = CatalogService(upstream)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return response

    # Routes, registered explicitly
    app.include_router(health.router)
    app.include_router(deadanime.router)
    app.include_router(stats.router)

    register_error_handlers(app, settings)
    return app


app = create_app()
