"""Error Handlers — global exception handlers for the proxy API.

Invariants:
    - ProxyError → flat envelope {error, message, code, timestamp} at exc.http_status
    - Unmatched route (404) and wrong method (405) → 404 RouteNotFoundError envelope
    - Exception (catch-all) → 500; stack trace only in explicit development mode
    - Nothing escapes to the inbound caller unconverted

Design Decisions:
    - Three-layer handler: domain (ProxyError), routing (Starlette HTTPException),
      catch-all (Exception)
    - Registered explicitly from create_app (no import-time side effects)
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from animeproxy.config import Settings
from animeproxy.core.errors import ProxyError, RouteNotFoundError, utc_timestamp

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_proxy_error_handler(app)
    _register_http_exception_handler(app)
    _register_generic_error_handler(app, settings)


def _register_proxy_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        """Handle all proxy domain/upstream errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"{exc.title}: {exc.message}",
            extra={
                "error_code": exc.code,
                "category": exc.category.value,
                "severity": exc.severity.value,
                "status_code": exc.http_status,
                "path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_http_exception_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Unknown paths and methods → 404; other HTTP errors keep their status."""
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            err = RouteNotFoundError(request.method, request.url.path)
            return JSONResponse(
                status_code=err.http_status, content=err.to_response(),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "Request failed",
                "message": str(exc.detail),
                "timestamp": utc_timestamp(),
            },
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI, settings: Settings) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — stack trace exposed only in development."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        content = {
            "error": "Internal server error",
            "message": str(exc),
            "code": "INTERNAL_ERROR",
            "timestamp": utc_timestamp(),
        }
        if settings.is_development:
            content["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__),
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content,
        )
