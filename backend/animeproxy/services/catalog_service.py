"""Catalog Service — sanitize → fetch → diagnose, one method per catalog route.

Invariants:
    - Required-parameter checks happen before any upstream call
    - Upstream bodies are returned unmodified
    - Every UpstreamError leaving this module carries the route's failure title
    - Source diagnostics only log; they never change body or status

Design Decisions:
    - Service takes the raw query mapping so routes stay one-liners
    - Titles applied here rather than in error handlers: the handler only sees
      the exception, not which route raised it
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from animeproxy.core.catalog_stats import (
    STATS_SAMPLE_SIZE,
    compute_catalog_stats,
    has_streaming_sources,
)
from animeproxy.core.domain_types import Endpoint, ProxyRequest
from animeproxy.core.errors import MissingParameterError, UpstreamError, utc_timestamp
from animeproxy.core.sanitize import sanitize_params
from animeproxy.infrastructure.upstream_client import ResilientUpstreamClient

logger = logging.getLogger(__name__)


def require_param(raw: Mapping[str, Any], name: str) -> None:
    """Raise MissingParameterError if `name` is absent or blank."""
    value = raw.get(name)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None or not str(value).strip():
        raise MissingParameterError(name)


@contextmanager
def failure_title(title: str) -> Iterator[None]:
    """Re-title upstream failures raised inside the block."""
    try:
        yield
    except UpstreamError as e:
        e.title = title
        raise


class CatalogService:
    """Route-facing operations over the upstream catalog API."""

    def __init__(self, upstream: ResilientUpstreamClient):
        self.upstream = upstream

    async def list_anime(self, raw: Mapping[str, Any]) -> Any:
        params = sanitize_params(raw)
        logger.info(f"Fetching anime list with params {dict(params)}")
        with failure_title("Failed to fetch anime list"):
            return await self.upstream.fetch(ProxyRequest(Endpoint.LIST, params))

    async def anime_info(self, raw: Mapping[str, Any]) -> Any:
        require_param(raw, "slug")
        params = sanitize_params(raw)
        logger.info(f"Fetching anime info for {params.get('slug')}")
        with failure_title("Failed to fetch anime information"):
            return await self.upstream.fetch(ProxyRequest(Endpoint.ANIME, params))

    async def episode(self, raw: Mapping[str, Any]) -> Any:
        require_param(raw, "slug")
        params = sanitize_params(raw)
        logger.info(
            f"Fetching episode {params.get('slug')} "
            f"S{params.get('season')}E{params.get('episode')}",
        )
        with failure_title("Failed to fetch episode links"):
            body = await self.upstream.fetch(ProxyRequest(Endpoint.EPISODE, params))
        if not has_streaming_sources(body):
            logger.warning("No streaming sources found for episode")
        return body

    async def movie(self, raw: Mapping[str, Any]) -> Any:
        require_param(raw, "slug")
        params = sanitize_params(raw)
        logger.info(f"Fetching movie {params.get('slug')}")
        with failure_title("Failed to fetch movie links"):
            body = await self.upstream.fetch(ProxyRequest(Endpoint.MOVIE, params))
        if not has_streaming_sources(body, allow_video_url=True):
            logger.warning("No streaming sources found for movie")
        return body

    async def pack(self, raw: Mapping[str, Any]) -> Any:
        require_param(raw, "season_id")
        params = sanitize_params(raw)
        logger.info(f"Fetching episode pack for season {params.get('season_id')}")
        with failure_title("Failed to fetch episode pack"):
            return await self.upstream.fetch(ProxyRequest(Endpoint.PACK, params))

    async def stats(self) -> dict:
        """Approximate movie/series counts from the first list page."""
        logger.info("Fetching API statistics")
        request = ProxyRequest(Endpoint.LIST, {"limit": STATS_SAMPLE_SIZE})
        with failure_title("Failed to fetch statistics"):
            body = await self.upstream.fetch(request)
        return {**compute_catalog_stats(body), "timestamp": utc_timestamp()}
