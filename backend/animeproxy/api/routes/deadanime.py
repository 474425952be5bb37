"""DeadAnime Routes — thin passthrough endpoints for the upstream catalog.

Invariants:
    - Every route delegates to CatalogService (no logic here)
    - Query parameters are taken raw; sanitizing happens in the service
    - Upstream bodies returned unmodified with 200
"""

from fastapi import APIRouter, Depends

from animeproxy.api.dependencies import get_catalog_service, raw_query
from animeproxy.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/deadanime", tags=["deadanime"])


@router.get("/list")
async def list_anime(
    query: dict = Depends(raw_query),
    service: CatalogService = Depends(get_catalog_service),
):
    """Anime list, optional search/limit/page."""
    return await service.list_anime(query)


@router.get("/anime")
async def anime_info(
    query: dict = Depends(raw_query),
    service: CatalogService = Depends(get_catalog_service),
):
    """Anime details by slug."""
    return await service.anime_info(query)


@router.get("/episode")
async def episode(
    query: dict = Depends(raw_query),
    service: CatalogService = Depends(get_catalog_service),
):
    """Episode streaming links by slug, season, episode."""
    return await service.episode(query)


@router.get("/movie")
async def movie(
    query: dict = Depends(raw_query),
    service: CatalogService = Depends(get_catalog_service),
):
    """Movie streaming links by slug."""
    return await service.movie(query)


@router.get("/pack")
async def pack(
    query: dict = Depends(raw_query),
    service: CatalogService = Depends(get_catalog_service),
):
    """Episode pack by season_id, optional start_ep/end_ep."""
    return await service.pack(query)
