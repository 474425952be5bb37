"""Stats Route — approximate catalog counts.

Invariants:
    - Counts come from one /list call with limit=100, so they are approximate
"""

from fastapi import APIRouter, Depends

from animeproxy.api.dependencies import get_catalog_service
from animeproxy.services.catalog_service import CatalogService

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats")
async def catalog_stats(service: CatalogService = Depends(get_catalog_service)):
    """Movie/series counts over the first 100 list entries."""
    return await service.stats()
