"""Route dependencies — resolve per-app singletons from app.state."""

from fastapi import Request

from animeproxy.config import Settings
from animeproxy.services.catalog_service import CatalogService


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def raw_query(request: Request) -> dict[str, list[str]]:
    """Query string as key → all values (repeated keys kept)."""
    params = request.query_params
    return {key: params.getlist(key) for key in params.keys()}
