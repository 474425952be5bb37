"""Domain Types — the shapes that flow from inbound query to upstream call.

Invariants:
    - Endpoint is the closed set of upstream paths — no raw path strings in routes
    - SanitizedParams only ever holds recognized keys, in sanitizer order
    - ProxyRequest is frozen; its params are copied into a read-only mapping

Design Decisions:
    - TypedDict(total=False) for SanitizedParams: absent keys stay absent, and the
      value serializes straight into a query string
    - str Enum for Endpoint: doubles as the URL path segment
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, TypedDict


class Endpoint(str, Enum):
    """Upstream catalog paths."""
    LIST = "/list"
    ANIME = "/anime"
    EPISODE = "/episode"
    MOVIE = "/movie"
    PACK = "/pack"


class SanitizedParams(TypedDict, total=False):
    search: str
    slug: str
    season: int
    episode: int
    season_id: str
    start_ep: int
    end_ep: int
    limit: int
    page: int


@dataclass(frozen=True)
class ProxyRequest:
    """One upstream call: endpoint + sanitized query."""
    endpoint: Endpoint
    params: Mapping[str, str | int] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def query_items(self) -> list[tuple[str, str]]:
        """Non-empty params as (key, value) strings, in insertion order."""
        return [
            (key, str(value))
            for key, value in self.params.items()
            if value is not None and value != ""
        ]
