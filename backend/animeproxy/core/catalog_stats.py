"""Catalog Stats — pure inspection of upstream list/episode/movie bodies.

Invariants:
    - Never raises on unexpected body shapes — unknown shapes yield an empty list
    - type == "movie" counts as a movie, every other value (or none) as a series
    - Counts are approximate: only the first page of the list is ever inspected

Design Decisions:
    - Pure functions, not part of the upstream client: the client stays a
      passthrough and never looks inside bodies
"""

from typing import Any

STATS_SAMPLE_SIZE = 100


def extract_entries(body: Any) -> list:
    """Find the list of catalog entries in an upstream /list body."""
    if isinstance(body, list):
        return body
    if not isinstance(body, dict):
        return []
    data = body.get("data")
    if isinstance(data, dict) and isinstance(data.get("results"), list):
        return data["results"]
    if isinstance(data, list):
        return data
    results = body.get("results")
    return results if isinstance(results, list) else []


def compute_catalog_stats(body: Any) -> dict:
    """Movie/series counts from a /list body. Pure, no IO."""
    entries = extract_entries(body)
    movies = sum(
        1 for e in entries if isinstance(e, dict) and e.get("type") == "movie"
    )
    return {
        "total_anime": len(entries),
        "total_fetched": len(entries),
        "total_movies": movies,
        "total_series": len(entries) - movies,
    }


def has_streaming_sources(body: Any, allow_video_url: bool = False) -> bool:
    """Whether an episode/movie body carries something playable."""
    if not isinstance(body, dict):
        return False
    payload = body.get("data") or body
    if not isinstance(payload, dict):
        return False
    sources = payload.get("sources")
    if isinstance(sources, list) and sources:
        return True
    if payload.get("url"):
        return True
    return bool(allow_video_url and payload.get("video_url"))
