"""Anime catalog proxy — FastAPI service in front of the DeadAnime API."""

__version__ = "2.0.0"
