"""Structured Logging — JSON formatter, setup, and the retry observer used by the upstream client.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (endpoint, attempt, status_code, delay_ms, ...) surfaced when present
    - JSON format in production, human-readable otherwise
    - The upstream client never calls logging directly — it reports to a RetryObserver

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan; idempotent so tests and
      reloads don't stack handlers
"""

import json
import logging
from datetime import datetime, timezone
from typing import Protocol

_EXTRA_FIELDS = (
    "endpoint", "url", "attempt", "max_attempts", "status_code", "delay_ms",
    "error_code", "category", "severity", "path", "method", "duration_ms",
)
_HANDLER_NAME = "animeproxy"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (field, getattr(record, field))
            for field in _EXTRA_FIELDS
            if getattr(record, field, None) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        # non-JSON extras fall back to str()
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


# ─── Retry observer ─────────────────────────────────────────────

class RetryObserver(Protocol):
    """Hooks the upstream client calls around each attempt."""
    def attempt_started(self, endpoint: str, url: str, attempt: int, max_attempts: int) -> None: ...
    def attempt_succeeded(self, endpoint: str, attempt: int, status_code: int) -> None: ...
    def attempt_failed(self, endpoint: str, attempt: int, error: Exception) -> None: ...
    def retry_scheduled(self, endpoint: str, attempt: int, delay_ms: int) -> None: ...


class LoggingRetryObserver:
    """Default RetryObserver — one log line per hook."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("animeproxy.upstream")

    def attempt_started(self, endpoint, url, attempt, max_attempts):
        self.logger.info(
            f"Proxying to {url} (attempt {attempt + 1}/{max_attempts})",
            extra={
                "endpoint": endpoint, "url": url,
                "attempt": attempt + 1, "max_attempts": max_attempts,
            },
        )

    def attempt_succeeded(self, endpoint, attempt, status_code):
        self.logger.info(
            f"Upstream success, status {status_code}",
            extra={
                "endpoint": endpoint, "attempt": attempt + 1,
                "status_code": status_code,
            },
        )

    def attempt_failed(self, endpoint, attempt, error):
        self.logger.error(
            f"Attempt {attempt + 1} failed: {error}",
            extra={
                "endpoint": endpoint, "attempt": attempt + 1,
                "status_code": getattr(error, "status_code", None),
                "error_code": getattr(error, "code", None),
            },
        )

    def retry_scheduled(self, endpoint, attempt, delay_ms):
        self.logger.warning(
            f"Waiting {delay_ms}ms before retry",
            extra={
                "endpoint": endpoint, "attempt": attempt + 1,
                "delay_ms": delay_ms,
            },
        )
