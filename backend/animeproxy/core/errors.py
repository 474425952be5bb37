"""Error Hierarchy — typed, categorized exceptions for every proxy failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - http_status is what the inbound caller sees: upstream's status when the
      failure carries one, 500 otherwise
    - to_response() produces the flat REST envelope {error, message, timestamp, code}
    - `retryable` is the only signal the upstream client uses to decide on a retry

Design Decisions:
    - Single hierarchy with ProxyError base: FastAPI global handler catches all
    - `title` is the human-facing `error` field; routes re-title upstream failures
      ("Failed to fetch anime list") without changing the underlying type
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp used in every response envelope."""
    return datetime.now(timezone.utc).isoformat()


class ProxyError(Exception):
    """Base exception for all proxy errors."""

    retryable = False

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        title: str = "Internal server error",
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.title = title
        self.timestamp = utc_timestamp()

    def to_response(self) -> dict[str, Any]:
        """Convert to the standard REST error envelope."""
        return {
            "error": self.title,
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp,
        }


# ─── Inbound Errors (400-level) ─────────────────────────────────

class MissingParameterError(ProxyError):
    """A required query parameter was absent or blank."""
    def __init__(self, parameter: str):
        super().__init__(
            f"Query parameter '{parameter}' is required",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
            title=f"Missing required parameter: {parameter}",
        )
        self.parameter = parameter


class RouteNotFoundError(ProxyError):
    """No route matches the inbound method + path."""
    def __init__(self, method: str, path: str):
        super().__init__(
            f"Cannot {method} {path}",
            "ROUTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, 404,
            title="Endpoint not found",
        )
        self.method = method
        self.path = path

    def to_response(self) -> dict[str, Any]:
        body = super().to_response()
        body["path"] = self.path
        body["method"] = self.method
        return body


# ─── Upstream Errors ────────────────────────────────────────────

class UpstreamError(ProxyError):
    """Base for failures talking to the catalog API."""

    def __init__(
        self,
        message: str,
        code: str,
        endpoint: str,
        status_code: int | None = None,
        body: Any = None,
        category: ErrorCategory = ErrorCategory.EXTERNAL_API,
        http_status: int | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.ERROR,
            http_status or status_code or 500,
            title="Upstream request failed",
        )
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body


class UpstreamClientError(UpstreamError):
    """Upstream answered 4xx — surfaced as-is, never retried."""
    def __init__(self, endpoint: str, status_code: int, body: Any = None):
        super().__init__(
            f"API returned status {status_code}",
            "UPSTREAM_CLIENT_ERROR", endpoint, status_code, body,
        )


class UpstreamServerError(UpstreamError):
    """Upstream answered 5xx — retryable."""
    retryable = True

    def __init__(self, endpoint: str, status_code: int, body: Any = None):
        super().__init__(
            f"API returned status {status_code}",
            "UPSTREAM_SERVER_ERROR", endpoint, status_code, body,
        )


class UpstreamNetworkError(UpstreamError):
    """Timeout, connection reset, DNS failure — retryable, no status."""
    retryable = True

    def __init__(self, endpoint: str, reason: str, timeout: bool = False):
        super().__init__(
            reason,
            "UPSTREAM_TIMEOUT" if timeout else "UPSTREAM_UNREACHABLE",
            endpoint,
            category=ErrorCategory.TIMEOUT if timeout else ErrorCategory.EXTERNAL_API,
        )


class UpstreamInvalidResponseError(UpstreamError):
    """Upstream answered < 400 with a body that is not JSON, or could not be decoded."""
    def __init__(self, endpoint: str, status_code: int | None, reason: str):
        super().__init__(
            f"Upstream returned a non-JSON body: {reason}",
            "UPSTREAM_INVALID_RESPONSE", endpoint, status_code,
            http_status=502,
        )
