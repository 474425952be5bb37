"""Resilient Upstream Client — GET against the catalog API with bounded retry and error mapping.

Invariants:
    - At most max_retries + 1 attempts per call (default 3)
    - 5xx and network-level failures (timeout, reset, DNS, redirect loop): retried with
      exponential backoff base_delay_ms * 2**attempt (1000ms, then 2000ms)
    - 4xx: immediate failure, no retry
    - < 400: decoded JSON returned immediately; a non-JSON or undecodable body
      fails with UpstreamInvalidResponseError, no retry
    - Exhaustion re-raises the last failure
    - Per-attempt timeout, never per call
    - All failures mapped to UpstreamError subclasses (core/errors.py)

Design Decisions:
    - Wrapper over raw httpx: isolates retry logic from routes (single responsibility)
    - No jitter: one client per process against one upstream, backoff must be reproducible
    - Pools keyed by the TLS-verify decision, read from Settings on every call, so a
      live flip of the environment switches pools without closing in-flight ones
    - observer + sleep injected: the retry loop itself has no logging or clock IO
"""

import asyncio
from typing import Any, Awaitable, Callable

import httpx

from animeproxy.config import Settings
from animeproxy.core.domain_types import ProxyRequest
from animeproxy.core.errors import (
    UpstreamClientError,
    UpstreamError,
    UpstreamInvalidResponseError,
    UpstreamNetworkError,
    UpstreamServerError,
)
from animeproxy.infrastructure.observability import (
    LoggingRetryObserver,
    RetryObserver,
)

SleepFn = Callable[[float], Awaitable[Any]]


class ResilientUpstreamClient:
    """Wraps httpx.AsyncClient with retry logic, timeouts, and error mapping."""

    def __init__(
        self,
        settings: Settings,
        observer: RetryObserver | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFn = asyncio.sleep,
    ):
        self.settings = settings
        self.observer = observer or LoggingRetryObserver()
        self._transport = transport
        self._sleep = sleep
        self._clients: dict[bool, httpx.AsyncClient] = {}

    @property
    def max_attempts(self) -> int:
        return self.settings.upstream_max_retries + 1

    def build_url(self, request: ProxyRequest) -> str:
        """Upstream URL with the request's non-empty params, insertion order kept."""
        base = self.settings.upstream_base_url + request.endpoint.value
        items = request.query_items()
        if not items:
            return base
        return str(httpx.URL(base, params=items))

    async def fetch(self, request: ProxyRequest) -> Any:
        """GET the request upstream, retrying transient failures."""
        endpoint = request.endpoint.value
        url = self.build_url(request)
        last_error: UpstreamError | None = None

        for attempt in range(self.max_attempts):
            self.observer.attempt_started(
                endpoint, url, attempt, self.max_attempts,
            )
            try:
                status_code, body = await self._attempt(endpoint, url)
            except UpstreamError as e:
                last_error = e
                self.observer.attempt_failed(endpoint, attempt, e)
                if not e.retryable:
                    raise
                if attempt + 1 < self.max_attempts:
                    delay = self._backoff(attempt)
                    self.observer.retry_scheduled(endpoint, attempt, delay)
                    await self._sleep(delay / 1000)
                continue
            self.observer.attempt_succeeded(endpoint, attempt, status_code)
            return body

        raise last_error  # type: ignore[misc]

    async def aclose(self) -> None:
        """Close every pool (app shutdown)."""
        clients, self._clients = list(self._clients.values()), {}
        for client in clients:
            await client.aclose()

    async def _attempt(self, endpoint: str, url: str) -> tuple[int, Any]:
        """One GET. Returns (status, decoded body) or raises UpstreamError."""
        timeout = self.settings.upstream_timeout_seconds
        try:
            response = await asyncio.wait_for(
                self._client().get(url), timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamNetworkError(
                endpoint, f"timeout of {timeout:g}s exceeded", timeout=True,
            ) from e
        except httpx.DecodingError as e:
            raise UpstreamInvalidResponseError(endpoint, None, str(e)) from e
        except httpx.RequestError as e:
            # TransportError, TooManyRedirects and the rest of the request family
            raise UpstreamNetworkError(
                endpoint, str(e) or type(e).__name__,
            ) from e

        status_code = response.status_code
        if status_code >= 500:
            raise UpstreamServerError(endpoint, status_code, _body_or_text(response))
        if status_code >= 400:
            raise UpstreamClientError(endpoint, status_code, _body_or_text(response))
        try:
            return status_code, response.json()
        except ValueError as e:
            raise UpstreamInvalidResponseError(endpoint, status_code, str(e)) from e

    def _client(self) -> httpx.AsyncClient:
        """Pool for the current TLS decision, created on first use."""
        verify = self.settings.verify_tls
        client = self._clients.get(verify)
        if client is None or client.is_closed:
            client = httpx.AsyncClient(
                verify=verify,
                transport=self._transport,
                timeout=self.settings.upstream_timeout_seconds,
                follow_redirects=True,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.settings.upstream_user_agent,
                },
            )
            self._clients[verify] = client
        return client

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff in ms: base, 2x base, 4x base, ..."""
        return self.settings.upstream_base_delay_ms * (2 ** attempt)


def _body_or_text(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
