"""Root conftest — shared settings, scripted upstream, and FastAPI test client.

Invariants:
    - Tests never reach the real catalog API: every upstream call goes through
      httpx.MockTransport backed by UpstreamStub
    - Backoff sleeps are recorded, not slept
    - Settings built explicitly with _env_file=None (local .env never leaks in)
"""

import os

# Deployment env vars must not change test behavior
for _var in (
    "APP_ENV", "NODE_ENV", "ENVIRONMENT", "FRONTEND_URL", "UPSTREAM_VERIFY_TLS",
):
    os.environ.pop(_var, None)
os.environ.setdefault("UPSTREAM_BASE_URL", "https://upstream.test/api/v2")

import httpx  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from animeproxy.infrastructure.upstream_client import ResilientUpstreamClient  # noqa: E402
from animeproxy.main import create_app  # noqa: E402

from tests.upstream_stub import UpstreamStub, make_settings  # noqa: E402


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def upstream_stub():
    return UpstreamStub()


@pytest.fixture
def sleeps():
    """Backoff delays (seconds) requested by the upstream client."""
    return []


@pytest.fixture
def upstream_client(settings, upstream_stub, sleeps):
    async def fake_sleep(seconds):
        sleeps.append(seconds)

    return ResilientUpstreamClient(
        settings, transport=httpx.MockTransport(upstream_stub), sleep=fake_sleep,
    )


@pytest.fixture
async def client(settings, upstream_client):
    """FastAPI test client wired to the scripted upstream."""
    app = create_app(settings, upstream_client)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    await upstream_client.aclose()
