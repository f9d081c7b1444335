"""Root conftest — shared fixtures for all repolens tests.

Provides:
- anyio backend pinned to asyncio
- Provider cache isolation between tests
- API client with the provider service dependency overridden
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from repolens.services.providers import ProviderService, clear_provider_caches

TOKEN = "test-provider-token"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _clear_caches():
    """Clear provider TTL caches before each test to prevent cross-test pollution."""
    clear_provider_caches()
    yield
    clear_provider_caches()


# ─────────────────────────────────────────────────────────────────────────────
# API Clients
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_service() -> MagicMock:
    """ProviderService stand-in; every async method is an AsyncMock."""
    return MagicMock(spec=ProviderService)


@pytest.fixture
async def api_client(mock_service: MagicMock):
    """HTTP client whose provider service dependency returns ``mock_service``.

    Sends a Bearer token so requests pass the token check.
    """
    from repolens.api.deps import get_provider_service
    from repolens.main import app

    app.dependency_overrides[get_provider_service] = lambda: mock_service

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Authorization": f"Bearer {TOKEN}"},
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def raw_client():
    """HTTP client with no overrides and no credentials."""
    from repolens.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
