"""
Shared HTTP client for provider API operations.

Provides a singleton AsyncClient with connection pooling for all GitHub and
GitLab API calls, so repeated requests reuse connections.
"""

import logging

import httpx

from repolens.config import settings

logger = logging.getLogger(__name__)

# Module-level singleton client
_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for provider API calls.

    Auth headers are passed per-request, not stored on the client, so one
    client serves every provider and token.

    Returns:
        Shared httpx.AsyncClient
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                settings.http_timeout_seconds,
                connect=settings.http_connect_timeout_seconds,
            ),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            http2=True,
        )
        logger.debug("Created new provider HTTP client with connection pooling")
    return _client


async def close_http_client() -> None:
    """
    Close the shared HTTP client.

    Call on app shutdown for graceful termination.
    """
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed provider HTTP client")
