"""
Provider API helper utilities.

Rate limit parsing and error response processing shared by the GitHub and
GitLab read paths.
"""

import logging

import httpx

from repolens.services.providers.constants import RATE_LIMIT_HEADERS
from repolens.services.providers.exceptions import ProviderAPIError
from repolens.services.providers.types import ProviderKind

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from a provider API response."""

    def __init__(self, response: httpx.Response, provider: ProviderKind) -> None:
        remaining_header, reset_header = RATE_LIMIT_HEADERS[provider]
        self.remaining = response.headers.get(remaining_header)
        self.reset = response.headers.get(reset_header)

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def handle_error_response(
    response: httpx.Response,
    provider: ProviderKind,
    resource: str,
) -> None:
    """
    Raise for non-success responses from a provider API.

    Args:
        response: The HTTP response
        provider: Which provider answered
        resource: Human-readable resource for error context (e.g. "owner/repo")

    Raises:
        ProviderAPIError: For authentication, authorization, missing resources,
            rate limiting, or any other non-2xx status
    """
    if response.is_success:
        return

    rate_info = RateLimitInfo(response, provider)
    name = provider.value

    if response.status_code == 401:
        raise ProviderAPIError(f"Invalid or expired {name} token", 401, name)
    elif response.status_code == 404:
        # GitLab answers 404 for a project path that was not URL-encoded as a
        # single segment, so a bad encoding lands here rather than in an empty list.
        raise ProviderAPIError(f"Repository or resource not found: {resource}", 404, name)
    elif response.status_code == 429 or (response.status_code == 403 and rate_info.is_exhausted):
        logger.warning(f"{name} rate limit exceeded while fetching {resource}")
        raise ProviderAPIError(
            f"{name} API rate limit exceeded",
            response.status_code,
            name,
            rate_limit_reset=rate_info.reset_timestamp,
        )
    elif response.status_code == 403:
        raise ProviderAPIError(f"{name} API forbidden", 403, name)

    raise ProviderAPIError(
        f"{name} API error: {response.status_code}", response.status_code, name
    )
