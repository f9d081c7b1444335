"""Exceptions for provider access and normalization."""

from typing import Any


class ProviderAPIError(Exception):
    """Error from a provider's REST API (primary call failed)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        provider: str | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.provider = provider
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class ProviderSchemaError(Exception):
    """A required field is missing from a provider payload.

    Fatal for the offending item only. The raw item is attached so callers
    can report which record was malformed.
    """

    def __init__(
        self,
        provider: str,
        entity: str,
        field: str,
        raw: Any = None,
    ):
        self.provider = provider
        self.entity = entity
        self.field = field
        self.raw = raw
        super().__init__(f"{provider} {entity} payload is missing required field '{field}'")


class UnsupportedProviderError(ValueError):
    """No adapter is registered for the requested provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")
