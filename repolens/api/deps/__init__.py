"""API dependencies - re-exports from submodules."""

from .auth import (
    Provider,
    get_provider_service,
    get_provider_token,
    security,
)

__all__ = [
    "security",
    "get_provider_token",
    "get_provider_service",
    "Provider",
]
