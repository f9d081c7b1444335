"""
TTL caching for provider API responses.

Branch and contributor lists change slowly compared with commits and change
requests, so they are cached in memory for ``settings.cache_ttl_seconds``.
"""

import hashlib
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from cachetools import TTLCache  # type: ignore[import-untyped]

from repolens.config import settings

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

_branches_cache: TTLCache[str, Any] = TTLCache(maxsize=200, ttl=settings.cache_ttl_seconds)
_contributors_cache: TTLCache[str, Any] = TTLCache(maxsize=200, ttl=settings.cache_ttl_seconds)


def _make_cache_key(func_name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """
    Generate a cache key from function name and arguments.

    The first positional arg is the read-operations instance; it contributes
    its provider and a token fingerprint so one user's private data is never
    served to another token.
    """
    instance = args[0] if args else None
    scope = ""
    if instance is not None:
        provider = getattr(instance, "provider", "")
        token = getattr(instance, "token", "") or ""
        scope = f"{provider}:{hashlib.sha256(token.encode()).hexdigest()[:16]}"
    cache_args = args[1:] if args else ()
    key_data = f"{func_name}:{scope}:{cache_args}:{sorted(kwargs.items())}"
    return hashlib.md5(key_data.encode()).hexdigest()


def cached_provider_call(
    cache: TTLCache[str, Any],
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for caching async provider API calls.

    Usage:
        @cached_provider_call(branches_cache)
        async def list_branches(self, owner: str, repo: str) -> list[dict[str, Any]]:
            ...
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            key = _make_cache_key(func.__name__, args, kwargs)

            if key in cache:
                logger.debug(f"Cache HIT: {func.__name__}")
                cached_result: T = cache[key]
                return cached_result

            logger.debug(f"Cache MISS: {func.__name__}")
            result = await func(*args, **kwargs)
            cache[key] = result
            return result

        return wrapper

    return decorator


def clear_all_caches() -> None:
    """Clear all provider caches. Useful for testing or when data is known to be stale."""
    _branches_cache.clear()
    _contributors_cache.clear()
    logger.debug("Cleared all provider caches")


def get_cache_stats() -> dict[str, dict[str, int]]:
    """Get current cache statistics for monitoring."""
    return {
        "branches": {"size": len(_branches_cache), "maxsize": _branches_cache.maxsize},
        "contributors": {
            "size": len(_contributors_cache),
            "maxsize": _contributors_cache.maxsize,
        },
    }


# Export cache instances for decorator use
branches_cache = _branches_cache
contributors_cache = _contributors_cache
