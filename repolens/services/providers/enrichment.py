"""Bounded, best-effort detail backfill for list results.

Some list endpoints omit per-item stats (GitHub commits and pull requests).
``enrich_with_details`` fetches details for at most ``limit`` leading items,
at most ``max_concurrency`` at a time. A failed lookup only degrades its own
item, which keeps its core fields; siblings are never aborted.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import replace
from typing import Protocol, TypeVar

logger = logging.getLogger(__name__)


class HasStats(Protocol):
    additions: int | None
    deletions: int | None
    files_changed: int | None


T = TypeVar("T")
S = TypeVar("S", bound=HasStats)


def merge_stats(core: S, detail: S) -> S:
    """Copy stats from a detail entity onto the core one, keeping known values."""
    return replace(
        core,  # type: ignore[type-var]
        additions=detail.additions if detail.additions is not None else core.additions,
        deletions=detail.deletions if detail.deletions is not None else core.deletions,
        files_changed=(
            detail.files_changed if detail.files_changed is not None else core.files_changed
        ),
    )


async def enrich_with_details(
    items: Sequence[T],
    fetch_detail: Callable[[T], Awaitable[T]],
    *,
    limit: int,
    max_concurrency: int,
    label: str = "item",
) -> list[T]:
    """
    Replace the first ``limit`` items with their enriched versions.

    Args:
        items: Core-only entities in provider order
        fetch_detail: Returns the enriched entity for one item
        limit: How many leading items to enrich (0 disables enrichment)
        max_concurrency: Cap on simultaneous detail lookups
        label: Used in log messages

    Returns:
        A new list in the original order. Items past ``limit`` and items whose
        lookup failed are returned unchanged.
    """
    limit = max(0, min(limit, len(items)))
    if limit == 0:
        return list(items)

    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def fetch_one(item: T) -> T:
        async with semaphore:
            return await fetch_detail(item)

    results = await asyncio.gather(
        *[fetch_one(item) for item in items[:limit]],
        return_exceptions=True,
    )

    enriched: list[T] = []
    degraded = 0
    for original, result in zip(items[:limit], results, strict=True):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            degraded += 1
            logger.warning(f"Detail fetch failed for {label}, keeping core fields: {result}")
            enriched.append(original)
        else:
            enriched.append(result)

    if degraded:
        logger.info(f"Enriched {limit - degraded}/{limit} {label}s ({degraded} degraded)")

    return enriched + list(items[limit:])
