"""Shared helpers for v1 route handlers."""

from dataclasses import asdict
from typing import Any

from repolens.services.providers import NormalizedList


def serialize_list(result: NormalizedList[Any]) -> dict[str, Any]:
    """Items as dicts plus the provider items skipped as malformed."""
    return {
        "items": [asdict(item) for item in result.items],
        "skipped": result.skipped,
    }
