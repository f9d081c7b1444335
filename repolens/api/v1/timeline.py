"""Timeline API endpoint."""

import asyncio
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Query

from repolens.api.deps import Provider
from repolens.services.providers import NormalizedList
from repolens.services.timeline import (
    EventFilter,
    build_timeline,
    parse_event_filter,
    resolve_time_range,
)

router = APIRouter(prefix="/providers/{provider}", tags=["timeline"])


async def _empty() -> NormalizedList[Any]:
    return NormalizedList(items=[])


@router.get("/repos/{owner}/{repo}/timeline")
async def get_timeline(
    owner: str,
    repo: str,
    service: Provider,
    event_filter: str = Query("all", description="all, commits, pull_requests or merges"),
    time_range: str = Query("month", description="week, month, year or all"),
) -> dict[str, Any]:
    """Commits and change requests in one date-descending list."""
    parsed_filter = parse_event_filter(event_filter)
    since, now = resolve_time_range(time_range)

    wants_commits = parsed_filter in (EventFilter.ALL, EventFilter.COMMITS)
    wants_change_requests = parsed_filter is not EventFilter.COMMITS

    commits, change_requests = await asyncio.gather(
        service.get_commits(owner, repo, since=since, until=now) if wants_commits else _empty(),
        service.get_change_requests(owner, repo) if wants_change_requests else _empty(),
    )

    events = build_timeline(
        commits.items, change_requests.items, parsed_filter, time_range, now=now
    )
    return {
        "events": [asdict(e) for e in events],
        "event_filter": parsed_filter.value,
        "time_range": time_range,
        "since": since.isoformat(),
        "skipped": commits.skipped + change_requests.skipped,
    }
