"""
Timeline aggregation.

Merges commits and change requests into one date-descending event list,
narrowed by an event filter and a relative time range.
"""

import calendar
import logging
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from repolens.services.providers.types import CanonicalChangeRequest, CanonicalCommit
from repolens.services.timeline.exceptions import FilterValidationError
from repolens.services.timeline.types import (
    ChangeRequestEvent,
    CommitEvent,
    EventFilter,
    TimelineEvent,
    TimelineEventType,
    TimeRange,
)

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description provided"
DESCRIPTION_PREVIEW_CHARS = 150
ALL_TIME_YEARS = 5

_INCLUDES_COMMITS = {EventFilter.ALL, EventFilter.COMMITS}
_INCLUDES_CHANGE_REQUESTS = {EventFilter.ALL, EventFilter.PULL_REQUESTS, EventFilter.MERGES}


def parse_event_filter(value: EventFilter | str) -> EventFilter:
    try:
        return EventFilter(value)
    except ValueError:
        raise FilterValidationError(
            "event filter", str(value), [f.value for f in EventFilter]
        ) from None


def parse_time_range(value: TimeRange | str) -> TimeRange:
    try:
        return TimeRange(value)
    except ValueError:
        raise FilterValidationError(
            "time range", str(value), [r.value for r in TimeRange]
        ) from None


def _shift_months(value: datetime, months: int) -> datetime:
    """Move back by whole calendar months, clamping to the month's last day."""
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def resolve_time_range(
    time_range: TimeRange | str, now: datetime | None = None
) -> tuple[datetime, datetime]:
    """
    Turn a relative range token into an inclusive (since, until) window.

    Args:
        time_range: week, month, year or all
        now: Reference instant (defaults to the current UTC time; naive
            values are taken to be UTC)

    Returns:
        Tuple of (since, until) where until is ``now``
    """
    time_range = parse_time_range(time_range)
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    if time_range is TimeRange.WEEK:
        since = now - timedelta(days=7)
    elif time_range is TimeRange.MONTH:
        since = _shift_months(now, 1)
    elif time_range is TimeRange.YEAR:
        since = _shift_months(now, 12)
    else:
        since = _shift_months(now, 12 * ALL_TIME_YEARS)
    return since, now


def _preview(body: str | None) -> str:
    if not body:
        return NO_DESCRIPTION
    if len(body) > DESCRIPTION_PREVIEW_CHARS:
        return body[:DESCRIPTION_PREVIEW_CHARS] + "..."
    return body


def commit_event(commit: CanonicalCommit) -> CommitEvent:
    return CommitEvent(
        id=commit.sha,
        event_type=TimelineEventType.COMMIT,
        title=commit.title,
        description=commit.body or NO_DESCRIPTION,
        author=commit.author,
        date=commit.date,
        additions=commit.additions,
        deletions=commit.deletions,
        sha=commit.sha,
    )


def change_request_event(cr: CanonicalChangeRequest) -> ChangeRequestEvent:
    """Merged requests become merge events dated at the merge."""
    merged_at = cr.merged_at
    return ChangeRequestEvent(
        id=f"pr-{cr.number}",
        event_type=TimelineEventType.MERGE if merged_at else TimelineEventType.PULL_REQUEST,
        title=cr.title,
        description=_preview(cr.body),
        author=cr.author,
        date=merged_at or cr.created_at,
        additions=cr.additions,
        deletions=cr.deletions,
        number=cr.number,
    )


def build_timeline(
    commits: Iterable[CanonicalCommit],
    change_requests: Iterable[CanonicalChangeRequest],
    event_filter: EventFilter | str = EventFilter.ALL,
    time_range: TimeRange | str = TimeRange.MONTH,
    now: datetime | None = None,
) -> list[TimelineEvent]:
    """
    Build a date-descending timeline.

    Commits are windowed on their date and change requests on their creation
    date. Events with equal dates keep their input order, commits first.

    Raises:
        FilterValidationError: If either token is not recognized
    """
    event_filter = parse_event_filter(event_filter)
    since, until = resolve_time_range(time_range, now)

    events: list[TimelineEvent] = []

    if event_filter in _INCLUDES_COMMITS:
        events.extend(commit_event(c) for c in commits if since <= c.date <= until)

    if event_filter in _INCLUDES_CHANGE_REQUESTS:
        for cr in change_requests:
            if not since <= cr.created_at <= until:
                continue
            if event_filter is EventFilter.PULL_REQUESTS and cr.is_merged:
                continue
            if event_filter is EventFilter.MERGES and not cr.is_merged:
                continue
            events.append(change_request_event(cr))

    logger.debug(
        f"Built timeline with {len(events)} events "
        f"(filter={event_filter.value}, since={since.isoformat()})"
    )
    return sorted(events, key=lambda e: e.date, reverse=True)
