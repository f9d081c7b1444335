from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class TimelineEventType(StrEnum):
    COMMIT = "commit"
    PULL_REQUEST = "pull_request"
    MERGE = "merge"


class EventFilter(StrEnum):
    """Which event kinds a timeline query includes."""

    ALL = "all"
    COMMITS = "commits"
    PULL_REQUESTS = "pull_requests"
    MERGES = "merges"


class TimeRange(StrEnum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


@dataclass(frozen=True, kw_only=True)
class TimelineEvent:
    """Unified timeline event, derived per query."""

    id: str  # sha for commits, "pr-{number}" for change requests
    event_type: TimelineEventType
    title: str
    description: str
    author: str
    date: datetime
    additions: int | None = None
    deletions: int | None = None


@dataclass(frozen=True, kw_only=True)
class CommitEvent(TimelineEvent):
    sha: str


@dataclass(frozen=True, kw_only=True)
class ChangeRequestEvent(TimelineEvent):
    """A pull/merge request, either opened or merged."""

    number: int
