"""Type definitions for repository statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyCommitCount:
    """Commits made on a single UTC day."""

    date: str  # YYYY-MM-DD
    count: int


@dataclass(frozen=True)
class DailyChurn:
    date: str  # YYYY-MM-DD
    additions: int
    deletions: int


@dataclass(frozen=True)
class AverageCommitSize:
    """Rounded means over commits that report all three stats."""

    additions: int
    deletions: int
    files_changed: int


@dataclass(frozen=True)
class ChangeRequestStats:
    total: int
    open: int
    closed: int
    merged: int
    average_lifetime_days: float

    def state_breakdown(self) -> list[dict[str, int | str]]:
        """Non-zero states as name/value pairs for a pie chart."""
        pairs = [("Open", self.open), ("Closed", self.closed), ("Merged", self.merged)]
        return [{"name": name, "value": value} for name, value in pairs if value > 0]


@dataclass(frozen=True)
class ContributorRank:
    name: str
    contribution_count: int


@dataclass(frozen=True)
class IssueStats:
    total: int
    open: int
    closed: int
    average_resolution_days: float


@dataclass(frozen=True)
class RepositorySummary:
    """Headline numbers for a repository overview."""

    total_commits: int
    total_contributors: int
    total_change_requests: int
    average_change_request_lifetime_days: float
