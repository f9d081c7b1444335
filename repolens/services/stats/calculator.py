"""
Pure statistics over canonical entities.

Nothing here fetches or caches; callers pass in snapshots and get fresh
values back. Rounding is half-up on the absolute scale, so 2.5 -> 3.
"""

import math
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from repolens.services.providers.types import (
    CanonicalChangeRequest,
    CanonicalCommit,
    CanonicalContributor,
    CanonicalIssue,
    ChangeRequestState,
    IssueState,
)
from repolens.services.stats.types import (
    AverageCommitSize,
    ChangeRequestStats,
    ContributorRank,
    DailyChurn,
    DailyCommitCount,
    IssueStats,
    RepositorySummary,
)

SECONDS_PER_DAY = 86400


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def _utc_day(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%d")


def _mean_days(spans: Sequence[tuple[datetime, datetime]]) -> float:
    """Mean of (end - start) in fractional days, one decimal, 0.0 when empty."""
    if not spans:
        return 0.0
    total = sum((end - start).total_seconds() for start, end in spans)
    return round_half_up(total / len(spans) / SECONDS_PER_DAY, 1)


def commit_frequency_by_day(commits: Iterable[CanonicalCommit]) -> list[DailyCommitCount]:
    """Count commits per UTC calendar day, ascending by date."""
    counts = Counter(_utc_day(c.date) for c in commits)
    return [DailyCommitCount(date=day, count=counts[day]) for day in sorted(counts)]


def code_churn_by_day(commits: Iterable[CanonicalCommit]) -> list[DailyChurn]:
    """Sum additions and deletions per UTC day.

    Commits missing either count are left out rather than counted as zero.
    """
    totals: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for commit in commits:
        if commit.additions is None or commit.deletions is None:
            continue
        bucket = totals[_utc_day(commit.date)]
        bucket[0] += commit.additions
        bucket[1] += commit.deletions
    return [
        DailyChurn(date=day, additions=totals[day][0], deletions=totals[day][1])
        for day in sorted(totals)
    ]


def average_commit_size(commits: Iterable[CanonicalCommit]) -> AverageCommitSize:
    complete = [c for c in commits if c.has_full_stats]
    if not complete:
        return AverageCommitSize(additions=0, deletions=0, files_changed=0)
    n = len(complete)
    return AverageCommitSize(
        additions=int(round_half_up(sum(c.additions for c in complete) / n)),
        deletions=int(round_half_up(sum(c.deletions for c in complete) / n)),
        files_changed=int(round_half_up(sum(c.files_changed for c in complete) / n)),
    )


def change_request_stats(
    change_requests: Iterable[CanonicalChangeRequest],
) -> ChangeRequestStats:
    """Counts per state and mean open-to-close lifetime in days."""
    change_requests = list(change_requests)
    states = Counter(cr.state for cr in change_requests)
    spans = [(cr.created_at, cr.closed_at) for cr in change_requests if cr.closed_at is not None]
    return ChangeRequestStats(
        total=len(change_requests),
        open=states[ChangeRequestState.OPEN],
        closed=states[ChangeRequestState.CLOSED],
        merged=states[ChangeRequestState.MERGED],
        average_lifetime_days=_mean_days(spans),
    )


def contributor_ranking(
    contributors: Iterable[CanonicalContributor],
    sort: bool = False,
) -> list[ContributorRank]:
    """
    Name and contribution count per contributor.

    Args:
        contributors: Contributors in provider order
        sort: Order by count descending; ties keep provider order

    Returns:
        One ContributorRank per contributor
    """
    ranking = [
        ContributorRank(name=c.display_name, contribution_count=c.contributions or 0)
        for c in contributors
    ]
    if sort:
        ranking.sort(key=lambda r: r.contribution_count, reverse=True)
    return ranking


def issue_stats(issues: Iterable[CanonicalIssue]) -> IssueStats:
    issues = list(issues)
    closed = [i for i in issues if i.state is IssueState.CLOSED]
    spans = [(i.created_at, i.closed_at) for i in closed if i.closed_at is not None]
    return IssueStats(
        total=len(issues),
        open=len(issues) - len(closed),
        closed=len(closed),
        average_resolution_days=_mean_days(spans),
    )


def repository_summary(
    commits: Sequence[CanonicalCommit],
    contributors: Sequence[CanonicalContributor],
    change_requests: Sequence[CanonicalChangeRequest],
) -> RepositorySummary:
    return RepositorySummary(
        total_commits=len(commits),
        total_contributors=len(contributors),
        total_change_requests=len(change_requests),
        average_change_request_lifetime_days=change_request_stats(
            change_requests
        ).average_lifetime_days,
    )
