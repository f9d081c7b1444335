"""Statistics reducers over canonical entities."""

from repolens.services.stats.calculator import (
    average_commit_size,
    change_request_stats,
    code_churn_by_day,
    commit_frequency_by_day,
    contributor_ranking,
    issue_stats,
    repository_summary,
    round_half_up,
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

__all__ = [
    # Reducers
    "commit_frequency_by_day",
    "code_churn_by_day",
    "average_commit_size",
    "change_request_stats",
    "contributor_ranking",
    "issue_stats",
    "repository_summary",
    "round_half_up",
    # Types
    "DailyCommitCount",
    "DailyChurn",
    "AverageCommitSize",
    "ChangeRequestStats",
    "ContributorRank",
    "IssueStats",
    "RepositorySummary",
]
