"""Repository statistics endpoint."""

import asyncio
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter

from repolens.api.deps import Provider
from repolens.services.stats import (
    average_commit_size,
    change_request_stats,
    code_churn_by_day,
    commit_frequency_by_day,
    contributor_ranking,
    issue_stats,
    repository_summary,
)

router = APIRouter(prefix="/providers/{provider}", tags=["stats"])


@router.get("/repos/{owner}/{repo}/stats")
async def get_repository_stats(owner: str, repo: str, service: Provider) -> dict[str, Any]:
    """
    Dashboard statistics for one repository.

    Returns:
    - Overview totals
    - Commit frequency and code churn per day
    - Average commit size
    - Change request and issue breakdowns
    - Contributor ranking
    """
    commits, change_requests, contributors, issues = await asyncio.gather(
        service.get_commits(owner, repo),
        service.get_change_requests(owner, repo),
        service.get_contributors(owner, repo),
        service.get_issues(owner, repo),
    )

    cr_stats = change_request_stats(change_requests.items)
    return {
        "summary": asdict(
            repository_summary(commits.items, contributors.items, change_requests.items)
        ),
        "commit_frequency": [asdict(d) for d in commit_frequency_by_day(commits.items)],
        "code_churn": [asdict(d) for d in code_churn_by_day(commits.items)],
        "average_commit_size": asdict(average_commit_size(commits.items)),
        "change_requests": {**asdict(cr_stats), "breakdown": cr_stats.state_breakdown()},
        "issues": asdict(issue_stats(issues.items)),
        "contributors": [
            asdict(r) for r in contributor_ranking(contributors.items, sort=True)
        ],
    }
