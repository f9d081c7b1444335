"""Canonical read endpoints: repos, commits, change requests, issues, branches, contributors."""

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Query

from repolens.api.deps import Provider
from repolens.services.branches import analyze_branches, assign_default_parents
from repolens.services.stats import contributor_ranking

from .utils import serialize_list

router = APIRouter(prefix="/providers/{provider}", tags=["repositories"])
logger = logging.getLogger(__name__)


@router.get("/repos")
async def list_repos(service: Provider) -> dict[str, Any]:
    """Repositories visible to the token."""
    return serialize_list(await service.list_repos())


@router.get("/repos/{owner}/{repo}/commits")
async def list_commits(
    owner: str,
    repo: str,
    service: Provider,
    since: datetime | None = Query(None, description="Only commits after this time (ISO 8601)"),
    until: datetime | None = Query(None, description="Only commits before this time (ISO 8601)"),
    enrichment_limit: int | None = Query(
        None, ge=0, le=100, description="Leading commits to backfill stats for"
    ),
) -> dict[str, Any]:
    result = await service.get_commits(
        owner, repo, since=since, until=until, enrichment_limit=enrichment_limit
    )
    return serialize_list(result)


@router.get("/repos/{owner}/{repo}/change-requests")
async def list_change_requests(
    owner: str,
    repo: str,
    service: Provider,
    enrichment_limit: int | None = Query(None, ge=0, le=100),
) -> dict[str, Any]:
    """Pull requests (GitHub) or merge requests (GitLab) in every state."""
    result = await service.get_change_requests(owner, repo, enrichment_limit=enrichment_limit)
    return serialize_list(result)


@router.get("/repos/{owner}/{repo}/issues")
async def list_issues(owner: str, repo: str, service: Provider) -> dict[str, Any]:
    return serialize_list(await service.get_issues(owner, repo))


@router.get("/repos/{owner}/{repo}/issues/{number}")
async def get_issue(owner: str, repo: str, number: int, service: Provider) -> dict[str, Any]:
    issue = await service.get_issue(owner, repo, number)
    return asdict(issue)


@router.get("/repos/{owner}/{repo}/branches")
async def list_branches(
    owner: str,
    repo: str,
    service: Provider,
    default_branch: str | None = Query(
        None, description="Repository default branch, used to pick the trunk"
    ),
) -> dict[str, Any]:
    """Branches with the trunk, implied parents, and parent-chain anomalies."""
    result = await service.get_branches(owner, repo)
    tree = analyze_branches(result.items, default_branch)
    return {
        "trunk": tree.trunk,
        "items": [asdict(b) for b in assign_default_parents(tree.branches, tree.trunk)],
        "anomalies": [asdict(a) for a in tree.anomalies],
        "skipped": result.skipped,
    }


@router.get("/repos/{owner}/{repo}/contributors")
async def list_contributors(
    owner: str,
    repo: str,
    service: Provider,
    sort: bool = Query(False, description="Order by contribution count"),
) -> dict[str, Any]:
    result = await service.get_contributors(owner, repo)
    return {
        **serialize_list(result),
        "ranking": [asdict(r) for r in contributor_ranking(result.items, sort=sort)],
    }
