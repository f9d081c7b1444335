"""
Provider service facade.

Combines the raw read operations, the provider's schema adapter, and the
bounded detail backfill into calls that return canonical entities:
- Repositories
- Commits and change requests (with best-effort stats)
- Issues, branches, contributors
- Per-file changes for a commit or change request
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from repolens.config import settings
from repolens.services.providers.base import get_adapter, normalize_each
from repolens.services.providers.enrichment import enrich_with_details, merge_stats
from repolens.services.providers.exceptions import ProviderSchemaError
from repolens.services.providers.read_operations import ProviderReadOperations
from repolens.services.providers.types import (
    CanonicalBranch,
    CanonicalChangeRequest,
    CanonicalCommit,
    CanonicalContributor,
    CanonicalIssue,
    CanonicalRepo,
    ChangeSet,
    ProviderKind,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class NormalizedList(Generic[T]):
    """Canonical entities plus the items that failed normalization."""

    items: list[T]
    errors: list[ProviderSchemaError] = field(default_factory=list)

    @property
    def skipped(self) -> list[dict[str, str]]:
        return [{"entity": e.entity, "field": e.field} for e in self.errors]


def _iso(value: datetime | None) -> str | None:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ") if value else None


class ProviderService:
    """Canonical read access to one provider with one token."""

    def __init__(
        self,
        provider: ProviderKind | str,
        token: str,
        read_ops: ProviderReadOperations | None = None,
    ):
        self.provider = ProviderKind(provider)
        self.adapter = get_adapter(self.provider)
        self.read_ops = read_ops or ProviderReadOperations(self.provider, token)

    def _normalize(
        self,
        raw_items: list[dict[str, Any]],
        normalize: Callable[[dict[str, Any]], T],
        label: str,
    ) -> NormalizedList[T]:
        items, errors = normalize_each(raw_items, normalize)
        for error in errors:
            logger.warning(f"Skipping malformed {self.provider.value} {label}: {error}")
        return NormalizedList(items=items, errors=errors)

    async def list_repos(self) -> NormalizedList[CanonicalRepo]:
        raw = await self.read_ops.list_repos()
        return self._normalize(raw, self.adapter.normalize_repo, "repo")

    async def get_commits(
        self,
        owner: str,
        repo: str,
        since: datetime | None = None,
        until: datetime | None = None,
        enrichment_limit: int | None = None,
    ) -> NormalizedList[CanonicalCommit]:
        """
        Fetch commits, backfilling stats for the leading items when the
        provider's list payload lacks them.

        Args:
            enrichment_limit: How many leading commits get a detail fetch
                (defaults to settings.enrichment_limit)
        """
        raw = await self.read_ops.list_commits(owner, repo, since=_iso(since), until=_iso(until))
        result = self._normalize(raw, self.adapter.normalize_commit, "commit")

        if self.adapter.stats_need_detail_fetch:

            async def fetch_detail(commit: CanonicalCommit) -> CanonicalCommit:
                detail = await self.read_ops.get_commit(owner, repo, commit.sha)
                return merge_stats(commit, self.adapter.normalize_commit(detail))

            result.items = await enrich_with_details(
                result.items,
                fetch_detail,
                limit=settings.enrichment_limit if enrichment_limit is None else enrichment_limit,
                max_concurrency=settings.max_concurrent_detail_fetches,
                label="commit",
            )
        return result

    async def get_change_requests(
        self,
        owner: str,
        repo: str,
        enrichment_limit: int | None = None,
    ) -> NormalizedList[CanonicalChangeRequest]:
        """Fetch pull/merge requests (all states), with best-effort stats."""
        raw = await self.read_ops.list_change_requests(owner, repo)
        result = self._normalize(raw, self.adapter.normalize_change_request, "change request")

        if self.adapter.stats_need_detail_fetch:

            async def fetch_detail(cr: CanonicalChangeRequest) -> CanonicalChangeRequest:
                detail = await self.read_ops.get_change_request(owner, repo, cr.number)
                return merge_stats(cr, self.adapter.normalize_change_request(detail))

            result.items = await enrich_with_details(
                result.items,
                fetch_detail,
                limit=settings.enrichment_limit if enrichment_limit is None else enrichment_limit,
                max_concurrency=settings.max_concurrent_detail_fetches,
                label="change request",
            )
        return result

    async def get_issues(self, owner: str, repo: str) -> NormalizedList[CanonicalIssue]:
        raw = await self.read_ops.list_issues(owner, repo)
        issues_only = [item for item in raw if not self.adapter.is_change_request_issue(item)]
        return self._normalize(issues_only, self.adapter.normalize_issue, "issue")

    async def get_issue(self, owner: str, repo: str, number: int) -> CanonicalIssue:
        raw = await self.read_ops.get_issue(owner, repo, number)
        return self.adapter.normalize_issue(raw)

    async def get_branches(self, owner: str, repo: str) -> NormalizedList[CanonicalBranch]:
        raw = await self.read_ops.list_branches(owner, repo)
        return self._normalize(raw, self.adapter.normalize_branch, "branch")

    async def get_contributors(
        self, owner: str, repo: str
    ) -> NormalizedList[CanonicalContributor]:
        raw = await self.read_ops.list_contributors(owner, repo)
        return self._normalize(raw, self.adapter.normalize_contributor, "contributor")

    async def get_commit_changes(self, owner: str, repo: str, sha: str) -> ChangeSet:
        raw = await self.read_ops.get_commit_files(owner, repo, sha)
        result = self._normalize(raw, self.adapter.normalize_file_change, "file")
        return ChangeSet(files=result.items)

    async def get_change_request_changes(self, owner: str, repo: str, number: int) -> ChangeSet:
        raw = await self.read_ops.get_change_request_files(owner, repo, number)
        result = self._normalize(raw, self.adapter.normalize_file_change, "file")
        return ChangeSet(files=result.items)
