"""
Provider API read operations.

Fetches raw JSON for repositories, commits, change requests, issues,
branches, contributors and per-file diffs. Nothing here normalizes; the
adapters do that. Every non-success response becomes a ProviderAPIError, and
a list endpoint that answers with something other than a JSON array is
treated as an error too.
"""

import logging
from typing import Any
from urllib.parse import quote

from repolens.config import settings
from repolens.services.providers.cache import (
    branches_cache,
    cached_provider_call,
    contributors_cache,
)
from repolens.services.providers.constants import (
    GITHUB_ACCEPT,
    GITHUB_API_VERSION,
    LIST_PARAMS,
    ROUTES,
)
from repolens.services.providers.exceptions import ProviderAPIError
from repolens.services.providers.helpers import handle_error_response
from repolens.services.providers.http_client import get_http_client
from repolens.services.providers.types import ProviderKind

logger = logging.getLogger(__name__)


def project_path(provider: ProviderKind, owner: str, repo: str) -> str:
    """
    Build the provider-specific project path.

    GitHub addresses owner and repository as two path segments; GitLab takes
    a single URL-encoded "owner/project" token (nested groups included).

    Examples:
        (github, "octo", "hello") -> "/repos/octo/hello"
        (gitlab, "group/sub", "app") -> "/projects/group%2Fsub%2Fapp"
    """
    if provider is ProviderKind.GITLAB:
        return f"/projects/{quote(f'{owner}/{repo}', safe='')}"
    return f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"


class ProviderReadOperations:
    """
    Read-only REST operations for one provider and one access token.

    Uses the shared HTTP client singleton for connection pooling.
    """

    def __init__(
        self,
        provider: ProviderKind | str,
        token: str,
        base_url: str | None = None,
    ):
        self.provider = ProviderKind(provider)
        self.token = token
        default_url = (
            settings.gitlab_api_url
            if self.provider is ProviderKind.GITLAB
            else settings.github_api_url
        )
        self.base_url = (base_url or default_url).rstrip("/")
        self._headers = {"Authorization": f"Bearer {token}"}
        if self.provider is ProviderKind.GITHUB:
            self._headers["Accept"] = GITHUB_ACCEPT
            self._headers["X-GitHub-Api-Version"] = GITHUB_API_VERSION

    def _url(
        self,
        route: str,
        owner: str | None = None,
        repo: str | None = None,
        **parts: Any,
    ) -> str:
        template = ROUTES[self.provider][route]
        project = project_path(self.provider, owner, repo) if owner and repo else ""
        return self.base_url + template.format(project=project, **parts)

    async def _get(
        self,
        url: str,
        resource: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        client = get_http_client()
        response = await client.get(url, headers=self._headers, params=params)
        handle_error_response(response, self.provider, resource)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def _get_list(
        self,
        url: str,
        resource: str,
        params: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        data = await self._get(url, resource, params)
        if data is None:
            # GitHub answers 204 No Content for empty repositories
            return []
        if not isinstance(data, list):
            raise ProviderAPIError(
                f"Unexpected response shape for {resource}: expected a list",
                502,
                self.provider.value,
            )
        return data

    def _list_params(self, route: str, **extra: Any) -> dict[str, Any]:
        params: dict[str, Any] = dict(LIST_PARAMS[self.provider].get(route, {}))
        params.update({k: v for k, v in extra.items() if v is not None})
        return params

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------

    async def list_repos(self) -> list[dict[str, Any]]:
        """Repositories (GitHub) or member projects (GitLab) for the token owner."""
        return await self._get_list(
            self._url("repos"), "repositories", self._list_params("repos")
        )

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    async def list_commits(
        self,
        owner: str,
        repo: str,
        since: str | None = None,
        until: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List commits, newest first.

        Args:
            since: ISO 8601 lower bound (inclusive)
            until: ISO 8601 upper bound (inclusive)
        """
        return await self._get_list(
            self._url("commits", owner, repo),
            f"{owner}/{repo}",
            self._list_params("commits", since=since, until=until),
        )

    async def get_commit(self, owner: str, repo: str, sha: str) -> dict[str, Any]:
        """Single commit. On GitHub this payload carries stats and files."""
        return await self._get(
            self._url("commit", owner, repo, sha=quote(sha, safe="")),
            f"{owner}/{repo}@{sha}",
            {"stats": "true"} if self.provider is ProviderKind.GITLAB else None,
        )

    async def get_commit_files(self, owner: str, repo: str, sha: str) -> list[dict[str, Any]]:
        """Per-file diff entries for a commit."""
        url = self._url("commit_files", owner, repo, sha=quote(sha, safe=""))
        resource = f"{owner}/{repo}@{sha}"
        if self.provider is ProviderKind.GITLAB:
            return await self._get_list(url, resource)

        data = await self._get(url, resource)
        files = data.get("files") if isinstance(data, dict) else None
        return files if isinstance(files, list) else []

    # ------------------------------------------------------------------
    # Change requests (pull requests / merge requests)
    # ------------------------------------------------------------------

    async def list_change_requests(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return await self._get_list(
            self._url("change_requests", owner, repo),
            f"{owner}/{repo}",
            self._list_params("change_requests"),
        )

    async def get_change_request(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        return await self._get(
            self._url("change_request", owner, repo, number=number),
            f"{owner}/{repo}#{number}",
        )

    async def get_change_request_files(
        self, owner: str, repo: str, number: int
    ) -> list[dict[str, Any]]:
        """Per-file diff entries; GitLab wraps them in a "changes" array."""
        url = self._url("change_request_files", owner, repo, number=number)
        resource = f"{owner}/{repo}#{number}"
        if self.provider is ProviderKind.GITHUB:
            return await self._get_list(url, resource, {"per_page": 100})

        data = await self._get(url, resource)
        changes = data.get("changes") if isinstance(data, dict) else None
        return changes if isinstance(changes, list) else []

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    async def list_issues(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return await self._get_list(
            self._url("issues", owner, repo),
            f"{owner}/{repo}",
            self._list_params("issues"),
        )

    async def get_issue(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        return await self._get(
            self._url("issue", owner, repo, number=number),
            f"{owner}/{repo}#{number}",
        )

    # ------------------------------------------------------------------
    # Branches and contributors (cached)
    # ------------------------------------------------------------------

    @cached_provider_call(branches_cache)
    async def list_branches(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return await self._get_list(
            self._url("branches", owner, repo),
            f"{owner}/{repo}",
            self._list_params("branches"),
        )

    @cached_provider_call(contributors_cache)
    async def list_contributors(self, owner: str, repo: str) -> list[dict[str, Any]]:
        return await self._get_list(
            self._url("contributors", owner, repo),
            f"{owner}/{repo}",
            self._list_params("contributors"),
        )
