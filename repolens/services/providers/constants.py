"""Constants for provider REST access."""

from repolens.services.providers.types import ProviderKind

GITHUB_API_VERSION = "2022-11-28"
GITHUB_ACCEPT = "application/vnd.github+json"

# Largest page size both providers accept
MAX_PER_PAGE = 100

# Route templates per provider. "{project}" is the provider-specific project
# path: "/repos/{owner}/{repo}" on GitHub, "/projects/{owner%2Frepo}" on GitLab.
ROUTES: dict[ProviderKind, dict[str, str]] = {
    ProviderKind.GITHUB: {
        "repos": "/user/repos",
        "commits": "{project}/commits",
        "commit": "{project}/commits/{sha}",
        "commit_files": "{project}/commits/{sha}",
        "change_requests": "{project}/pulls",
        "change_request": "{project}/pulls/{number}",
        "change_request_files": "{project}/pulls/{number}/files",
        "issues": "{project}/issues",
        "issue": "{project}/issues/{number}",
        "branches": "{project}/branches",
        "contributors": "{project}/contributors",
    },
    ProviderKind.GITLAB: {
        "repos": "/projects",
        "commits": "{project}/repository/commits",
        "commit": "{project}/repository/commits/{sha}",
        "commit_files": "{project}/repository/commits/{sha}/diff",
        "change_requests": "{project}/merge_requests",
        "change_request": "{project}/merge_requests/{number}",
        "change_request_files": "{project}/merge_requests/{number}/changes",
        "issues": "{project}/issues",
        "issue": "{project}/issues/{number}",
        "branches": "{project}/repository/branches",
        "contributors": "{project}/repository/contributors",
    },
}

# Default query params for list calls
LIST_PARAMS: dict[ProviderKind, dict[str, dict[str, str | int]]] = {
    ProviderKind.GITHUB: {
        "repos": {"per_page": MAX_PER_PAGE, "page": 1},
        "commits": {"per_page": MAX_PER_PAGE},
        "change_requests": {"state": "all", "per_page": MAX_PER_PAGE},
        "issues": {"state": "all", "per_page": MAX_PER_PAGE},
        "branches": {"per_page": MAX_PER_PAGE},
        "contributors": {"per_page": MAX_PER_PAGE},
    },
    ProviderKind.GITLAB: {
        "repos": {"membership": "true", "per_page": MAX_PER_PAGE},
        # GitLab can inline line stats on the commit list
        "commits": {"with_stats": "true", "per_page": MAX_PER_PAGE},
        "change_requests": {"state": "all", "per_page": MAX_PER_PAGE},
        "issues": {"state": "all", "per_page": MAX_PER_PAGE},
        "branches": {"per_page": MAX_PER_PAGE},
        "contributors": {"per_page": MAX_PER_PAGE},
    },
}

# Rate limit header names per provider
RATE_LIMIT_HEADERS: dict[ProviderKind, tuple[str, str]] = {
    ProviderKind.GITHUB: ("X-RateLimit-Remaining", "X-RateLimit-Reset"),
    ProviderKind.GITLAB: ("RateLimit-Remaining", "RateLimit-Reset"),
}
