"""
Provider package: schema adapters and read access for GitHub and GitLab.

Usage: `from repolens.services.providers import ProviderService, normalize_commit`

Module structure:
- types.py: Canonical, provider-agnostic entities
- base.py: Adapter interface and provider registry
- github.py / gitlab.py: One schema adapter per provider
- normalize.py: Provider-tagged normalize_* entry points
- payload.py: Required/optional field accessors used by adapters
- read_operations.py: Raw REST reads (URL building, project encoding)
- enrichment.py: Bounded, best-effort per-item detail backfill
- service.py: ProviderService facade returning canonical entities
- helpers.py: Rate limit handling and error utilities
- exceptions.py: Custom exceptions
- constants.py: Routes and API constants
"""

from repolens.services.providers.base import ProviderAdapter, get_adapter, register_adapter
from repolens.services.providers.cache import clear_all_caches as clear_provider_caches
from repolens.services.providers.exceptions import (
    ProviderAPIError,
    ProviderSchemaError,
    UnsupportedProviderError,
)
from repolens.services.providers.http_client import close_http_client
from repolens.services.providers.normalize import (
    normalize_branch,
    normalize_change_request,
    normalize_commit,
    normalize_contributor,
    normalize_file_change,
    normalize_issue,
    normalize_repo,
)
from repolens.services.providers.read_operations import ProviderReadOperations
from repolens.services.providers.service import NormalizedList, ProviderService
from repolens.services.providers.types import (
    CanonicalBranch,
    CanonicalChangeRequest,
    CanonicalCommit,
    CanonicalContributor,
    CanonicalFileChange,
    CanonicalIssue,
    CanonicalRepo,
    ChangeRequestState,
    ChangeSet,
    FileChangeStatus,
    IssueState,
    ProviderKind,
)

__all__ = [
    # Service (main entry point)
    "ProviderService",
    "ProviderReadOperations",
    "NormalizedList",
    # Adapters
    "ProviderAdapter",
    "get_adapter",
    "register_adapter",
    "normalize_branch",
    "normalize_change_request",
    "normalize_commit",
    "normalize_contributor",
    "normalize_file_change",
    "normalize_issue",
    "normalize_repo",
    # Lifecycle
    "close_http_client",
    "clear_provider_caches",
    # Exceptions
    "ProviderAPIError",
    "ProviderSchemaError",
    "UnsupportedProviderError",
    # Types
    "CanonicalBranch",
    "CanonicalChangeRequest",
    "CanonicalCommit",
    "CanonicalContributor",
    "CanonicalFileChange",
    "CanonicalIssue",
    "CanonicalRepo",
    "ChangeRequestState",
    "ChangeSet",
    "FileChangeStatus",
    "IssueState",
    "ProviderKind",
]
