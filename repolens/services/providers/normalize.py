"""Provider-tagged normalization entry points.

``normalize_commit(ProviderKind.GITLAB, raw)`` and friends look up the
registered adapter and delegate to it. Importing this module registers both
built-in adapters.
"""

from typing import Any

from repolens.services.providers import github as _github  # noqa: F401
from repolens.services.providers import gitlab as _gitlab  # noqa: F401
from repolens.services.providers.base import get_adapter
from repolens.services.providers.types import (
    CanonicalBranch,
    CanonicalChangeRequest,
    CanonicalCommit,
    CanonicalContributor,
    CanonicalFileChange,
    CanonicalIssue,
    CanonicalRepo,
    ProviderKind,
)


def normalize_repo(provider: ProviderKind | str, raw: dict[str, Any]) -> CanonicalRepo:
    return get_adapter(provider).normalize_repo(raw)


def normalize_commit(provider: ProviderKind | str, raw: dict[str, Any]) -> CanonicalCommit:
    return get_adapter(provider).normalize_commit(raw)


def normalize_change_request(
    provider: ProviderKind | str, raw: dict[str, Any]
) -> CanonicalChangeRequest:
    return get_adapter(provider).normalize_change_request(raw)


def normalize_issue(provider: ProviderKind | str, raw: dict[str, Any]) -> CanonicalIssue:
    return get_adapter(provider).normalize_issue(raw)


def normalize_branch(provider: ProviderKind | str, raw: dict[str, Any]) -> CanonicalBranch:
    return get_adapter(provider).normalize_branch(raw)


def normalize_contributor(
    provider: ProviderKind | str, raw: dict[str, Any]
) -> CanonicalContributor:
    return get_adapter(provider).normalize_contributor(raw)


def normalize_file_change(
    provider: ProviderKind | str, raw: dict[str, Any]
) -> CanonicalFileChange:
    return get_adapter(provider).normalize_file_change(raw)
