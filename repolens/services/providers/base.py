"""Shared adapter interface and the provider registry.

Each provider gets exactly one ``ProviderAdapter`` subclass. Adding a provider
means adding a ``ProviderKind`` member and registering one adapter; nothing
else dispatches on the provider name.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from repolens.services.providers.exceptions import ProviderSchemaError, UnsupportedProviderError
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

T = TypeVar("T")


class ProviderAdapter(ABC):
    """Pure mapping from one provider's JSON shapes to canonical entities."""

    kind: ProviderKind
    # True when list payloads omit line stats that only a detail call returns
    stats_need_detail_fetch: bool = False

    @abstractmethod
    def normalize_repo(self, raw: dict[str, Any]) -> CanonicalRepo: ...

    @abstractmethod
    def normalize_commit(self, raw: dict[str, Any]) -> CanonicalCommit: ...

    @abstractmethod
    def normalize_change_request(self, raw: dict[str, Any]) -> CanonicalChangeRequest: ...

    @abstractmethod
    def normalize_issue(self, raw: dict[str, Any]) -> CanonicalIssue: ...

    @abstractmethod
    def normalize_branch(self, raw: dict[str, Any]) -> CanonicalBranch: ...

    @abstractmethod
    def normalize_contributor(self, raw: dict[str, Any]) -> CanonicalContributor: ...

    @abstractmethod
    def normalize_file_change(self, raw: dict[str, Any]) -> CanonicalFileChange: ...

    def is_change_request_issue(self, raw: dict[str, Any]) -> bool:
        """Whether an item from the issues endpoint is really a change request."""
        return False


_registry: dict[ProviderKind, ProviderAdapter] = {}


def register_adapter(adapter: ProviderAdapter) -> ProviderAdapter:
    _registry[adapter.kind] = adapter
    return adapter


def get_adapter(provider: ProviderKind | str) -> ProviderAdapter:
    """Look up the adapter for a provider tag.

    Raises:
        UnsupportedProviderError: If the tag is unknown or has no adapter
    """
    try:
        kind = ProviderKind(provider)
    except ValueError:
        raise UnsupportedProviderError(str(provider)) from None
    adapter = _registry.get(kind)
    if adapter is None:
        raise UnsupportedProviderError(kind.value)
    return adapter


def normalize_each(
    items: Iterable[dict[str, Any]],
    normalize: Callable[[dict[str, Any]], T],
) -> tuple[list[T], list[ProviderSchemaError]]:
    """Normalize a list, collecting per-item schema errors instead of failing.

    A malformed item is fatal only for itself: it is left out of the result
    and its error (with the raw item attached) is returned alongside.
    """
    entities: list[T] = []
    errors: list[ProviderSchemaError] = []
    for item in items:
        try:
            entities.append(normalize(item))
        except ProviderSchemaError as e:
            errors.append(e)
    return entities, errors
