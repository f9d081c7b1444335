"""Canonical, provider-agnostic data types.

Every adapter maps its provider's raw JSON into these frozen dataclasses.
Optional fields use ``None`` for "unknown", which is distinct from zero.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class ProviderKind(StrEnum):
    """Supported source-control providers."""

    GITHUB = "github"
    GITLAB = "gitlab"


class ChangeRequestState(StrEnum):
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


class IssueState(StrEnum):
    OPEN = "open"
    CLOSED = "closed"


class FileChangeStatus(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    RENAMED = "renamed"


@dataclass(frozen=True)
class CanonicalRepo:
    """Repository metadata, shared shape for GitHub repos and GitLab projects."""

    provider: ProviderKind
    id: str
    name: str
    owner: str
    full_name: str  # owner/repo
    description: str | None = None
    default_branch: str | None = None
    url: str | None = None
    is_private: bool = False


@dataclass(frozen=True)
class CanonicalCommit:
    """A single commit. Identity is ``sha``."""

    sha: str
    message: str
    author: str
    date: datetime
    additions: int | None = None
    deletions: int | None = None
    files_changed: int | None = None

    @property
    def title(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0].rstrip("\r")

    @property
    def body(self) -> str:
        """Every message line after the title, unchanged."""
        parts = self.message.split("\n", 1)
        return parts[1] if len(parts) > 1 else ""

    @property
    def has_full_stats(self) -> bool:
        return (
            self.additions is not None
            and self.deletions is not None
            and self.files_changed is not None
        )


@dataclass(frozen=True)
class CanonicalChangeRequest:
    """A pull request (GitHub) or merge request (GitLab).

    ``merged_at`` being set always implies ``state == MERGED``.
    """

    number: int
    title: str
    state: ChangeRequestState
    author: str
    created_at: datetime
    closed_at: datetime | None = None
    merged_at: datetime | None = None
    additions: int | None = None
    deletions: int | None = None
    files_changed: int | None = None
    body: str | None = None

    @property
    def is_merged(self) -> bool:
        return self.merged_at is not None


@dataclass(frozen=True)
class CanonicalIssue:
    number: int
    title: str
    state: IssueState
    body: str
    created_at: datetime
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    author: str | None = None
    labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class CanonicalBranch:
    name: str
    parent: str | None = None
    is_default: bool = False
    protected: bool | None = None
    commit_sha: str | None = None


@dataclass(frozen=True)
class CanonicalContributor:
    login: str | None = None
    name: str | None = None
    email: str | None = None
    contributions: int | None = None

    @property
    def display_name(self) -> str:
        """Login, then display name, then "Unknown"."""
        return self.login or self.name or "Unknown"


@dataclass(frozen=True)
class CanonicalFileChange:
    """One file entry of a commit or change-request diff."""

    filename: str
    status: FileChangeStatus
    previous_filename: str | None = None
    additions: int | None = None
    deletions: int | None = None
    patch: str | None = None


@dataclass
class ChangeSet:
    """Files touched by a commit or change request."""

    files: list[CanonicalFileChange] = field(default_factory=list)

    @property
    def total_additions(self) -> int:
        return sum(f.additions or 0 for f in self.files)

    @property
    def total_deletions(self) -> int:
        return sum(f.deletions or 0 for f in self.files)
