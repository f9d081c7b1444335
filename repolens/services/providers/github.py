"""GitHub REST schema adapter."""

from typing import Any

from repolens.services.providers.base import ProviderAdapter, register_adapter
from repolens.services.providers.payload import (
    dig,
    first_present,
    optional_int,
    optional_str,
    optional_timestamp,
    require,
    require_int,
    require_timestamp,
)
from repolens.services.providers.types import (
    CanonicalBranch,
    CanonicalChangeRequest,
    CanonicalCommit,
    CanonicalContributor,
    CanonicalFileChange,
    CanonicalIssue,
    CanonicalRepo,
    ChangeRequestState,
    FileChangeStatus,
    IssueState,
    ProviderKind,
)

_FILE_STATUS_MAP: dict[str, FileChangeStatus] = {
    "added": FileChangeStatus.ADDED,
    "copied": FileChangeStatus.ADDED,
    "removed": FileChangeStatus.REMOVED,
    "renamed": FileChangeStatus.RENAMED,
    "modified": FileChangeStatus.MODIFIED,
    "changed": FileChangeStatus.MODIFIED,
    "unchanged": FileChangeStatus.MODIFIED,
}


class GitHubAdapter(ProviderAdapter):
    """Maps GitHub v3 REST payloads to canonical entities.

    Notes on the GitHub schema:
    - Commit dates come from the nested ``commit.author.date``.
    - The PR ``state`` field only ever says open/closed; a merged PR is one
      with a non-null ``merged_at``.
    - Stats (additions/deletions/files) exist only on detail payloads, so list
      items normalize with those fields absent.
    """

    kind = ProviderKind.GITHUB
    stats_need_detail_fetch = True

    def _require(self, raw: Any, *path: str, entity: str) -> Any:
        return require(raw, *path, provider=self.kind.value, entity=entity)

    def _require_int(self, raw: Any, *path: str, entity: str) -> int:
        return require_int(raw, *path, provider=self.kind.value, entity=entity)

    def normalize_repo(self, raw: dict[str, Any]) -> CanonicalRepo:
        name = str(self._require(raw, "name", entity="repo"))
        full_name = optional_str(raw, "full_name")
        owner = optional_str(raw, "owner", "login")
        if owner is None and full_name and "/" in full_name:
            owner = full_name.split("/", 1)[0]
        owner = owner or ""
        return CanonicalRepo(
            provider=self.kind,
            id=str(self._require(raw, "id", entity="repo")),
            name=name,
            owner=owner,
            full_name=full_name or f"{owner}/{name}",
            description=optional_str(raw, "description"),
            default_branch=optional_str(raw, "default_branch"),
            url=optional_str(raw, "html_url"),
            is_private=bool(raw.get("private", False)),
        )

    def normalize_commit(self, raw: dict[str, Any]) -> CanonicalCommit:
        files = raw.get("files")
        return CanonicalCommit(
            sha=str(self._require(raw, "sha", entity="commit")),
            message=dig(raw, "commit", "message") or "",
            author=first_present(
                dig(raw, "commit", "author", "name"),
                dig(raw, "author", "login"),
                default="Unknown",
            ),
            date=require_timestamp(
                raw, "commit", "author", "date", provider=self.kind.value, entity="commit"
            ),
            additions=optional_int(raw, "stats", "additions"),
            deletions=optional_int(raw, "stats", "deletions"),
            files_changed=len(files) if isinstance(files, list) else None,
        )

    def normalize_change_request(self, raw: dict[str, Any]) -> CanonicalChangeRequest:
        merged_at = optional_timestamp(raw, "merged_at")
        if merged_at is not None:
            state = ChangeRequestState.MERGED
        elif raw.get("state") == "closed":
            state = ChangeRequestState.CLOSED
        else:
            state = ChangeRequestState.OPEN

        return CanonicalChangeRequest(
            number=self._require_int(raw, "number", entity="pull_request"),
            title=raw.get("title") or "",
            state=state,
            author=dig(raw, "user", "login") or "Unknown",
            created_at=require_timestamp(
                raw, "created_at", provider=self.kind.value, entity="pull_request"
            ),
            closed_at=optional_timestamp(raw, "closed_at"),
            merged_at=merged_at,
            additions=optional_int(raw, "additions"),
            deletions=optional_int(raw, "deletions"),
            files_changed=optional_int(raw, "changed_files"),
            body=optional_str(raw, "body"),
        )

    def is_change_request_issue(self, raw: dict[str, Any]) -> bool:
        # GitHub's issues endpoint also returns pull requests
        return "pull_request" in raw

    def normalize_issue(self, raw: dict[str, Any]) -> CanonicalIssue:
        labels = raw.get("labels") or []
        return CanonicalIssue(
            number=self._require_int(raw, "number", entity="issue"),
            title=raw.get("title") or "",
            state=IssueState.CLOSED if raw.get("state") == "closed" else IssueState.OPEN,
            body=raw.get("body") or "",
            created_at=require_timestamp(
                raw, "created_at", provider=self.kind.value, entity="issue"
            ),
            updated_at=optional_timestamp(raw, "updated_at"),
            closed_at=optional_timestamp(raw, "closed_at"),
            author=optional_str(raw, "user", "login"),
            labels=tuple(
                label["name"] if isinstance(label, dict) else str(label)
                for label in labels
                if not isinstance(label, dict) or label.get("name")
            ),
        )

    def normalize_branch(self, raw: dict[str, Any]) -> CanonicalBranch:
        protected = raw.get("protected")
        return CanonicalBranch(
            name=str(self._require(raw, "name", entity="branch")),
            protected=protected if isinstance(protected, bool) else None,
            commit_sha=optional_str(raw, "commit", "sha"),
        )

    def normalize_contributor(self, raw: dict[str, Any]) -> CanonicalContributor:
        return CanonicalContributor(
            login=optional_str(raw, "login"),
            name=optional_str(raw, "name"),
            email=optional_str(raw, "email"),
            contributions=optional_int(raw, "contributions"),
        )

    def normalize_file_change(self, raw: dict[str, Any]) -> CanonicalFileChange:
        status = _FILE_STATUS_MAP.get(raw.get("status") or "", FileChangeStatus.MODIFIED)
        return CanonicalFileChange(
            filename=str(self._require(raw, "filename", entity="file")),
            status=status,
            previous_filename=optional_str(raw, "previous_filename"),
            additions=optional_int(raw, "additions"),
            deletions=optional_int(raw, "deletions"),
            patch=optional_str(raw, "patch"),
        )


github_adapter = register_adapter(GitHubAdapter())
