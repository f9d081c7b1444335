"""GitLab REST (v4) schema adapter."""

from typing import Any

from repolens.services.providers.base import ProviderAdapter, register_adapter
from repolens.services.providers.exceptions import ProviderSchemaError
from repolens.services.providers.payload import (
    dig,
    first_present,
    optional_int,
    optional_str,
    optional_timestamp,
    parse_timestamp,
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

_MR_STATE_MAP: dict[str, ChangeRequestState] = {
    "opened": ChangeRequestState.OPEN,
    "locked": ChangeRequestState.OPEN,
    "closed": ChangeRequestState.CLOSED,
    "merged": ChangeRequestState.MERGED,
}


class GitLabAdapter(ProviderAdapter):
    """Maps GitLab v4 REST payloads to canonical entities.

    Merge requests are identified by the project-scoped ``iid`` (``id`` is
    instance-wide). The MR list endpoint carries no line stats; they stay
    absent rather than being backfilled.
    """

    kind = ProviderKind.GITLAB

    def _require(self, raw: Any, *path: str, entity: str) -> Any:
        return require(raw, *path, provider=self.kind.value, entity=entity)

    def _require_int(self, raw: Any, *path: str, entity: str) -> int:
        return require_int(raw, *path, provider=self.kind.value, entity=entity)

    def normalize_repo(self, raw: dict[str, Any]) -> CanonicalRepo:
        name = str(self._require(raw, "name", entity="project"))
        full_name = optional_str(raw, "path_with_namespace")
        owner = optional_str(raw, "namespace", "path")
        if owner is None and full_name and "/" in full_name:
            owner = full_name.rsplit("/", 1)[0]
        owner = owner or ""
        return CanonicalRepo(
            provider=self.kind,
            id=str(self._require(raw, "id", entity="project")),
            name=name,
            owner=owner,
            full_name=full_name or f"{owner}/{name}",
            description=optional_str(raw, "description"),
            default_branch=optional_str(raw, "default_branch"),
            url=optional_str(raw, "web_url"),
            is_private=raw.get("visibility", "public") != "public",
        )

    def normalize_commit(self, raw: dict[str, Any]) -> CanonicalCommit:
        date_value = first_present(raw.get("authored_date"), raw.get("created_at"))
        if not date_value:
            raise ProviderSchemaError(self.kind.value, "commit", "authored_date", raw)
        try:
            date = parse_timestamp(str(date_value))
        except ValueError:
            raise ProviderSchemaError(self.kind.value, "commit", "authored_date", raw) from None

        return CanonicalCommit(
            sha=str(self._require(raw, "id", entity="commit")),
            message=first_present(raw.get("message"), raw.get("title"), default=""),
            author=raw.get("author_name") or "Unknown",
            date=date,
            additions=optional_int(raw, "stats", "additions"),
            deletions=optional_int(raw, "stats", "deletions"),
        )

    def normalize_change_request(self, raw: dict[str, Any]) -> CanonicalChangeRequest:
        merged_at = optional_timestamp(raw, "merged_at")
        state = _MR_STATE_MAP.get(raw.get("state") or "", ChangeRequestState.OPEN)
        if merged_at is not None:
            state = ChangeRequestState.MERGED

        return CanonicalChangeRequest(
            number=self._require_int(raw, "iid", entity="merge_request"),
            title=raw.get("title") or "",
            state=state,
            author=first_present(
                dig(raw, "author", "username"),
                dig(raw, "author", "name"),
                default="Unknown",
            ),
            created_at=require_timestamp(
                raw, "created_at", provider=self.kind.value, entity="merge_request"
            ),
            closed_at=optional_timestamp(raw, "closed_at"),
            merged_at=merged_at,
            # GitLab reports "changes_count" as a string, e.g. "12" or "1000+"
            files_changed=optional_int(raw, "changes_count"),
            body=optional_str(raw, "description"),
        )

    def normalize_issue(self, raw: dict[str, Any]) -> CanonicalIssue:
        labels = raw.get("labels") or []
        return CanonicalIssue(
            number=self._require_int(raw, "iid", entity="issue"),
            title=raw.get("title") or "",
            state=IssueState.CLOSED if raw.get("state") == "closed" else IssueState.OPEN,
            body=raw.get("description") or "",
            created_at=require_timestamp(
                raw, "created_at", provider=self.kind.value, entity="issue"
            ),
            updated_at=optional_timestamp(raw, "updated_at"),
            closed_at=optional_timestamp(raw, "closed_at"),
            author=optional_str(raw, "author", "username"),
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
            is_default=bool(raw.get("default", False)),
            protected=protected if isinstance(protected, bool) else None,
            commit_sha=optional_str(raw, "commit", "id"),
        )

    def normalize_contributor(self, raw: dict[str, Any]) -> CanonicalContributor:
        return CanonicalContributor(
            name=optional_str(raw, "name"),
            email=optional_str(raw, "email"),
            contributions=optional_int(raw, "commits"),
        )

    def normalize_file_change(self, raw: dict[str, Any]) -> CanonicalFileChange:
        new_path = raw.get("new_path") or raw.get("old_path")
        if not new_path:
            raise ProviderSchemaError(self.kind.value, "diff", "new_path", raw)

        if raw.get("new_file"):
            status = FileChangeStatus.ADDED
        elif raw.get("deleted_file"):
            status = FileChangeStatus.REMOVED
        elif raw.get("renamed_file"):
            status = FileChangeStatus.RENAMED
        else:
            status = FileChangeStatus.MODIFIED

        return CanonicalFileChange(
            filename=str(new_path),
            status=status,
            previous_filename=(
                optional_str(raw, "old_path") if status is FileChangeStatus.RENAMED else None
            ),
            patch=optional_str(raw, "diff"),
        )


gitlab_adapter = register_adapter(GitLabAdapter())
