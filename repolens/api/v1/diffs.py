"""Parsed diff endpoints for commits and change requests."""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Query

from repolens.api.deps import Provider
from repolens.services.diff import DiffViewMode, parse_patch, render_view
from repolens.services.providers import ChangeSet

router = APIRouter(prefix="/providers/{provider}", tags=["diffs"])


def _render_changes(changes: ChangeSet, view: DiffViewMode) -> dict[str, Any]:
    files = []
    for change in changes.files:
        # Binary and oversized files come without a patch
        rows = render_view(parse_patch(change.patch or ""), view)
        files.append(
            {
                "filename": change.filename,
                "previous_filename": change.previous_filename,
                "status": change.status,
                "additions": change.additions,
                "deletions": change.deletions,
                "has_patch": change.patch is not None,
                "rows": [asdict(row) for row in rows],
            }
        )
    return {
        "view": view.value,
        "files": files,
        "total_additions": changes.total_additions,
        "total_deletions": changes.total_deletions,
    }


@router.get("/repos/{owner}/{repo}/commits/{sha}/diff")
async def get_commit_diff(
    owner: str,
    repo: str,
    sha: str,
    service: Provider,
    view: DiffViewMode = Query(DiffViewMode.UNIFIED),
) -> dict[str, Any]:
    changes = await service.get_commit_changes(owner, repo, sha)
    return _render_changes(changes, view)


@router.get("/repos/{owner}/{repo}/change-requests/{number}/diff")
async def get_change_request_diff(
    owner: str,
    repo: str,
    number: int,
    service: Provider,
    view: DiffViewMode = Query(DiffViewMode.UNIFIED),
) -> dict[str, Any]:
    changes = await service.get_change_request_changes(owner, repo, number)
    return _render_changes(changes, view)
