"""API endpoint tests for parsed diff routes."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from repolens.services.providers.types import CanonicalFileChange, ChangeSet, FileChangeStatus

BASE = "/api/v1/providers/github/repos/octo/hello"
PATCH = "@@ -1,2 +1,3 @@\n context\n-old\n+new1\n+new2"


def _changes(patch: str | None = PATCH) -> ChangeSet:
    return ChangeSet(
        files=[
            CanonicalFileChange(
                filename="src/app.py",
                status=FileChangeStatus.MODIFIED,
                additions=2,
                deletions=1,
                patch=patch,
            )
        ]
    )


class TestCommitDiff:
    @pytest.mark.anyio
    async def test_unified_by_default(self, api_client: AsyncClient, mock_service):
        mock_service.get_commit_changes.return_value = _changes()

        response = await api_client.get(f"{BASE}/commits/abc/diff")

        assert response.status_code == 200
        body = response.json()
        assert body["view"] == "unified"
        rows = body["files"][0]["rows"]
        assert [r["marker"] for r in rows] == ["", " ", "-", "+", "+"]
        assert rows[4]["new_line_number"] == 3
        assert body["total_additions"] == 2
        mock_service.get_commit_changes.assert_awaited_once_with("octo", "hello", "abc")

    @pytest.mark.anyio
    async def test_split_view(self, api_client: AsyncClient, mock_service):
        mock_service.get_commit_changes.return_value = _changes()

        response = await api_client.get(f"{BASE}/commits/abc/diff", params={"view": "split"})

        rows = response.json()["files"][0]["rows"]
        assert rows[2]["old_text"] == "old"
        assert rows[2]["new_text"] is None

    @pytest.mark.anyio
    async def test_file_without_patch(self, api_client: AsyncClient, mock_service):
        mock_service.get_commit_changes.return_value = _changes(patch=None)

        response = await api_client.get(f"{BASE}/commits/abc/diff")

        file = response.json()["files"][0]
        assert file["has_patch"] is False
        assert file["rows"] == []

    @pytest.mark.anyio
    async def test_invalid_view_is_422(self, api_client: AsyncClient, mock_service):
        response = await api_client.get(f"{BASE}/commits/abc/diff", params={"view": "sideways"})

        assert response.status_code == 422


class TestChangeRequestDiff:
    @pytest.mark.anyio
    async def test_change_request_diff(self, api_client: AsyncClient, mock_service):
        mock_service.get_change_request_changes.return_value = _changes()

        response = await api_client.get(
            f"{BASE}/change-requests/7/diff", params={"view": "split"}
        )

        assert response.status_code == 200
        assert response.json()["view"] == "split"
        mock_service.get_change_request_changes.assert_awaited_once_with("octo", "hello", 7)
