"""Unit tests for the GitHub schema adapter and provider-tagged normalization."""

from __future__ import annotations

import pytest

from repolens.services.providers import (
    ProviderKind,
    ProviderSchemaError,
    UnsupportedProviderError,
    get_adapter,
    normalize_change_request,
    normalize_commit,
    normalize_issue,
)
from repolens.services.providers.base import normalize_each
from repolens.services.providers.github import github_adapter
from repolens.services.providers.types import ChangeRequestState, FileChangeStatus, IssueState
from tests.helpers.factories import utc
from tests.helpers.payloads import (
    github_commit_detail_json,
    github_commit_json,
    github_file_json,
    github_issue_json,
    github_pr_json,
    github_repo_json,
)


class TestRegistry:
    def test_lookup_by_tag(self):
        assert get_adapter("github") is github_adapter

    def test_unknown_provider_raises(self):
        with pytest.raises(UnsupportedProviderError, match="bitbucket"):
            get_adapter("bitbucket")


# ═══════════════════════════════════════════════════════════════════════════
# Commits
# ═══════════════════════════════════════════════════════════════════════════


class TestNormalizeCommit:
    def test_list_item_has_absent_stats(self):
        commit = normalize_commit(ProviderKind.GITHUB, github_commit_json())

        assert commit.sha == "abc123"
        assert commit.author == "Mona"
        assert commit.date == utc(2024, 1, 2, 10)
        assert commit.title == "Fix parser"
        assert commit.body == "\nHandle empty input"
        assert commit.additions is None
        assert commit.files_changed is None

    def test_detail_item_carries_stats(self):
        commit = normalize_commit("github", github_commit_detail_json(additions=7, deletions=0))

        assert (commit.additions, commit.deletions, commit.files_changed) == (7, 0, 3)

    def test_body_keeps_blank_lines_between_paragraphs(self):
        raw = github_commit_json(message="Title\n\nFirst\n\nSecond\n")

        assert normalize_commit("github", raw).body == "\nFirst\n\nSecond\n"

    def test_author_falls_back_to_login_then_unknown(self):
        raw = github_commit_json()
        raw["commit"]["author"]["name"] = None
        assert normalize_commit("github", raw).author == "mona"

        raw["author"] = None
        assert normalize_commit("github", raw).author == "Unknown"

    def test_missing_date_is_schema_error(self):
        raw = github_commit_json()
        del raw["commit"]["author"]["date"]

        with pytest.raises(ProviderSchemaError) as exc_info:
            normalize_commit("github", raw)

        assert exc_info.value.field == "commit.author.date"
        assert exc_info.value.raw is raw

    def test_normalizing_twice_is_equal(self):
        raw = github_commit_detail_json()

        assert normalize_commit("github", raw) == normalize_commit("github", raw)


# ═══════════════════════════════════════════════════════════════════════════
# Pull requests, issues, files, repos
# ═══════════════════════════════════════════════════════════════════════════


class TestNormalizeChangeRequest:
    def test_closed_with_merged_at_is_merged(self):
        cr = normalize_change_request(
            "github", github_pr_json(state="closed", merged_at="2024-01-05T00:00:00Z")
        )

        assert cr.state is ChangeRequestState.MERGED
        assert cr.merged_at == utc(2024, 1, 5)

    def test_closed_without_merge(self):
        cr = normalize_change_request("github", github_pr_json(state="closed"))

        assert cr.state is ChangeRequestState.CLOSED
        assert not cr.is_merged

    def test_stats_from_detail_fields(self):
        cr = normalize_change_request(
            "github", github_pr_json(additions=5, deletions=1, changed_files=2)
        )

        assert (cr.additions, cr.deletions, cr.files_changed) == (5, 1, 2)

    def test_missing_number_is_schema_error(self):
        raw = github_pr_json()
        del raw["number"]

        with pytest.raises(ProviderSchemaError, match="'number'"):
            normalize_change_request("github", raw)


class TestNormalizeIssue:
    def test_fields(self):
        issue = normalize_issue("github", github_issue_json())

        assert issue.state is IssueState.OPEN
        assert issue.labels == ("bug", "p1")
        assert issue.author == "hubot"

    def test_null_body_becomes_empty_string(self):
        issue = normalize_issue("github", github_issue_json(body=None))

        assert issue.body == ""

    def test_pull_request_items_detected(self):
        assert github_adapter.is_change_request_issue(github_issue_json(pull_request={}))
        assert not github_adapter.is_change_request_issue(github_issue_json())


class TestNormalizeOther:
    def test_repo(self):
        repo = github_adapter.normalize_repo(github_repo_json())

        assert repo.provider is ProviderKind.GITHUB
        assert repo.id == "1296269"
        assert repo.full_name == "octocat/hello"
        assert repo.owner == "octocat"

    def test_renamed_file(self):
        change = github_adapter.normalize_file_change(
            github_file_json(status="renamed", previous_filename="old.py")
        )

        assert change.status is FileChangeStatus.RENAMED
        assert change.previous_filename == "old.py"

    def test_binary_file_has_no_patch(self):
        raw = github_file_json()
        del raw["patch"]

        assert github_adapter.normalize_file_change(raw).patch is None

    def test_contributor(self):
        contributor = github_adapter.normalize_contributor({"login": "mona", "contributions": 9})

        assert contributor.display_name == "mona"
        assert contributor.contributions == 9


class TestNormalizeEach:
    def test_bad_item_skipped_and_reported(self):
        good = github_commit_json(sha="good")
        bad = github_commit_json()
        del bad["sha"]

        items, errors = normalize_each([good, bad], github_adapter.normalize_commit)

        assert [c.sha for c in items] == ["good"]
        assert len(errors) == 1
        assert errors[0].raw is bad

    def test_non_integer_number_skipped_not_raised(self):
        good = github_pr_json(number=1)
        bad = github_pr_json(number="n/a")

        items, errors = normalize_each([good, bad], github_adapter.normalize_change_request)

        assert [cr.number for cr in items] == [1]
        assert errors[0].field == "number"
        assert errors[0].raw is bad

    def test_numeric_string_number_accepted(self):
        issue = github_adapter.normalize_issue(github_issue_json(number="12"))

        assert issue.number == 12
