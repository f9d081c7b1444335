"""Unit tests for timeline aggregation."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from repolens.services.providers.types import ChangeRequestState
from repolens.services.timeline import (
    ChangeRequestEvent,
    CommitEvent,
    EventFilter,
    FilterValidationError,
    TimelineEventType,
    TimeRange,
    build_timeline,
    resolve_time_range,
)
from tests.helpers.factories import make_change_request, make_commit, utc

NOW = utc(2024, 3, 31, 12)


# ═══════════════════════════════════════════════════════════════════════════
# resolve_time_range
# ═══════════════════════════════════════════════════════════════════════════


class TestResolveTimeRange:
    def test_week_is_seven_days(self):
        since, until = resolve_time_range(TimeRange.WEEK, NOW)

        assert until == NOW
        assert since == NOW - timedelta(days=7)

    def test_month_clamps_to_last_day(self):
        since, _ = resolve_time_range("month", NOW)

        # 2024-02 has 29 days
        assert since == utc(2024, 2, 29, 12)

    def test_year_from_leap_day(self):
        since, _ = resolve_time_range("year", utc(2024, 2, 29))

        assert since == utc(2023, 2, 28)

    def test_month_across_year_boundary(self):
        since, _ = resolve_time_range("month", utc(2024, 1, 15))

        assert since == utc(2023, 12, 15)

    def test_all_is_five_years(self):
        since, _ = resolve_time_range("all", NOW)

        assert since == utc(2019, 3, 31, 12)

    def test_naive_now_treated_as_utc(self):
        since, until = resolve_time_range("week", datetime(2024, 3, 31, 12))

        assert until == NOW
        assert since.tzinfo is UTC

    def test_unknown_range_raises(self):
        with pytest.raises(FilterValidationError, match="time range"):
            resolve_time_range("decade", NOW)

    def test_filter_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_time_range("fortnight", NOW)


# ═══════════════════════════════════════════════════════════════════════════
# build_timeline
# ═══════════════════════════════════════════════════════════════════════════


class TestBuildTimeline:
    """Filtering, windowing, and ordering of merged events."""

    def test_commit_event_fields(self):
        commit = make_commit(
            sha="abc", message="Title line\n\nBody text", date=utc(2024, 3, 30), additions=3
        )

        [event] = build_timeline([commit], [], "commits", "week", now=NOW)

        assert isinstance(event, CommitEvent)
        assert event.id == "abc"
        assert event.sha == "abc"
        assert event.title == "Title line"
        assert event.description == "\nBody text"
        assert event.additions == 3
        assert event.event_type is TimelineEventType.COMMIT

    def test_commit_without_body_gets_placeholder(self):
        commit = make_commit(message="Only title", date=utc(2024, 3, 30))

        [event] = build_timeline([commit], [], "all", "week", now=NOW)

        assert event.description == "No description provided"

    def test_merge_filter_includes_closed_state_with_merged_at(self):
        merged = make_change_request(
            number=1,
            created_at=utc(2024, 3, 20),
            merged_at=utc(2024, 3, 25),
            state=ChangeRequestState.CLOSED,
        )
        unmerged = make_change_request(
            number=2, created_at=utc(2024, 3, 21), state=ChangeRequestState.CLOSED
        )

        events = build_timeline([], [merged, unmerged], EventFilter.MERGES, "month", now=NOW)

        assert [e.id for e in events] == ["pr-1"]
        assert events[0].event_type is TimelineEventType.MERGE
        assert events[0].date == utc(2024, 3, 25)

    def test_pull_requests_filter_excludes_merged(self):
        merged = make_change_request(
            number=1, created_at=utc(2024, 3, 20), merged_at=utc(2024, 3, 22)
        )
        open_cr = make_change_request(number=2, created_at=utc(2024, 3, 21))

        events = build_timeline([], [merged, open_cr], "pull_requests", "month", now=NOW)

        assert [e.id for e in events] == ["pr-2"]
        assert isinstance(events[0], ChangeRequestEvent)
        assert events[0].number == 2

    def test_commits_filter_drops_change_requests(self):
        events = build_timeline(
            [make_commit(date=utc(2024, 3, 30))],
            [make_change_request(created_at=utc(2024, 3, 30))],
            "commits",
            "week",
            now=NOW,
        )

        assert [e.event_type for e in events] == [TimelineEventType.COMMIT]

    def test_change_request_windowed_on_creation_date(self):
        # Created before the window, merged inside it
        cr = make_change_request(created_at=utc(2024, 1, 1), merged_at=utc(2024, 3, 30))

        assert build_timeline([], [cr], "all", "week", now=NOW) == []

    def test_range_bounds_are_inclusive(self):
        since, _ = resolve_time_range("week", NOW)
        at_start = make_commit(sha="start", date=since)
        at_end = make_commit(sha="end", date=NOW)
        outside = make_commit(sha="old", date=since - timedelta(seconds=1))

        events = build_timeline([at_start, at_end, outside], [], "commits", "week", now=NOW)

        assert [e.id for e in events] == ["end", "start"]

    def test_sorted_newest_first(self):
        commits = [
            make_commit(sha="a", date=utc(2024, 3, 28)),
            make_commit(sha="b", date=utc(2024, 3, 30)),
        ]
        crs = [make_change_request(number=5, created_at=utc(2024, 3, 29))]

        events = build_timeline(commits, crs, "all", "week", now=NOW)

        assert [e.id for e in events] == ["b", "pr-5", "a"]

    def test_equal_dates_keep_commits_first(self):
        same = utc(2024, 3, 30)
        events = build_timeline(
            [make_commit(sha="c", date=same)],
            [make_change_request(number=9, created_at=same)],
            "all",
            "week",
            now=NOW,
        )

        assert [e.id for e in events] == ["c", "pr-9"]

    def test_long_body_truncated_to_preview(self):
        cr = make_change_request(created_at=utc(2024, 3, 30), body="x" * 200)

        [event] = build_timeline([], [cr], "all", "week", now=NOW)

        assert event.description == "x" * 150 + "..."

    def test_body_at_limit_not_truncated(self):
        cr = make_change_request(created_at=utc(2024, 3, 30), body="y" * 150)

        [event] = build_timeline([], [cr], "all", "week", now=NOW)

        assert event.description == "y" * 150

    def test_missing_body_gets_placeholder(self):
        cr = make_change_request(created_at=utc(2024, 3, 30), body=None)

        [event] = build_timeline([], [cr], "all", "week", now=NOW)

        assert event.description == "No description provided"

    def test_naive_now_compares_with_aware_dates(self):
        commit = make_commit(date=utc(2024, 1, 20))
        cr = make_change_request(created_at=utc(2024, 1, 25))

        events = build_timeline([commit], [cr], "all", "month", now=datetime(2024, 2, 1))

        assert [e.id for e in events] == ["pr-1", "c1"]

    def test_unknown_filter_raises(self):
        with pytest.raises(FilterValidationError, match="event filter"):
            build_timeline([], [], "issues", "week", now=NOW)

    def test_ids_unique_across_kinds(self):
        events = build_timeline(
            [make_commit(sha="1", date=utc(2024, 3, 30))],
            [make_change_request(number=1, created_at=utc(2024, 3, 30))],
            "all",
            "week",
            now=NOW,
        )

        assert len({e.id for e in events}) == 2
