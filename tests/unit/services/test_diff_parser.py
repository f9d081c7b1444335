"""Unit tests for the unified-diff hunk parser."""

from __future__ import annotations

import logging

from repolens.services.diff import DiffLine, DiffLineKind, parse_patch
from repolens.services.diff.parser import split_patch_lines

ADDED = DiffLineKind.ADDED
REMOVED = DiffLineKind.REMOVED
CONTEXT = DiffLineKind.CONTEXT
HEADER = DiffLineKind.HUNK_HEADER


# ═══════════════════════════════════════════════════════════════════════════
# split_patch_lines
# ═══════════════════════════════════════════════════════════════════════════


class TestSplitPatchLines:
    def test_empty_text_has_no_lines(self):
        assert split_patch_lines("") == []

    def test_trailing_newline_is_not_a_line(self):
        assert split_patch_lines("a\nb\n") == ["a", "b"]

    def test_crlf_is_normalized(self):
        assert split_patch_lines("a\r\nb\r\n") == ["a", "b"]

    def test_interior_blank_lines_kept(self):
        assert split_patch_lines("a\n\nb") == ["a", "", "b"]


# ═══════════════════════════════════════════════════════════════════════════
# parse_patch
# ═══════════════════════════════════════════════════════════════════════════


class TestParsePatch:
    """Line classification and old/new numbering."""

    def test_single_hunk_example(self):
        patch = "@@ -1,2 +1,3 @@\n context\n-old\n+new1\n+new2"

        assert parse_patch(patch) == [
            DiffLine(HEADER, None, None, "@@ -1,2 +1,3 @@"),
            DiffLine(CONTEXT, 1, 1, "context"),
            DiffLine(REMOVED, 2, None, "old"),
            DiffLine(ADDED, None, 2, "new1"),
            DiffLine(ADDED, None, 3, "new2"),
        ]

    def test_empty_patch_yields_nothing(self):
        assert parse_patch("") == []

    def test_output_length_matches_input_lines(self):
        patch = (
            "diff --git a/x b/x\n"
            "--- a/x\n"
            "+++ b/x\n"
            "@@ -10,3 +10,4 @@ def main():\n"
            " a\n"
            "-b\n"
            "+c\n"
            "+d\n"
            " e\n"
            "@@ -40 +41 @@\n"
            "-f\n"
            "+g\n"
        )

        assert len(parse_patch(patch)) == len(split_patch_lines(patch))

    def test_second_hunk_resets_counters(self):
        patch = "@@ -1,1 +1,1 @@\n-a\n+b\n@@ -20,2 +30,2 @@\n x\n y"

        lines = parse_patch(patch)

        assert lines[-2] == DiffLine(CONTEXT, 20, 30, "x")
        assert lines[-1] == DiffLine(CONTEXT, 21, 31, "y")

    def test_final_new_number_is_start_plus_added_and_context(self):
        patch = "@@ -5,3 +7,4 @@\n one\n+two\n-three\n four\n+five"

        numbered = [line.new_line_number for line in parse_patch(patch) if line.new_line_number]

        # start 7, then 4 added/context lines
        assert numbered[-1] == 7 - 1 + 4

    def test_header_with_omitted_counts(self):
        lines = parse_patch("@@ -3 +4 @@\n same")

        assert lines[1] == DiffLine(CONTEXT, 3, 4, "same")

    def test_section_heading_after_header_is_kept_in_text(self):
        lines = parse_patch("@@ -1,1 +1,1 @@ class Foo:\n x")

        assert lines[0].kind == HEADER
        assert lines[0].text == "@@ -1,1 +1,1 @@ class Foo:"

    def test_file_headers_before_first_hunk_are_context(self):
        lines = parse_patch("--- a/f.py\n+++ b/f.py\n@@ -1 +1 @@\n-x\n+y")

        assert [line.kind for line in lines] == [CONTEXT, CONTEXT, HEADER, REMOVED, ADDED]
        assert lines[0].text == "--- a/f.py"

    def test_double_dash_content_inside_hunk_is_removed_line(self):
        lines = parse_patch("@@ -1,2 +1,1 @@\n--- a heading underline\n ok")

        assert lines[1] == DiffLine(REMOVED, 1, None, "-- a heading underline")
        assert lines[2] == DiffLine(CONTEXT, 2, 1, "ok")

    def test_diff_git_line_starts_new_preamble(self):
        patch = (
            "@@ -1 +1 @@\n-a\n+b\n"
            "diff --git a/two b/two\n"
            "--- a/two\n"
            "+++ b/two\n"
            "@@ -1 +1 @@\n-c\n+d"
        )

        kinds = [line.kind for line in parse_patch(patch)]

        assert kinds[3:6] == [CONTEXT, CONTEXT, CONTEXT]

    def test_no_newline_marker_is_context(self):
        lines = parse_patch("@@ -1 +1 @@\n-a\n\\ No newline at end of file\n+b")

        assert lines[2].kind == CONTEXT
        assert lines[2].text == "\\ No newline at end of file"

    def test_malformed_header_keeps_counters_and_logs(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="repolens.services.diff.parser"):
            lines = parse_patch("@@ -1 +1 @@\n x\n@@ garbage @@\n y")

        assert lines[2].kind == HEADER
        assert lines[3] == DiffLine(CONTEXT, 2, 2, "y")
        assert "Unparseable hunk header" in caplog.text

    def test_lines_without_header_still_numbered(self):
        lines = parse_patch("+a\n b")

        assert lines == [DiffLine(ADDED, None, 1, "a"), DiffLine(CONTEXT, 1, 2, "b")]

    def test_reparsing_gives_equal_result(self):
        patch = "@@ -1,2 +1,2 @@\n a\n-b\n+c"

        assert parse_patch(patch) == parse_patch(patch)
