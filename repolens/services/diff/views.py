"""Split and unified projections over a parsed patch.

Both are pure functions of the DiffLine sequence; switching view mode never
re-parses the patch.
"""

from collections.abc import Sequence

from repolens.services.diff.types import (
    DiffLine,
    DiffLineKind,
    DiffViewMode,
    SplitRow,
    UnifiedRow,
)

_MARKERS: dict[DiffLineKind, str] = {
    DiffLineKind.ADDED: "+",
    DiffLineKind.REMOVED: "-",
    DiffLineKind.CONTEXT: " ",
    DiffLineKind.HUNK_HEADER: "",
}


def split_view(lines: Sequence[DiffLine]) -> list[SplitRow]:
    """Side-by-side rows.

    The old side shows content for every line that is not an addition, the
    new side for every line that is not a removal, so pure insertions and
    deletions leave a blank cell opposite them.
    """
    return [
        SplitRow(
            kind=line.kind,
            old_line_number=line.old_line_number,
            old_text=line.text if line.kind != DiffLineKind.ADDED else None,
            new_line_number=line.new_line_number,
            new_text=line.text if line.kind != DiffLineKind.REMOVED else None,
        )
        for line in lines
    ]


def unified_view(lines: Sequence[DiffLine]) -> list[UnifiedRow]:
    """One row per line with both line-number columns."""
    return [
        UnifiedRow(
            kind=line.kind,
            old_line_number=line.old_line_number,
            new_line_number=line.new_line_number,
            marker=_MARKERS[line.kind],
            text=line.text,
        )
        for line in lines
    ]


def render_view(
    lines: Sequence[DiffLine],
    mode: DiffViewMode | str,
) -> list[SplitRow] | list[UnifiedRow]:
    if DiffViewMode(mode) is DiffViewMode.SPLIT:
        return split_view(lines)
    return unified_view(lines)


def old_side_text(lines: Sequence[DiffLine]) -> list[str]:
    """Content of the old file version covered by the patch, in order."""
    return [
        row.old_text
        for row in split_view(lines)
        if row.old_text is not None and row.kind != DiffLineKind.HUNK_HEADER
    ]


def new_side_text(lines: Sequence[DiffLine]) -> list[str]:
    """Content of the new file version covered by the patch, in order."""
    return [
        row.new_text
        for row in split_view(lines)
        if row.new_text is not None and row.kind != DiffLineKind.HUNK_HEADER
    ]
