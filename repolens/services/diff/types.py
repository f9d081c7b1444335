"""Data types for parsed diffs and their rendered projections."""

from dataclasses import dataclass
from enum import StrEnum


class DiffLineKind(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"
    HUNK_HEADER = "hunk_header"


class DiffViewMode(StrEnum):
    SPLIT = "split"
    UNIFIED = "unified"


@dataclass(frozen=True)
class DiffLine:
    """One line of a parsed patch. Identity is its position in the sequence."""

    kind: DiffLineKind
    old_line_number: int | None
    new_line_number: int | None
    text: str


@dataclass(frozen=True)
class SplitRow:
    """Side-by-side row: old side blank for insertions, new side blank for deletions."""

    kind: DiffLineKind
    old_line_number: int | None
    old_text: str | None
    new_line_number: int | None
    new_text: str | None


@dataclass(frozen=True)
class UnifiedRow:
    """Line-by-line row with both number columns and a +/-/space marker."""

    kind: DiffLineKind
    old_line_number: int | None
    new_line_number: int | None
    marker: str
    text: str
