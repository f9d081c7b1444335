"""Unified-diff parsing and view projections."""

from repolens.services.diff.parser import parse_patch
from repolens.services.diff.types import DiffLine, DiffLineKind, DiffViewMode, SplitRow, UnifiedRow
from repolens.services.diff.views import (
    new_side_text,
    old_side_text,
    render_view,
    split_view,
    unified_view,
)

__all__ = [
    "parse_patch",
    "render_view",
    "split_view",
    "unified_view",
    "old_side_text",
    "new_side_text",
    "DiffLine",
    "DiffLineKind",
    "DiffViewMode",
    "SplitRow",
    "UnifiedRow",
]
