"""Unified-diff hunk parser.

Turns the patch text a provider returns for one file into typed lines with
old/new line numbers. Parsing is total: malformed input degrades to
numerically unreliable but structurally valid output instead of raising.
"""

import logging
import re

from repolens.services.diff.types import DiffLine, DiffLineKind

logger = logging.getLogger(__name__)

# @@ -a,b +c,d @@ optional section heading; the ",b"/",d" counts may be omitted
HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,\d+)? \+(\d+)(?:,\d+)? @@")


def split_patch_lines(patch_text: str) -> list[str]:
    """Split patch text into lines.

    A single trailing newline does not produce an extra empty line, and CRLF
    endings are normalized.
    """
    if not patch_text:
        return []
    lines = patch_text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_patch(patch_text: str) -> list[DiffLine]:
    """
    Parse unified-diff patch text into DiffLines.

    Counters start at 0 and are reset by each hunk header to one less than the
    header's start lines. Added lines advance only the new counter, removed
    lines only the old one, and everything else advances both.

    "+++"/"---" file headers before the first hunk are emitted as context
    lines; inside a hunk they are ordinary added/removed lines whose content
    happens to start with "++"/"--".

    Args:
        patch_text: Patch for one file (may be empty or malformed)

    Returns:
        One DiffLine per input line, in order
    """
    diff_lines: list[DiffLine] = []
    old_line = 0
    new_line = 0
    in_hunk = False

    for line in split_patch_lines(patch_text):
        if line.startswith("@@"):
            match = HUNK_HEADER_RE.match(line)
            if match:
                old_line = int(match.group(1)) - 1
                new_line = int(match.group(2)) - 1
            else:
                logger.debug(f"Unparseable hunk header, keeping counters: {line!r}")
            in_hunk = True
            diff_lines.append(DiffLine(DiffLineKind.HUNK_HEADER, None, None, line))
            continue

        if line.startswith("diff --git "):
            # Next file of a multi-file patch; its header preamble follows
            in_hunk = False

        is_file_header = not in_hunk and (line.startswith("+++") or line.startswith("---"))

        if line.startswith("+") and not is_file_header:
            new_line += 1
            diff_lines.append(DiffLine(DiffLineKind.ADDED, None, new_line, line[1:]))
        elif line.startswith("-") and not is_file_header:
            old_line += 1
            diff_lines.append(DiffLine(DiffLineKind.REMOVED, old_line, None, line[1:]))
        else:
            old_line += 1
            new_line += 1
            text = line[1:] if line.startswith(" ") else line
            diff_lines.append(DiffLine(DiffLineKind.CONTEXT, old_line, new_line, text))

    return diff_lines
