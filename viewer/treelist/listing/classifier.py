"""
Depth classification for listing entry lines.

Each entry is a run of 4-character indentation tokens followed by the
entry label. The number of tokens is the entry's depth.
"""

from __future__ import annotations

BRANCH_CONTINUE = "+---"
BRANCH_LAST = "\\---"
ANCESTOR_PENDING = "|   "
ANCESTOR_DONE = "    "

INDENT_TOKENS = frozenset(
    {BRANCH_CONTINUE, BRANCH_LAST, ANCESTOR_PENDING, ANCESTOR_DONE}
)
TOKEN_WIDTH = 4


def classify_line(line: str) -> tuple[int, str]:
    """Split an entry line into (depth, label).

    Tokens are matched purely by their 4-character form, so a label that
    itself starts with e.g. four spaces loses them to the depth count.

    Examples:
    "+---folder1" -> (1, "folder1")
    "|   \\---folder1a" -> (2, "folder1a")
    "plain" -> (0, "plain")
    """
    depth = 0
    offset = 0
    while line[offset : offset + TOKEN_WIDTH] in INDENT_TOKENS:
        offset += TOKEN_WIDTH
        depth += 1
    return depth, line[offset:]
