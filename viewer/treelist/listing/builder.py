"""
Listing tree builder.

Rebuilds the folder hierarchy from the flat stream of entry lines.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from treelist.listing.classifier import classify_line
from treelist.listing.errors import StructuralError
from treelist.listing.tree import ROOT_INDEX, ListingNode, ListingTree

logger = logging.getLogger(__name__)

# Entry lines start after the three header lines.
FIRST_ENTRY_LINE = 4


class TreeBuilder:
    """
    Attaches classified entries to a ListingTree one at a time.

    Entries carry no parent reference, only a depth, so the builder keeps
    a cursor node and a cursor depth and picks the parent from the
    difference between the entry depth and the cursor depth.

    The cursor depth is not advanced when an entry is attached directly
    under the cursor. The second level below a node therefore always
    shows up as a jump of two, and the builder finds that node again
    through ``last_child``.
    """

    def __init__(self, tree: ListingTree) -> None:
        self.tree = tree
        self.cursor = ROOT_INDEX
        self.cursor_depth = 0

    def add_entry(self, depth: int, label: str, line_number: int, line: str) -> ListingNode:
        """
        Attach one entry to the tree.

        Args:
            depth: Entry depth from the classifier
            label: Entry label from the classifier
            line_number: 1-based line number, for error reporting
            line: Raw line text, for error reporting

        Returns:
            The node created for the entry

        Raises:
            StructuralError: If the required parent or sibling is missing
        """
        delta = depth - self.cursor_depth

        if delta == 1:
            pass
        elif delta == 2:
            last = self.tree.last_child(self.cursor)
            if last is None:
                raise StructuralError("no previous entry to descend into", line_number, line)
            logger.debug("line %d: descend into #%d", line_number, last.index)
            self.cursor = last.index
            self.cursor_depth = depth - 1
        elif delta == 0:
            self._ascend(line_number, line)
            self.cursor_depth = depth - 1
        else:
            while True:
                self._ascend(line_number, line)
                self.cursor_depth -= 1
                if self.cursor_depth == depth - 1:
                    break

        return self.tree.add_node(label, depth, self.cursor)

    def _ascend(self, line_number: int, line: str) -> None:
        parent = self.tree.node(self.cursor).parent
        if parent is None:
            raise StructuralError("no parent entry to return to", line_number, line)
        logger.debug("line %d: ascend from #%d to #%d", line_number, self.cursor, parent)
        self.cursor = parent

    def add_line(self, line: str, line_number: int) -> ListingNode:
        """Classify a raw entry line and attach it."""
        depth, label = classify_line(line)
        return self.add_entry(depth, label, line_number, line)

    @staticmethod
    def build(
        root_label: str | None,
        lines: Iterable[str],
        first_line_number: int = FIRST_ENTRY_LINE,
    ) -> ListingTree:
        """
        Build a complete tree from entry lines.

        Empty lines are skipped but still counted for line numbers.

        Args:
            root_label: Label for the root node (the volume tag)
            lines: Entry lines without line terminators
            first_line_number: Line number of the first entry line

        Returns:
            The finished ListingTree
        """
        tree = ListingTree(root_label)
        builder = TreeBuilder(tree)
        for line_number, line in enumerate(lines, start=first_line_number):
            if not line:
                continue
            builder.add_line(line, line_number)
        return tree
