"""Per-node expand/collapse flags kept apart from the tree itself."""

from __future__ import annotations

from treelist.listing.tree import ListingTree


class DisplayState:
    """
    Expand flags for the nodes of one ListingTree, keyed by node index.

    Every node starts collapsed. Only the rendering layer reads or
    writes these flags.
    """

    def __init__(self, tree: ListingTree) -> None:
        self._tree = tree
        self._expanded: set[int] = set()

    def is_expanded(self, index: int) -> bool:
        return index in self._expanded

    def set_expanded(self, index: int, expanded: bool) -> None:
        """Set the flag for one node, raising IndexError for unknown nodes."""
        self._tree.node(index)
        if expanded:
            self._expanded.add(index)
        else:
            self._expanded.discard(index)

    def toggle(self, index: int) -> bool:
        """Flip the flag for one node and return its new value."""
        expanded = not self.is_expanded(index)
        self.set_expanded(index, expanded)
        return expanded

    def expand_all(self) -> None:
        self._expanded = {node.index for node in self._tree.nodes}

    def collapse_all(self) -> None:
        self._expanded.clear()

    @property
    def expanded_indices(self) -> list[int]:
        """Indices of expanded nodes in ascending order."""
        return sorted(self._expanded)
