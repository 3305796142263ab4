"""
Listing tree data structures.

Nodes live in a flat arena owned by ``ListingTree`` and refer to each
other by index, so parent links never form reference cycles.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, NamedTuple

ROOT_INDEX = 0


@dataclass
class ListingNode:
    """
    A single folder in a reconstructed listing.

    Attributes:
    - index: Stable position of the node in its tree's arena
    - label: Folder name (the root holds the volume tag)
    - depth: Nesting level as read from the listing, root = 0
    - parent: Index of the parent node, None for the root
    - children: Child indices in order of appearance
    """

    index: int
    label: str | None
    depth: int
    parent: int | None = None
    children: list[int] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return not self.children

    def __repr__(self) -> str:
        """String representation for debugging."""
        label_preview = (self.label or "<unlabelled>")[:40]
        return (
            f"<ListingNode #{self.index} '{label_preview}' "
            f"depth={self.depth} children={len(self.children)}>"
        )


class OutlineEntry(NamedTuple):
    """One step of a depth-first walk over a ListingTree."""

    index: int
    depth: int
    label: str | None
    has_children: bool


class OutlineWalk:
    """
    Lazy pre-order walk of a subtree.

    Iterating yields OutlineEntry tuples; every call to ``iter()`` starts
    a fresh walk, so the same object can be traversed repeatedly.
    """

    def __init__(self, tree: ListingTree, start: int = ROOT_INDEX) -> None:
        self._tree = tree
        self._start = start

    def __iter__(self) -> Iterator[OutlineEntry]:
        nodes = self._tree.nodes
        stack = [self._start]
        while stack:
            node = nodes[stack.pop()]
            yield OutlineEntry(node.index, node.depth, node.label, bool(node.children))
            stack.extend(reversed(node.children))


class ListingTree:
    """
    Arena of ListingNodes forming a single rooted tree.

    Nodes are only ever appended; index 0 is always the root.
    """

    def __init__(self, root_label: str | None) -> None:
        self.nodes: list[ListingNode] = [
            ListingNode(index=ROOT_INDEX, label=root_label, depth=0)
        ]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_node(self, label: str | None, depth: int, parent: int) -> ListingNode:
        """
        Append a node as the last child of ``parent``.

        Args:
            label: Folder name
            depth: Depth as reported by the listing
            parent: Index of an existing node

        Returns:
            The newly created node
        """
        node = ListingNode(index=len(self.nodes), label=label, depth=depth, parent=parent)
        self.nodes[parent].children.append(node.index)
        self.nodes.append(node)
        return node

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def root(self) -> ListingNode:
        return self.nodes[ROOT_INDEX]

    def node(self, index: int) -> ListingNode:
        """Get a node by index, raising IndexError for unknown indices."""
        if index < 0 or index >= len(self.nodes):
            raise IndexError(f"No node with index {index}")
        return self.nodes[index]

    def children(self, index: int) -> list[ListingNode]:
        """Get the children of a node in input order."""
        return [self.nodes[i] for i in self.node(index).children]

    def parent(self, index: int) -> ListingNode | None:
        """Get the parent of a node, or None for the root."""
        parent = self.node(index).parent
        return None if parent is None else self.nodes[parent]

    def last_child(self, index: int) -> ListingNode | None:
        """Get the most recently attached child of a node."""
        children = self.node(index).children
        return self.nodes[children[-1]] if children else None

    def find_child(self, index: int, label: str) -> ListingNode | None:
        """Find the first child of a node with the given label."""
        for child in self.children(index):
            if child.label == label:
                return child
        return None

    def child_count(self, index: int) -> int:
        return len(self.node(index).children)

    def path_of(self, index: int) -> str:
        """
        Get the labels from the root down to a node.

        Example: "X:\\folder4\\folder4a"
        """
        parts: list[str] = []
        current: ListingNode | None = self.node(index)
        while current is not None:
            if current.label:
                parts.append(current.label)
            current = self.parent(current.index)
        parts.reverse()
        if len(parts) > 1 and parts[0].endswith("\\"):
            return parts[0] + "\\".join(parts[1:])
        return "\\".join(parts)

    def iter_outline(self, start: int = ROOT_INDEX) -> OutlineWalk:
        """Walk the subtree under ``start`` in pre-order without recursion."""
        self.node(start)
        return OutlineWalk(self, start)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def max_depth(self) -> int:
        return max(node.depth for node in self.nodes)

    @property
    def leaf_count(self) -> int:
        """Count leaf nodes, excluding a root without children."""
        return sum(1 for node in self.nodes[1:] if node.is_leaf)

    def get_statistics(self) -> dict[str, Any]:
        """Get tree statistics for display."""
        depths = Counter(node.depth for node in self.nodes[1:])
        return {
            "total_nodes": len(self.nodes),
            "folder_count": len(self.nodes) - 1,
            "leaf_nodes": self.leaf_count,
            "max_depth": self.max_depth,
            "depth_distribution": dict(sorted(depths.items())),
        }

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_dict(self, index: int = ROOT_INDEX) -> dict[str, Any]:
        """
        Convert a subtree to nested dictionaries for JSON export.

        Built with an explicit stack so deep listings do not hit the
        recursion limit.
        """

        def shell(node: ListingNode) -> dict[str, Any]:
            return {
                "index": node.index,
                "label": node.label,
                "depth": node.depth,
                "children": [],
            }

        result = shell(self.node(index))
        stack = [(self.nodes[index], result)]
        while stack:
            node, data = stack.pop()
            for child in self.children(node.index):
                child_data = shell(child)
                data["children"].append(child_data)
                stack.append((child, child_data))
        return result

    def to_flat(self) -> list[dict[str, Any]]:
        """Export every node as a flat record in arena order.

        Nodes reference each other by index, so the result has constant
        nesting depth however deep the listing is.
        """
        return [
            {
                "index": node.index,
                "label": node.label,
                "depth": node.depth,
                "parent": node.parent,
                "children": list(node.children),
            }
            for node in self.nodes
        ]

    def format_tree(self) -> str:
        """Dump labelled nodes one per line as "+<dashes> label"."""
        lines = [
            f"+{'--' * entry.depth} {entry.label}"
            for entry in self.iter_outline()
            if entry.label is not None
        ]
        return "".join(f"{line}\n" for line in lines)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<ListingTree root='{self.root.label}' "
            f"nodes={len(self.nodes)} depth={self.max_depth}>"
        )
