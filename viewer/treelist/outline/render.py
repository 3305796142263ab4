"""
Collapsible outline rendering.

Turns a ListingTree plus its DisplayState into the rows a front-end
shows: header fields first, then one toggle row per visible node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from treelist.listing.header import VolumeHeader
from treelist.listing.tree import ROOT_INDEX, ListingTree
from treelist.outline.display import DisplayState

INDENT = "  "


@dataclass
class OutlineRow:
    """A visible, labelled node bound to its expand flag."""

    index: int
    depth: int
    label: str
    has_children: bool
    expanded: bool

    @property
    def marker(self) -> str:
        """Toggle glyph: "[-]" open, "[+]" closed, "[ ]" leaf."""
        if not self.has_children:
            return "[ ]"
        return "[-]" if self.expanded else "[+]"

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "depth": self.depth,
            "label": self.label,
            "has_children": self.has_children,
            "expanded": self.expanded,
        }


@dataclass
class RenderedOutline:
    """Header text plus the rows visible under the current flags."""

    header: VolumeHeader
    rows: list[OutlineRow] = field(default_factory=list)

    @property
    def header_lines(self) -> list[str]:
        return [
            f"Volume Name: {self.header.volume_name}",
            f"Volume Serial Number: {self.header.serial_number}",
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "header": self.header.to_dict(),
            "rows": [row.to_dict() for row in self.rows],
        }


def render(
    tree: ListingTree,
    header: VolumeHeader,
    display: DisplayState,
    start: int = ROOT_INDEX,
) -> RenderedOutline:
    """Collect the visible rows of a tree.

    A labelled node always produces a row; its children are visited only
    when its flag is set. A node without a label produces no row and its
    children are visited regardless.

    Args:
        tree: Tree to render.
        header: Volume header shown above the rows.
        display: Expand flags for the tree's nodes.
        start: Index of the node to start from.

    Returns:
        RenderedOutline with rows in display order.
    """
    outline = RenderedOutline(header=header)
    stack = [tree.node(start)]
    while stack:
        node = stack.pop()
        if node.label is not None:
            expanded = display.is_expanded(node.index)
            outline.rows.append(
                OutlineRow(
                    index=node.index,
                    depth=node.depth,
                    label=node.label,
                    has_children=bool(node.children),
                    expanded=expanded,
                )
            )
            if not expanded:
                continue
        stack.extend(reversed(tree.children(node.index)))
    return outline


def render_text(outline: RenderedOutline) -> str:
    """Format a RenderedOutline as indented plain text."""
    lines = list(outline.header_lines)
    lines.extend(
        f"{INDENT * row.depth}{row.marker} {row.label}" for row in outline.rows
    )
    return "\n".join(lines) + "\n"
