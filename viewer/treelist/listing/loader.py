"""
Loading entry points for directory listings.

Reads the whole listing, parses the header and builds the tree in one
pass. Any failure aborts the load; a partial tree is never returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from itertools import islice
from pathlib import Path

from treelist.listing.builder import FIRST_ENTRY_LINE, TreeBuilder
from treelist.listing.errors import ListingIOError
from treelist.listing.header import HEADER_LINES, VolumeHeader, parse_header
from treelist.listing.tree import ListingTree

logger = logging.getLogger(__name__)


def _strip_terminator(line: str) -> str:
    return line.rstrip("\r\n")


def load_tree(source: Iterable[str]) -> tuple[ListingTree, VolumeHeader]:
    """Load a listing from an open text stream or any iterable of lines.

    Args:
        source: Text stream (e.g. an open file) or iterable of lines.
            Line terminators are optional.

    Returns:
        Tuple of the built tree and the volume header.

    Raises:
        ListingIOError: If the source cannot be read or lacks a header.
        FormatError: If a header marker is missing.
        StructuralError: If an entry cannot be placed in the tree.
    """
    try:
        lines = iter(source)
        header_lines = [_strip_terminator(line) for line in islice(lines, HEADER_LINES)]
        header = parse_header(header_lines)
        entries = [_strip_terminator(line) for line in lines]
    except (OSError, UnicodeDecodeError) as exc:
        raise ListingIOError(f"Could not read listing: {exc}") from exc

    tree = TreeBuilder.build(header.root_label, entries, first_line_number=FIRST_ENTRY_LINE)
    logger.info(
        "Loaded listing for volume %s: %d folders, max depth %d",
        header.volume_name,
        len(tree) - 1,
        tree.max_depth,
    )
    return tree, header


def load_tree_from_path(
    path: str | Path, encoding: str = "utf-8"
) -> tuple[ListingTree, VolumeHeader]:
    """Load a listing file from disk.

    Args:
        path: Location of the listing file.
        encoding: Text encoding of the file.

    Returns:
        Tuple of the built tree and the volume header.

    Raises:
        ListingIOError: If the file cannot be opened or read.
    """
    try:
        fh = open(path, encoding=encoding, newline="\n")
    except (OSError, LookupError) as exc:
        raise ListingIOError(f"Could not open listing {path}: {exc}") from exc

    # Only "\n" ends a line; a "\r" before it is stripped, a lone "\r" is text.
    with fh:
        return load_tree(fh)
