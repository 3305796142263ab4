"""
Listing module - reconstructs folder trees from ``tree`` text reports.

The classifier turns entry lines into depths, the builder attaches
entries to the right parent, and the loader ties both to the header.
"""

from treelist.listing.builder import TreeBuilder
from treelist.listing.classifier import INDENT_TOKENS, classify_line
from treelist.listing.errors import (
    FormatError,
    ListingError,
    ListingIOError,
    StructuralError,
)
from treelist.listing.header import VolumeHeader, parse_header
from treelist.listing.loader import load_tree, load_tree_from_path
from treelist.listing.tree import ListingNode, ListingTree, OutlineEntry

__all__ = [
    "FormatError",
    "INDENT_TOKENS",
    "ListingError",
    "ListingIOError",
    "ListingNode",
    "ListingTree",
    "OutlineEntry",
    "StructuralError",
    "TreeBuilder",
    "VolumeHeader",
    "classify_line",
    "load_tree",
    "load_tree_from_path",
    "parse_header",
]
