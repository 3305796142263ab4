"""
Folderview - reconstruct ``tree`` directory listings as browsable outlines.

The ``listing`` package turns the text report into a node tree; the
``outline`` package renders that tree as a collapsible outline.
"""

__version__ = "0.1.0"
