"""
Outline module - collapsible rendering of listing trees.
"""

from treelist.outline.display import DisplayState
from treelist.outline.render import OutlineRow, RenderedOutline, render, render_text

__all__ = [
    "DisplayState",
    "OutlineRow",
    "RenderedOutline",
    "render",
    "render_text",
]
