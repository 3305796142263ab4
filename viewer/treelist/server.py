"""FastAPI router for browsing a loaded listing as a collapsible outline.

Exposes the volume header, the currently visible outline rows, node
details, and endpoints that flip expand flags. Designed to be mounted
at ``/api/listing`` by the parent application.

Example::

    from fastapi import FastAPI
    from treelist.server import configure, router

    app = FastAPI()
    configure(tree, header)
    app.include_router(router, prefix="/api/listing")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from shared.hardening import ErrorFormatter, ValidationError
from treelist import __version__
from treelist.config import ViewerConfig
from treelist.listing import (
    ListingError,
    ListingTree,
    VolumeHeader,
    load_tree_from_path,
)
from treelist.outline import DisplayState, render

logger = logging.getLogger(__name__)

# ===================================================================
# Pydantic request models
# ===================================================================


class ExpandRequest(BaseModel):
    """Request body for setting one node's expand flag."""

    expanded: bool


# ===================================================================
# Module state
# ===================================================================

_state: dict[str, Any] = {
    "tree": None,
    "header": None,
    "display": None,
    "listing_dir": None,
}

_formatter = ErrorFormatter()


def configure(tree: ListingTree, header: VolumeHeader) -> None:
    """Inject a loaded listing into the module-level state.

    Must be called before the router handles any requests. All nodes
    start collapsed.

    Args:
        tree: A fully built ListingTree.
        header: The listing's volume header.
    """
    _state["tree"] = tree
    _state["header"] = header
    _state["display"] = DisplayState(tree)


def configure_from_path(config: ViewerConfig) -> None:
    """Load the listing named by *config* and serve it.

    Later reloads are confined to ``config.base_directory`` or, when that
    is unset, to the directory holding this listing.

    Args:
        config: Viewer configuration with the listing location.

    Raises:
        ValidationError: If the listing path is rejected.
        ListingError: If the listing cannot be loaded.
    """
    checked = config.validated()
    tree, header = load_tree_from_path(checked.listing_path, encoding=checked.encoding)
    configure(tree, header)
    _state["listing_dir"] = checked.base_directory or checked.listing_path.parent


def _require_state() -> tuple[ListingTree, VolumeHeader, DisplayState]:
    """Return the configured listing or raise 503."""
    if _state["tree"] is None:
        raise HTTPException(status_code=503, detail="No listing loaded")
    return _state["tree"], _state["header"], _state["display"]


def _require_node(tree: ListingTree, index: int) -> None:
    try:
        tree.node(index)
    except IndexError as exc:
        raise HTTPException(
            status_code=404, detail=_formatter.format_server_error(exc).to_dict()
        ) from exc


# ===================================================================
# Router
# ===================================================================

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, Any]:
    """Return listing service health status.

    Returns:
        Dictionary with status, version, and loaded node count.
    """
    tree = _state.get("tree")
    return {
        "status": "ok" if tree is not None else "not_configured",
        "version": __version__,
        "node_count": len(tree) if tree is not None else 0,
    }


@router.get("/header")
async def get_header() -> dict[str, Any]:
    """Return the volume header of the loaded listing."""
    _, header, _ = _require_state()
    return header.to_dict()


@router.get("/outline")
async def get_outline() -> dict[str, Any]:
    """Return the header and the rows visible under the current flags."""
    tree, header, display = _require_state()
    return render(tree, header, display).to_dict()


@router.get("/tree")
async def get_tree() -> dict[str, Any]:
    """Return every node as a flat record, in index order, with statistics.

    Nodes name their parent and children by index, so the payload does
    not nest with the depth of the listing.
    """
    tree, header, _ = _require_state()
    return {
        "header": header.to_dict(),
        "statistics": tree.get_statistics(),
        "nodes": tree.to_flat(),
    }


@router.get("/nodes/{index}")
async def get_node(index: int) -> dict[str, Any]:
    """Return one node with its parent, path, and direct children.

    Args:
        index: Node index within the loaded tree.
    """
    tree, _, display = _require_state()
    _require_node(tree, index)
    node = tree.node(index)
    return {
        "index": node.index,
        "label": node.label,
        "depth": node.depth,
        "parent": node.parent,
        "path": tree.path_of(index),
        "expanded": display.is_expanded(index),
        "children": [
            {"index": child.index, "label": child.label, "has_children": not child.is_leaf}
            for child in tree.children(index)
        ],
    }


@router.post("/nodes/{index}/toggle")
async def toggle_node(index: int) -> dict[str, Any]:
    """Flip a node's expand flag.

    Args:
        index: Node index within the loaded tree.

    Returns:
        The node index and its new flag.
    """
    tree, _, display = _require_state()
    _require_node(tree, index)
    expanded = display.toggle(index)
    logger.debug("Node %d %s", index, "expanded" if expanded else "collapsed")
    return {"index": index, "expanded": expanded}


@router.put("/nodes/{index}/expanded")
async def set_node_expanded(index: int, request: ExpandRequest) -> dict[str, Any]:
    """Set a node's expand flag explicitly.

    Args:
        index: Node index within the loaded tree.
        request: Desired flag value.
    """
    tree, _, display = _require_state()
    _require_node(tree, index)
    display.set_expanded(index, request.expanded)
    return {"index": index, "expanded": request.expanded}


@router.post("/expand-all")
async def expand_all() -> dict[str, Any]:
    """Expand every node."""
    tree, _, display = _require_state()
    display.expand_all()
    return {"expanded": len(tree)}


@router.post("/collapse-all")
async def collapse_all() -> dict[str, Any]:
    """Collapse every node."""
    _, _, display = _require_state()
    display.collapse_all()
    return {"expanded": 0}


@router.post("/reload")
async def reload_listing(path: str, encoding: str = "utf-8") -> dict[str, Any]:
    """Load a different listing file, replacing the current one.

    When the current listing was loaded from a file, the new file must
    lie under that file's directory.

    Args:
        path: Location of the listing file.
        encoding: Text encoding of the file.

    Returns:
        The new header and statistics.
    """
    try:
        configure_from_path(
            ViewerConfig(
                listing_path=Path(path),
                encoding=encoding,
                base_directory=_state["listing_dir"],
            )
        )
    except (ListingError, ValidationError) as exc:
        raise HTTPException(
            status_code=422, detail=_formatter.format_listing_error(exc).to_dict()
        ) from exc
    except Exception as exc:
        logger.exception("Failed to reload listing %s", path)
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    tree, header, _ = _require_state()
    return {"header": header.to_dict(), "statistics": tree.get_statistics()}
