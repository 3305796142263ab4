"""Folderview backend server.

Loads one ``tree`` directory listing at startup and serves it as a
collapsible outline under ``/api/listing``. The listing path is always
given explicitly; nothing is read from a fixed location.

Usage::

    # Serve a listing
    python folderview_server.py content.txt --port 8420

    # Print the fully expanded outline and exit
    python folderview_server.py content.txt --print
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.hardening import ErrorFormatter, ValidationError
from treelist import __version__
from treelist.config import ViewerConfig
from treelist.listing import ListingError, load_tree_from_path
from treelist.outline import DisplayState, render, render_text
from treelist.server import _state, configure_from_path
from treelist.server import router as listing_router

logger = logging.getLogger("folderview")

# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Folderview API",
    description="Browse `tree` directory listings as collapsible outlines.",
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS -- allow local dev server origins
# ---------------------------------------------------------------------------

_ALLOWED_ORIGINS = [
    "http://localhost:5173",   # Vite dev server
    "http://localhost:8420",   # Self (for Swagger UI)
    "http://127.0.0.1:5173",
    "http://127.0.0.1:8420",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(listing_router, prefix="/api/listing", tags=["listing"])


@app.get("/api/health")
async def health() -> dict[str, object]:
    """Top-level health check."""
    loaded = _state["tree"] is not None
    return {
        "status": "ok" if loaded else "not_configured",
        "version": __version__,
    }


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def print_outline(config: ViewerConfig) -> str:
    """Render the fully expanded outline of a listing as text.

    Args:
        config: Viewer configuration with the listing location.

    Returns:
        The outline text.
    """
    checked = config.validated()
    tree, header = load_tree_from_path(checked.listing_path, encoding=checked.encoding)
    display = DisplayState(tree)
    display.expand_all()
    return render_text(render(tree, header, display))


def run_server(config: ViewerConfig) -> None:
    """Load the listing and start the server via uvicorn.

    Args:
        config: Viewer configuration; host and port select the bind address.
    """
    import uvicorn

    configure_from_path(config)
    logger.info("Serving %s on http://%s:%d", config.listing_path, config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="folderview",
        description="Browse a `tree` directory listing as a collapsible outline.",
    )
    parser.add_argument("listing", type=Path, help="Path to the listing text file")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=8420, help="Port number")
    parser.add_argument("--encoding", default="utf-8", help="Listing text encoding")
    parser.add_argument(
        "--max-size-mb", type=float, default=50.0, help="Reject larger listings"
    )
    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print the expanded outline and exit instead of serving",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    config = ViewerConfig(
        listing_path=args.listing,
        encoding=args.encoding,
        host=args.host,
        port=args.port,
        max_file_size_mb=args.max_size_mb,
    )

    try:
        if args.print_only:
            sys.stdout.write(print_outline(config))
        else:
            run_server(config)
    except (ListingError, ValidationError) as exc:
        error = ErrorFormatter().format_listing_error(exc)
        logger.debug("Load failed: %s", error.technical_detail)
        print(f"error: {error.message}\n  {error.suggestion}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
