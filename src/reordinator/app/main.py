"""
FastAPI application entry point.

Run:  reordinator [FILE]
      (or  python -m reordinator.app.main [FILE])

The UI is the resource bundle (``reordinator.html``) served at ``/``;
it talks to the JSON routes under ``/api``.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, Optional, Sequence

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from reordinator import __version__
from reordinator.app.routes import router, init_service
from reordinator.core import DocumentLoadError, ResourceBundleError, TitleTracker
from reordinator.infrastructure import load_bundle
from reordinator.services import DocumentService

HOST = os.getenv("REORDINATOR_HOST", "127.0.0.1")
PORT = os.getenv("REORDINATOR_PORT", "8000")
LOG_LEVEL = os.getenv("REORDINATOR_LOG_LEVEL", "INFO").upper()

logger = logging.getLogger(__name__)


def create_app(
    service: DocumentService,
    bundle_html: str,
    tracker: Optional[TitleTracker] = None,
    on_quit: Optional[Callable[[], None]] = None,
) -> FastAPI:
    """Build the FastAPI app around an existing service."""
    app = FastAPI(title="Reordinator", version=__version__)
    init_service(service, tracker, on_quit)
    app.include_router(router)

    @app.get("/", response_class=HTMLResponse)
    def index():
        """Serve the frontend."""
        return HTMLResponse(bundle_html)

    return app


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reordinator",
        description="Reorder the lines of a text file.",
    )
    parser.add_argument("file", nargs="?", help="text file to load at startup")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )

    try:
        port = int(PORT)
    except ValueError:
        logger.error("REORDINATOR_PORT must be an integer, got %r", PORT)
        return 1

    try:
        bundle_html = load_bundle()
    except ResourceBundleError as e:
        logger.error("%s (searched: %s)", e, ", ".join(e.searched) or "-")
        return 1

    tracker = TitleTracker()
    service = DocumentService(observer=tracker)
    if args.file:
        try:
            service.load(args.file)
        except DocumentLoadError as e:
            logger.error("%s", e)

    server: Optional[uvicorn.Server] = None

    def request_exit() -> None:
        if server is not None:
            server.should_exit = True

    app = create_app(service, bundle_html, tracker, on_quit=request_exit)
    server = uvicorn.Server(
        uvicorn.Config(app, host=HOST, port=port, log_level=LOG_LEVEL.lower())
    )
    logger.info("Serving %s on http://%s:%d/", tracker.title, HOST, port)
    server.run()
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
