"""
API routes for the reordinator editor.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from reordinator.core import (
    AtomicRenameError,
    DocumentLoadError,
    DocumentSaveError,
    NoActiveFileError,
    TitleTracker,
)
from reordinator.services import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Singleton service — created in main.py and attached here
_service: Optional[DocumentService] = None
_tracker: Optional[TitleTracker] = None
_on_quit: Optional[Callable[[], None]] = None

# Sync handlers run on a thread pool; the core expects one caller at a time.
_lock = threading.Lock()


def init_service(
    svc: DocumentService,
    tracker: Optional[TitleTracker] = None,
    on_quit: Optional[Callable[[], None]] = None,
) -> None:
    global _service, _tracker, _on_quit
    _service = svc
    _tracker = tracker
    _on_quit = on_quit


def svc() -> DocumentService:
    if _service is None:
        raise RuntimeError("DocumentService not initialized")
    return _service


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class OpenRequest(BaseModel):
    file_path: str


class SaveAsRequest(BaseModel):
    file_path: str


class SelectionRequest(BaseModel):
    positions: list[int] = []


class MoveRequest(SelectionRequest):
    direction: str  # "up" | "down" | "top" | "bottom"


class DropRequest(SelectionRequest):
    target: int
    after: bool = False


class QuitRequest(BaseModel):
    confirm: bool = False


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/document")
def get_document():
    """Summary of the loaded document."""
    with _lock:
        return svc().summary()


@router.get("/document/lines")
def get_lines():
    """All lines in display order."""
    with _lock:
        return svc().get_lines()


@router.get("/title")
def get_title():
    """Window title as last reported to the observer."""
    with _lock:
        if _tracker is None:
            raise HTTPException(404, "No title tracker attached")
        return {
            "title": _tracker.title,
            "modified": _tracker.modified,
            "file_path": _tracker.file_path,
        }


@router.post("/document/open")
def open_document(req: OpenRequest):
    """Load a text file, replacing the current document."""
    try:
        with _lock:
            return svc().load(req.file_path)
    except DocumentLoadError as e:
        raise HTTPException(404, str(e))


@router.post("/document/save")
def save_document():
    """Save the document in place."""
    try:
        with _lock:
            return svc().save()
    except NoActiveFileError as e:
        raise HTTPException(409, str(e))
    except AtomicRenameError as e:
        raise HTTPException(500, {"message": str(e), "temp_path": e.temp_path})
    except DocumentSaveError as e:
        raise HTTPException(500, str(e))


@router.post("/document/save-as")
def save_document_as(req: SaveAsRequest):
    """Write the document to a new path and make it the active file."""
    try:
        with _lock:
            return svc().save_as(req.file_path)
    except DocumentSaveError as e:
        raise HTTPException(500, str(e))


@router.post("/document/delete")
def delete_lines(req: SelectionRequest):
    """Delete the selected lines."""
    with _lock:
        return svc().delete(req.positions)


@router.post("/document/move")
def move_lines(req: MoveRequest):
    """Move the selected lines up, down, to the top or to the bottom."""
    try:
        with _lock:
            return svc().move(req.direction, req.positions)
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.post("/document/drop")
def drop_lines(req: DropRequest):
    """Drag-and-drop the selected lines onto the row at ``target``."""
    with _lock:
        return svc().drop(req.positions, req.target, after=req.after)


@router.post("/quit")
def quit_app(req: QuitRequest):
    """Stop the application unless there are unsaved changes to confirm."""
    with _lock:
        allowed = svc().request_quit(confirmed=req.confirm)
    if not allowed:
        raise HTTPException(409, "Document has unsaved changes")
    if _on_quit is not None:
        _on_quit()
    return {"status": "quitting"}
