"""
DocumentService — the bridge between the API layer and the core domain.

Manages:
- The single loaded Document (lines, active file, modified flag)
- The observer that mirrors modified/path into the window title
- Edit lifecycle: load → delete / move / drop → save or save-as → quit

The API layer addresses lines by 0-based position; the reorder engine
resolves positions to stable line ids internally, and every mutation
response carries the positions where the selected lines ended up so
the frontend can keep them selected.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from reordinator.core import (
    Document,
    DocumentError,
    IDocumentObserver,
    delete_lines,
    drop_lines,
    format_title,
    move_down,
    move_to_bottom,
    move_to_top,
    move_up,
    resolve_selection,
    selected_positions,
)
from reordinator.infrastructure import load_document, save_document, save_document_as

logger = logging.getLogger(__name__)

_MoveFn = Callable[[Document, Iterable[int]], bool]


class DocumentService:
    """
    Facade that the API layer calls. One instance per application.
    """

    MOVES: dict[str, _MoveFn] = {
        "up": move_up,
        "down": move_down,
        "top": move_to_top,
        "bottom": move_to_bottom,
    }

    def __init__(
        self,
        observer: Optional[IDocumentObserver] = None,
        document: Optional[Document] = None,
    ):
        self._observer = observer
        self._document: Document = document if document is not None else Document()

    @property
    def document(self) -> Document:
        return self._document

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def load(self, file_path: str) -> dict:
        """Load a file, replacing the current lines, and return a summary.

        Raises :class:`DocumentLoadError`; the current document is left
        as it was in that case.
        """
        logger.info("Loading %s", file_path)
        load_document(file_path, self._document)
        logger.info("Loaded %s: %d lines", file_path, len(self._document))
        self._notify()
        return self.summary()

    def save(self) -> dict:
        """Save the document in place (temp file + fsync + rename)."""
        doc = self._document
        try:
            target = save_document(doc)
        except DocumentError:
            logger.warning("Save of %s failed", doc.file_path or "<no file>")
            raise
        logger.info("Saved %d lines to %s", len(doc), target)
        self._notify()
        return {"status": "saved", "file_path": str(target)}

    def save_as(self, file_path: str) -> dict:
        """Write the document to *file_path* and make it the active file."""
        doc = self._document
        try:
            target = save_document_as(doc, file_path)
        except DocumentError:
            logger.warning("Save as %s failed", file_path)
            raise
        logger.info("Saved %d lines as %s", len(doc), target)
        self._notify()
        return {"status": "saved", "file_path": str(target)}

    def request_quit(self, confirmed: bool = False) -> bool:
        """``True`` if the application may exit now.

        A modified document needs *confirmed* (the user accepted losing
        the unsaved changes).
        """
        if not self._document.modified or confirmed:
            logger.info("Quit accepted (modified=%s)", self._document.modified)
            return True
        logger.info("Quit refused: unsaved changes in %s", self._document.file_path)
        return False

    # ------------------------------------------------------------------
    # Line access
    # ------------------------------------------------------------------

    def get_lines(self) -> list[dict]:
        return [
            {"position": pos, "text": line.text}
            for pos, line in enumerate(self._document.lines)
        ]

    def summary(self) -> dict:
        doc = self._document
        return {
            "file_path": doc.file_path,
            "modified": doc.modified,
            "total_lines": len(doc),
            "title": format_title(doc.modified, doc.file_path),
        }

    # ------------------------------------------------------------------
    # Delete / move / drop
    # ------------------------------------------------------------------

    def delete(self, positions: Iterable[int]) -> dict:
        """Delete the selected lines."""
        doc = self._document
        handles = resolve_selection(doc, positions)
        changed = delete_lines(doc, [doc.get_position(lid) for lid in handles])
        if changed:
            logger.info("Deleted %d line(s)", len(handles))
        return self._mutation_response("delete", changed, [])

    def move(self, direction: str, positions: Iterable[int]) -> dict:
        """Dispatch a move by direction name (``up``/``down``/``top``/``bottom``).

        Raises ``ValueError`` for an unknown direction.
        """
        try:
            fn = self.MOVES[direction]
        except KeyError:
            raise ValueError(f"Unknown move direction: {direction!r}") from None
        doc = self._document
        handles = resolve_selection(doc, positions)
        changed = fn(doc, [doc.get_position(lid) for lid in handles])
        if changed:
            logger.info("Moved %d line(s) %s", len(handles), direction)
        else:
            logger.debug("Move %s of %d line(s) changed nothing", direction, len(handles))
        return self._mutation_response(f"move_{direction}", changed,
                                       selected_positions(doc, handles))

    def move_up(self, positions: Iterable[int]) -> dict:
        return self.move("up", positions)

    def move_down(self, positions: Iterable[int]) -> dict:
        return self.move("down", positions)

    def move_to_top(self, positions: Iterable[int]) -> dict:
        return self.move("top", positions)

    def move_to_bottom(self, positions: Iterable[int]) -> dict:
        return self.move("bottom", positions)

    def drop(self, positions: Iterable[int], target: int, after: bool = False) -> dict:
        """Drag-and-drop the selected lines onto the row at *target*."""
        doc = self._document
        handles = resolve_selection(doc, positions)
        changed = drop_lines(doc, [doc.get_position(lid) for lid in handles],
                             target, after=after)
        if changed:
            logger.info("Dropped %d line(s) at %d", len(handles), target)
        else:
            logger.debug("Drop of %d line(s) at %d changed nothing", len(handles), target)
        return self._mutation_response("drop", changed, selected_positions(doc, handles))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _notify(self) -> None:
        if self._observer is not None:
            self._observer.on_document_changed(
                self._document.modified, self._document.file_path,
            )

    def _mutation_response(self, action: str, changed: bool, selection: list[int]) -> dict:
        self._notify()
        result = self.summary()
        result.update({
            "action": action,
            "changed": changed,
            "selection": selection,
        })
        return result
