from reordinator.core.document_line import DocumentLine
from reordinator.core.document import Document
from reordinator.core.errors import (
    DocumentError,
    DocumentLoadError,
    DocumentSaveError,
    AtomicRenameError,
    NoActiveFileError,
    ResourceBundleError,
)
from reordinator.core.interfaces import IDocumentObserver
from reordinator.core.reorder import (
    resolve_selection,
    selected_positions,
    delete_lines,
    move_up,
    move_down,
    move_to_top,
    move_to_bottom,
    drop_lines,
)
from reordinator.core.title import PROG_NAME, TitleTracker, format_title

__all__ = [
    "DocumentLine",
    "Document",
    "DocumentError",
    "DocumentLoadError",
    "DocumentSaveError",
    "AtomicRenameError",
    "NoActiveFileError",
    "ResourceBundleError",
    "IDocumentObserver",
    "resolve_selection",
    "selected_positions",
    "delete_lines",
    "move_up",
    "move_down",
    "move_to_top",
    "move_to_bottom",
    "drop_lines",
    "PROG_NAME",
    "TitleTracker",
    "format_title",
]
