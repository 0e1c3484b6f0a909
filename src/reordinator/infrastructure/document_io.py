"""
Document I/O — read a text file into a Document, write it back.

This is a functional module.  DocumentService delegates here for the
actual file ↔ Document conversion.

Load flow:
    file → read all text (UTF-8, no newline translation) → split on "\\n"
         → rewrite the Document inside a bulk-load scope → mark clean

Save-in-place flow (crash safe):
    <dir>/.<name>.<pid>.tmp  (exclusive create)
    → write one line + "\\n" per record → fsync → os.replace onto target
    → mark clean

Save-as flow:
    open destination for writing → write → fsync → record new path
    → mark clean
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Optional

from reordinator.core.document import Document
from reordinator.core.errors import (
    AtomicRenameError,
    DocumentLoadError,
    DocumentSaveError,
    NoActiveFileError,
)

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"
_TEMP_MODE = 0o666


# ------------------------------------------------------------------
# File helpers
# ------------------------------------------------------------------

def read_lines(file_path: str | Path) -> list[str]:
    """Return the lines of *file_path* with exactly one "\\n" stripped each.

    Only "\\n" ends a line.  A "\\r" stays in the text, so a CRLF file is
    written back byte for byte.

    Raises :class:`DocumentLoadError` if the file cannot be opened or
    decoded.
    """
    path = Path(file_path)
    try:
        with path.open("r", encoding=_ENCODING, newline="") as f:
            text = f.read()
    except OSError as exc:
        raise DocumentLoadError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise DocumentLoadError(path, f"not valid {_ENCODING} text ({exc.reason})") from exc

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def temp_path_for(file_path: str | Path) -> Path:
    """``<dir>/.<basename>.<pid>.tmp`` next to *file_path*."""
    path = Path(file_path)
    return path.with_name(f".{path.name}.{os.getpid()}.tmp")


def _write_lines(f: IO[str], document: Document) -> None:
    for line in document:
        f.write(line.text)
        f.write("\n")
    f.flush()
    os.fsync(f.fileno())


# ------------------------------------------------------------------
# Load
# ------------------------------------------------------------------

def load_document(
    file_path: str | Path,
    document: Optional[Document] = None,
) -> Document:
    """
    Read a text file into *document* (or a new Document) and return it.

    The whole file is read before the document is touched, so a failed
    load leaves *document* exactly as it was.  The refill happens inside
    :meth:`Document.bulk_load`, then the document is marked clean with
    *file_path* as its active file.
    """
    path = Path(file_path)
    texts = read_lines(path)

    doc = document if document is not None else Document()
    with doc.bulk_load():
        doc.clear()
        for text in texts:
            doc.append_line(text)
    doc.mark_saved(str(path))
    logger.debug("Read %d lines from %s", len(texts), path)
    return doc


# ------------------------------------------------------------------
# Save
# ------------------------------------------------------------------

def save_document(document: Document, file_path: str | Path | None = None) -> Path:
    """
    Save *document* in place via temp file + fsync + atomic rename.

    *file_path* defaults to the document's active file.  On a failed
    rename the original file is untouched and the temp file is kept;
    :class:`AtomicRenameError` names it.  A failed write removes the temp
    file so a later save can create it again.  The modified flag is only
    cleared on success.
    """
    if not file_path and not document.file_path:
        raise NoActiveFileError("No file path specified and document has no path.")
    target = Path(file_path or document.file_path)

    tmp = temp_path_for(target)
    try:
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, _TEMP_MODE)
    except OSError as exc:
        raise DocumentSaveError(target, f"cannot create {tmp}: {exc.strerror or exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding=_ENCODING, newline="") as f:
            _write_lines(f, document)
    except OSError as exc:
        try:
            os.unlink(tmp)
        except OSError:
            logger.warning("Could not remove %s after failed write", tmp)
        raise DocumentSaveError(target, f"cannot write {tmp}: {exc.strerror or exc}") from exc

    try:
        os.replace(tmp, target)
    except OSError as exc:
        logger.warning("Rename %s -> %s failed; leaving temp file in place", tmp, target)
        raise AtomicRenameError(target, tmp, exc.strerror or str(exc)) from exc

    document.mark_saved(str(target))
    return target


def save_document_as(document: Document, file_path: str | Path) -> Path:
    """
    Write *document* directly to *file_path* and make it the active file.

    No temp file is used; the data is still fsynced before closing.
    """
    target = Path(file_path)
    try:
        with target.open("w", encoding=_ENCODING, newline="") as f:
            _write_lines(f, document)
    except OSError as exc:
        raise DocumentSaveError(target, exc.strerror or str(exc)) from exc

    document.mark_saved(str(target))
    return target
