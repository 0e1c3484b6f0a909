"""
Base error hierarchy for reordinator.

Everything the core and the I/O layer raise on purpose inherits from
``DocumentError`` so callers can catch a single base type.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class DocumentError(Exception):
    """Base class for all document errors."""


class DocumentLoadError(DocumentError):
    """Raised when a file cannot be opened, read or decoded."""

    def __init__(self, file_path: str | Path, reason: str) -> None:
        super().__init__(f"Cannot load {file_path}: {reason}")
        self.file_path = str(file_path)


class DocumentSaveError(DocumentError):
    """Raised when the destination (or its temp file) cannot be written."""

    def __init__(self, file_path: str | Path, reason: str) -> None:
        super().__init__(f"Cannot save {file_path}: {reason}")
        self.file_path = str(file_path)


class AtomicRenameError(DocumentSaveError):
    """Raised when the temp file cannot be renamed onto the target.

    The temp file is left in place; ``temp_path`` names it.
    """

    def __init__(self, file_path: str | Path, temp_path: str | Path, reason: str) -> None:
        super().__init__(file_path, reason)
        self.temp_path = str(temp_path)


class NoActiveFileError(DocumentError):
    """Raised when saving in place while no file is loaded."""


class ResourceBundleError(DocumentError):
    """Raised when the UI resource bundle cannot be located or read."""

    def __init__(self, reason: str, searched: Optional[list[str]] = None) -> None:
        super().__init__(reason)
        self.searched = list(searched or [])
