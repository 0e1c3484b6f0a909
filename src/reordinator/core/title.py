"""Window-title formatting for the active document."""
from __future__ import annotations

PROG_NAME = "reordinator"


def format_title(modified: bool, file_path: str) -> str:
    """``"reordinator - *(/path)"`` when modified, a blank instead of ``*`` otherwise."""
    marker = "*" if modified else " "
    return f"{PROG_NAME} - {marker}({file_path})"


class TitleTracker:
    """Observer that remembers the latest title state for the UI to poll."""

    __slots__ = ("modified", "file_path", "title", "notifications")

    def __init__(self) -> None:
        self.modified: bool = False
        self.file_path: str = ""
        self.title: str = format_title(False, "")
        self.notifications: int = 0

    def on_document_changed(self, modified: bool, file_path: str) -> None:
        self.modified = modified
        self.file_path = file_path
        self.title = format_title(modified, file_path)
        self.notifications += 1
