"""
Core interfaces for reordinator.

This module defines the contracts the presentation layer implements:
- IDocumentObserver: told about the modified flag and active path
  after every operation that could change either
"""
from __future__ import annotations

from typing import Protocol


class IDocumentObserver(Protocol):
    """
    Receives document state changes synchronously from the service.

    Called exactly once per operation (load, save, save-as, delete,
    move, drop), including operations that turned out to be no-ops.
    """

    def on_document_changed(self, modified: bool, file_path: str) -> None: ...
