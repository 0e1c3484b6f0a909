"""
Document — ordered, ID-indexed container of DocumentLines.

The Document is the **single in-memory representation** of the file
being reordered.  It is the source of truth for:

- The frontend viewer    → line text in display order
- The reorder engine     → structural moves / removals by position
- The persistence layer  → serialize all lines back to disk

Lines carry a stable integer ``line_id`` so a batch operation can
resolve a selection to handles first and translate each handle back
to a position right before the structural call that needs it.
Positions are always dense ``0..n-1``.

The Document also owns the *modified* flag.  Every structural change
sets it, except while a :meth:`Document.bulk_load` scope is active.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional, Union

from reordinator.core.document_line import DocumentLine

logger = logging.getLogger(__name__)


class Document:
    """
    Mutable ordered collection of :class:`DocumentLine` objects.

    Internal invariant: ``_index[line.line_id] == position`` for every
    line.  The index is rebuilt only for the slice a mutation touched.
    """

    __slots__ = ("file_path", "_lines", "_index", "_lines_cache",
                 "_next_id", "_modified", "_loading")

    def __init__(
        self,
        file_path: str = "",
        lines: Optional[Iterable[str]] = None,
    ):
        self.file_path: str = file_path
        self._lines: list[DocumentLine] = []
        self._index: dict[int, int] = {}
        self._lines_cache: tuple[DocumentLine, ...] | None = None
        self._next_id: int = 0
        self._modified: bool = False
        self._loading: int = 0
        for text in lines or ():
            self._lines.append(self._new_line(text))
        self._reindex(0)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def lines(self) -> tuple[DocumentLine, ...]:
        """Return a cached tuple so callers cannot break internal ordering."""
        if self._lines_cache is None:
            self._lines_cache = tuple(self._lines)
        return self._lines_cache

    @property
    def modified(self) -> bool:
        """``True`` when the lines differ from the last load or save."""
        return self._modified

    @property
    def is_loading(self) -> bool:
        return self._loading > 0

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, position: int) -> DocumentLine:
        return self._lines[position]

    def __iter__(self) -> Iterator[DocumentLine]:
        return iter(self.lines)

    def texts(self) -> list[str]:
        return [line.text for line in self._lines]

    def line_ids(self) -> tuple[int, ...]:
        return tuple(line.line_id for line in self._lines)

    def get_line(self, line_id: int) -> DocumentLine:
        """Fetch a line by its stable id.  Raises KeyError if not found."""
        return self._lines[self._index[line_id]]

    def get_position(self, line_id: int) -> int:
        """Return the 0-based position of a line.  Raises KeyError."""
        return self._index[line_id]

    def has_line(self, line_id: int) -> bool:
        return line_id in self._index

    # ------------------------------------------------------------------
    # Modified tracking
    # ------------------------------------------------------------------

    @contextmanager
    def bulk_load(self) -> Iterator["Document"]:
        """Suppress modified tracking while the document is being refilled.

        Scopes nest; tracking resumes when the outermost one exits.
        """
        self._loading += 1
        try:
            yield self
        finally:
            self._loading -= 1

    @contextmanager
    def batch(self) -> Iterator["Document"]:
        """Group several mutations into one edit.

        If the line sequence is the same when the scope exits, the
        modified flag is put back to what it was on entry.
        """
        before = self.line_ids()
        was_modified = self._modified
        try:
            yield self
        finally:
            if self.line_ids() == before:
                self._modified = was_modified

    def mark_saved(self, file_path: Optional[str] = None) -> None:
        """Clear the modified flag, optionally recording a new active path."""
        if file_path is not None:
            self.file_path = str(file_path)
        self._modified = False

    # ------------------------------------------------------------------
    # Structural mutations
    # ------------------------------------------------------------------

    def append_line(self, line: Union[str, DocumentLine]) -> DocumentLine:
        """Add a line to the end and return it."""
        if isinstance(line, str):
            line = self._new_line(line)
        elif line.line_id in self._index:
            raise ValueError(f"Duplicate line_id: {line.line_id}")
        else:
            self._next_id = max(self._next_id, line.line_id + 1)
        self._lines.append(line)
        self._index[line.line_id] = len(self._lines) - 1
        self._changed()
        return line

    def remove_at(self, position: int) -> DocumentLine:
        """Remove and return the line at *position*.  Raises IndexError."""
        self._check_position(position)
        removed = self._lines.pop(position)
        del self._index[removed.line_id]
        self._reindex(position)
        self._changed()
        return removed

    def remove_line(self, line_id: int) -> DocumentLine:
        """Remove and return a line by id.  Raises KeyError."""
        return self.remove_at(self._index[line_id])

    def clear(self) -> None:
        if not self._lines:
            return
        self._lines.clear()
        self._index.clear()
        self._changed()

    def move_before(self, position: int, before: Optional[int]) -> bool:
        """Move the line at *position* directly in front of the line at *before*.

        ``before=None`` moves the line to the end.  Returns ``False``
        when the line already sits there.
        """
        self._check_position(position)
        if before is None:
            return self._move(position, len(self._lines) - 1)
        self._check_position(before)
        if before == position:
            return False
        dest = before if before < position else before - 1
        return self._move(position, dest)

    def move_after(self, position: int, after: Optional[int]) -> bool:
        """Move the line at *position* directly behind the line at *after*.

        ``after=None`` moves the line to the start.  Returns ``False``
        when the line already sits there.
        """
        self._check_position(position)
        if after is None:
            return self._move(position, 0)
        self._check_position(after)
        if after == position:
            return False
        dest = after + 1 if after < position else after
        return self._move(position, dest)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_line(self, text: str) -> DocumentLine:
        line = DocumentLine(line_id=self._next_id, text=text)
        self._next_id += 1
        return line

    def _move(self, position: int, dest: int) -> bool:
        if dest == position:
            return False
        line = self._lines.pop(position)
        self._lines.insert(dest, line)
        self._reindex(min(position, dest), max(position, dest) + 1)
        self._changed()
        logger.debug("Moved line %d from %d to %d", line.line_id, position, dest)
        return True

    def _changed(self) -> None:
        self._lines_cache = None
        if not self._loading:
            self._modified = True

    def _check_position(self, position: int) -> None:
        if not (0 <= position < len(self._lines)):
            raise IndexError(f"Position {position} out of range")

    def _reindex(self, start: int, stop: Optional[int] = None) -> None:
        for pos in range(start, len(self._lines) if stop is None else stop):
            self._index[self._lines[pos].line_id] = pos
