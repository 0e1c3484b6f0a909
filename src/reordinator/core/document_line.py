"""
DocumentLine — one row of the file being reordered.

Each line in a file becomes one DocumentLine.  The frontend addresses
lines by their 0-based position; ``line_id`` is a per-document
generation number that stays attached to the row while other rows move
around it, so batch operations can hold on to it across mutations.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DocumentLine:
    """
    Immutable representation of one line in a document.

    Attributes:
        line_id: Stable handle assigned by the owning :class:`Document`
                 from a monotonically increasing counter.  Never reused
                 within that document.
        text:    Line content without its "\\n" terminator.  A "\\r" is
                 ordinary content, so CRLF files keep it at the end.
    """
    line_id: int
    text: str = ""

    def __post_init__(self):
        if "\n" in self.text:
            raise ValueError(
                f"Line {self.line_id} contains an embedded line terminator"
            )
