"""
Reorder engine — batch operations over a multi-row selection.

Every operation follows the same shape:

1. Resolve the selected positions to stable ``line_id`` handles
   *before* touching the document (moving or removing one row shifts
   the positions of the rows behind it).
2. Walk the handles in the order the operation needs, translating each
   back to its current position right before the structural call.
3. Report whether the line sequence actually changed, so callers only
   raise the modified flag for a net change.

Invalid positions in a selection are ignored and an empty selection is
a no-op; none of these functions raise for a bad selection.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from reordinator.core.document import Document

logger = logging.getLogger(__name__)

Selection = Iterable[int]


def resolve_selection(document: Document, positions: Selection) -> list[int]:
    """Return line ids for *positions*, in ascending position order.

    Duplicates collapse and out-of-range positions are dropped.
    """
    size = len(document)
    valid = set()
    for pos in positions:
        if 0 <= pos < size:
            valid.add(pos)
        else:
            logger.debug("Ignoring out-of-range position %d (size=%d)", pos, size)
    return [document[pos].line_id for pos in sorted(valid)]


def selected_positions(document: Document, line_ids: Iterable[int]) -> list[int]:
    """Current positions of the given handles, ascending (missing ids skipped)."""
    return sorted(document.get_position(lid) for lid in line_ids if document.has_line(lid))


def _run(document: Document, apply: Callable[[], None]) -> bool:
    before = document.line_ids()
    with document.batch():
        apply()
    return document.line_ids() != before


# ------------------------------------------------------------------
# Delete
# ------------------------------------------------------------------

def delete_lines(document: Document, positions: Selection) -> bool:
    """Remove every selected line.  Remaining lines keep their order."""
    handles = resolve_selection(document, positions)

    def apply() -> None:
        for line_id in handles:
            document.remove_line(line_id)

    return _run(document, apply)


# ------------------------------------------------------------------
# Single-step moves
# ------------------------------------------------------------------

def move_up(document: Document, positions: Selection) -> bool:
    """Swap each selected line with the line directly above it.

    Handles are processed in ascending order.  A line at the top stays
    put, and so does a line whose predecessor is a selected line that
    could not move, so a selected block pinned at the top stays intact.
    """
    handles = resolve_selection(document, positions)
    selected = set(handles)

    def apply() -> None:
        for line_id in handles:
            pos = document.get_position(line_id)
            if pos == 0 or document[pos - 1].line_id in selected:
                continue
            document.move_before(pos, pos - 1)

    return _run(document, apply)


def move_down(document: Document, positions: Selection) -> bool:
    """Swap each selected line with the line directly below it.

    Mirror image of :func:`move_up`; handles are processed in
    descending order so a line never runs into a neighbour that was
    just moved.
    """
    handles = resolve_selection(document, positions)
    selected = set(handles)

    def apply() -> None:
        last = len(document) - 1
        for line_id in reversed(handles):
            pos = document.get_position(line_id)
            if pos == last or document[pos + 1].line_id in selected:
                continue
            document.move_after(pos, pos + 1)

    return _run(document, apply)


# ------------------------------------------------------------------
# Moves to the ends
# ------------------------------------------------------------------

def move_to_top(document: Document, positions: Selection) -> bool:
    """Move all selected lines to the front, keeping their relative order."""
    handles = resolve_selection(document, positions)

    def apply() -> None:
        # Last handle first; each one lands before the previous one.
        for line_id in reversed(handles):
            document.move_before(document.get_position(line_id), 0)

    return _run(document, apply)


def move_to_bottom(document: Document, positions: Selection) -> bool:
    """Move all selected lines to the end, keeping their relative order."""
    handles = resolve_selection(document, positions)

    def apply() -> None:
        for line_id in handles:
            document.move_after(document.get_position(line_id), len(document) - 1)

    return _run(document, apply)


# ------------------------------------------------------------------
# Drag and drop
# ------------------------------------------------------------------

def _stack_before(document: Document, line_ids: list[int], front: int) -> None:
    """Place *line_ids*, in order, directly in front of the line *front*."""
    for line_id in reversed(line_ids):
        document.move_before(document.get_position(line_id), document.get_position(front))
        front = line_id


def _stack_after(document: Document, line_ids: list[int], back: int) -> None:
    """Place *line_ids*, in order, directly behind the line *back*."""
    for line_id in line_ids:
        document.move_after(document.get_position(line_id), document.get_position(back))
        back = line_id


def drop_lines(
    document: Document,
    positions: Selection,
    target: int,
    *,
    after: bool = False,
) -> bool:
    """Move the selected lines so they sit right before (or after) *target*.

    The block keeps its relative order.  If the target row is part of
    the selection the block is gathered around it.  Dropping a block
    back where it came from leaves the sequence unchanged and returns
    ``False``, whatever the number of rows dragged.
    """
    handles = resolve_selection(document, positions)
    if not handles or not (0 <= target < len(document)):
        return False

    anchor = document[target].line_id

    def apply() -> None:
        if anchor in handles:
            split = handles.index(anchor)
            _stack_before(document, handles[:split], anchor)
            _stack_after(document, handles[split + 1:], anchor)
        elif after:
            _stack_after(document, handles, anchor)
        else:
            _stack_before(document, handles, anchor)

    return _run(document, apply)
