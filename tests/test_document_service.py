"""
Integration tests for DocumentService.

These tests exercise the full load → reorder → save round-trip through
the service layer, including observer notifications, the modified flag,
quit confirmation and error handling.  They use RecordingObserver and
temporary files on disk.
"""
from __future__ import annotations

import os

import pytest

from reordinator.core import (
    AtomicRenameError,
    DocumentLoadError,
    DocumentSaveError,
    NoActiveFileError,
)
from reordinator.infrastructure import temp_path_for
from reordinator.services import DocumentService
from tests.recording_observer import RecordingObserver


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

FIVE_LINES = "a\nb\nc\nd\ne\n"


def _texts(svc: DocumentService) -> list[str]:
    return [line["text"] for line in svc.get_lines()]


@pytest.fixture()
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture()
def svc(observer) -> DocumentService:
    return DocumentService(observer=observer)


@pytest.fixture()
def five(tmp_path):
    path = tmp_path / "five.txt"
    path.write_text(FIVE_LINES)
    return path


# ==================================================================
# Load
# ==================================================================

class TestLoad:
    def test_load_returns_summary(self, svc, five):
        result = svc.load(str(five))
        assert result["file_path"] == str(five)
        assert result["total_lines"] == 5
        assert result["modified"] is False
        assert result["title"] == f"reordinator -  ({five})"

    def test_load_notifies_once(self, svc, observer, five):
        svc.load(str(five))
        assert observer.calls == [(False, str(five))]

    def test_get_lines(self, svc, five):
        svc.load(str(five))
        assert svc.get_lines()[1] == {"position": 1, "text": "b"}

    def test_reload_discards_modifications(self, svc, five):
        svc.load(str(five))
        svc.delete([0])
        svc.load(str(five))
        assert _texts(svc) == ["a", "b", "c", "d", "e"]
        assert not svc.document.modified

    def test_failed_load_keeps_previous_document(self, svc, observer, five, tmp_path):
        svc.load(str(five))
        with pytest.raises(DocumentLoadError):
            svc.load(str(tmp_path / "missing.txt"))
        assert _texts(svc) == ["a", "b", "c", "d", "e"]
        assert svc.summary()["file_path"] == str(five)
        assert len(observer.calls) == 1


# ==================================================================
# Edit operations
# ==================================================================

class TestEdits:
    def test_delete(self, svc, observer, five):
        svc.load(str(five))
        result = svc.delete([1, 3])
        assert _texts(svc) == ["a", "c", "e"]
        assert result["changed"] is True
        assert result["modified"] is True
        assert result["selection"] == []
        assert observer.last == (True, str(five))

    def test_move_returns_new_selection(self, svc, five):
        svc.load(str(five))
        result = svc.move_to_top([1, 3])
        assert _texts(svc) == ["b", "d", "a", "c", "e"]
        assert result["selection"] == [0, 1]
        assert result["action"] == "move_top"

    def test_move_up_and_down(self, svc, five):
        svc.load(str(five))
        assert svc.move_up([2])["selection"] == [1]
        assert _texts(svc) == ["a", "c", "b", "d", "e"]
        assert svc.move_down([1])["selection"] == [2]
        assert _texts(svc) == ["a", "b", "c", "d", "e"]

    def test_move_to_bottom(self, svc, five):
        svc.load(str(five))
        result = svc.move_to_bottom([0])
        assert _texts(svc) == ["b", "c", "d", "e", "a"]
        assert result["selection"] == [4]

    def test_unknown_direction(self, svc, five):
        svc.load(str(five))
        with pytest.raises(ValueError, match="sideways"):
            svc.move("sideways", [0])

    def test_drop(self, svc, five):
        svc.load(str(five))
        result = svc.drop([0, 1], 3, after=True)
        assert _texts(svc) == ["c", "d", "a", "b", "e"]
        assert result["selection"] == [2, 3]

    def test_noop_move_still_notifies_but_stays_clean(self, svc, observer, five):
        svc.load(str(five))
        result = svc.move_up([0])
        assert result["changed"] is False
        assert result["modified"] is False
        assert len(observer.calls) == 2
        assert observer.last == (False, str(five))

    def test_empty_selection_is_noop(self, svc, five):
        svc.load(str(five))
        result = svc.delete([])
        assert result["changed"] is False
        assert _texts(svc) == ["a", "b", "c", "d", "e"]

    def test_invalid_positions_ignored(self, svc, five):
        svc.load(str(five))
        result = svc.move_to_top([99, -3])
        assert result["changed"] is False
        assert result["selection"] == []

    def test_flag_stays_set_after_later_noop(self, svc, five):
        svc.load(str(five))
        svc.move_down([0])
        svc.move_up([0])
        assert svc.document.modified


# ==================================================================
# Save
# ==================================================================

class TestSave:
    def test_scenario_save_and_reload(self, svc, observer, five):
        svc.load(str(five))
        svc.move_to_top([1, 3])
        svc.delete([_texts(svc).index("a")])
        svc.move_to_bottom([_texts(svc).index("b")])
        assert _texts(svc) == ["d", "c", "e", "b"]

        result = svc.save()
        assert result == {"status": "saved", "file_path": str(five)}
        assert observer.last == (False, str(five))

        svc.load(str(five))
        assert _texts(svc) == ["d", "c", "e", "b"]

    def test_save_without_file(self, svc):
        with pytest.raises(NoActiveFileError):
            svc.save()

    def test_save_as_switches_file(self, svc, observer, five, tmp_path):
        svc.load(str(five))
        svc.delete([0])
        dest = tmp_path / "copy.txt"
        result = svc.save_as(str(dest))
        assert result["file_path"] == str(dest)
        assert dest.read_text() == "b\nc\nd\ne\n"
        assert five.read_text() == FIVE_LINES
        assert svc.summary()["file_path"] == str(dest)
        assert observer.last == (False, str(dest))

    def test_save_as_failure(self, svc, five, tmp_path):
        svc.load(str(five))
        svc.delete([0])
        with pytest.raises(DocumentSaveError):
            svc.save_as(str(tmp_path / "nowhere" / "x.txt"))
        assert svc.document.modified
        assert svc.summary()["file_path"] == str(five)

    def test_rename_failure(self, svc, observer, five, monkeypatch):
        svc.load(str(five))
        svc.move_to_top([4])
        calls_before = len(observer.calls)

        def failing_replace(src, dst):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(os, "replace", failing_replace)
        with pytest.raises(AtomicRenameError):
            svc.save()
        assert five.read_text() == FIVE_LINES
        assert svc.document.modified
        assert temp_path_for(five).exists()
        assert len(observer.calls) == calls_before


# ==================================================================
# Quit
# ==================================================================

class TestQuit:
    def test_clean_document_may_quit(self, svc, five):
        svc.load(str(five))
        assert svc.request_quit()

    def test_modified_document_needs_confirmation(self, svc, five):
        svc.load(str(five))
        svc.delete([0])
        assert not svc.request_quit()
        assert svc.request_quit(confirmed=True)

    def test_empty_service_may_quit(self, svc):
        assert svc.request_quit()
