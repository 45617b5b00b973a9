"""Tests for the move list panel."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from chesstable.core.position import ChessPosition
from chesstable.ui.i18n import set_language
from chesstable.ui.panels.move_panel import MovePanel


def test_show_moves_lists_entries_and_links() -> None:
    panel = MovePanel()
    moves = ChessPosition().get_legal_moves()

    panel.show_moves(moves, can_undo=False, can_auto=True)

    texts = panel.move_texts()
    assert len(texts) == 20
    assert "e2-e4" in texts
    assert not panel.undo_enabled
    assert panel.auto_enabled


def test_clicking_entry_emits_index() -> None:
    panel = MovePanel()
    panel.show_moves(ChessPosition().get_legal_moves(), can_undo=True, can_auto=True)
    spy = QSignalSpy(panel.move_clicked)

    panel.click_move(4)

    assert len(spy) == 1
    assert spy[0][0] == 4


def test_click_out_of_range_is_ignored() -> None:
    panel = MovePanel()
    spy = QSignalSpy(panel.move_clicked)
    panel.click_move(0)
    assert len(spy) == 0


def test_undo_and_auto_signals() -> None:
    panel = MovePanel()
    panel.show_moves((), can_undo=True, can_auto=True)
    undo = QSignalSpy(panel.undo_clicked)
    auto = QSignalSpy(panel.auto_clicked)

    panel.trigger_undo()
    panel.trigger_auto()

    assert len(undo) == 1
    assert len(auto) == 1


def test_disabled_links_do_not_fire() -> None:
    panel = MovePanel()
    panel.show_moves((), can_undo=False, can_auto=False)
    undo = QSignalSpy(panel.undo_clicked)

    panel.trigger_undo()

    assert len(undo) == 0


def test_result_line() -> None:
    panel = MovePanel()
    panel.show_result("#\n1-0")
    assert panel.result_text == "#\n1-0"
    panel.show_result(None)
    assert panel.result_text is None


def test_retranslate_ui() -> None:
    panel = MovePanel()
    set_language("Russian")
    panel.retranslate_ui()
    assert panel._undo_btn.text() == "отменить"
