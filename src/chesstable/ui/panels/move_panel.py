"""MovePanel — clickable list of the legal moves plus the undo/auto actions."""

from __future__ import annotations

from collections.abc import Sequence

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QSizePolicy,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from chesstable.core.move import Move
from chesstable.ui.i18n import t

_LINK_STYLE = """
    QToolButton {
        background: transparent;
        color: #8ab4f8;
        border: 1px solid transparent;
        border-radius: 4px;
        padding: 2px 8px;
        text-decoration: underline;
    }
    QToolButton:hover {
        background: #3c3c3c;
        border-color: #555;
    }
    QToolButton:disabled {
        color: #6a6a6a;
        text-decoration: none;
    }
"""


class MovePanel(QWidget):
    """Lists the moves available to the human; a click plays that move.

    Signals:
        move_clicked(int): index into the list last passed to :meth:`show_moves`.
        undo_clicked(): the ``undo`` link was activated.
        auto_clicked(): the ``auto`` link was activated.
    """

    move_clicked = pyqtSignal(int)
    undo_clicked = pyqtSignal()
    auto_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._moves: tuple[Move, ...] = ()
        self._result_text: str | None = None
        self._setup_ui()
        self.retranslate_ui()
        self.show_moves((), can_undo=False, can_auto=False)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self._header = QLabel()
        self._header.setFont(QFont("Sans", 12, QFont.Weight.Bold))
        self._header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._header)

        links = QHBoxLayout()
        self._undo_btn = self._create_link()
        self._undo_btn.clicked.connect(self.undo_clicked)
        self._auto_btn = self._create_link()
        self._auto_btn.clicked.connect(self.auto_clicked)
        links.addWidget(self._undo_btn)
        links.addWidget(self._auto_btn)
        layout.addLayout(links)

        self._list = QListWidget()
        self._list.setAlternatingRowColors(True)
        self._list.setFont(QFont("Monospace", 12))
        self._list.itemClicked.connect(self._on_item_activated)
        layout.addWidget(self._list)

        self._result = QLabel()
        self._result.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._result.setFont(QFont("Sans", 14, QFont.Weight.Bold))
        self._result.setVisible(False)
        layout.addWidget(self._result)

    @staticmethod
    def _create_link() -> QToolButton:
        btn = QToolButton()
        btn.setCursor(Qt.CursorShape.PointingHandCursor)
        btn.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        btn.setStyleSheet(_LINK_STYLE)
        return btn

    def retranslate_ui(self) -> None:
        s = t()
        self._header.setText(s.moves_header)
        self._undo_btn.setText(s.undo)
        self._auto_btn.setText(s.auto)

    # ── Move list view ───────────────────────────────────────────────────

    def show_moves(
        self,
        moves: Sequence[Move],
        *,
        can_undo: bool,
        can_auto: bool,
    ) -> None:
        self._moves = tuple(moves)
        self._list.clear()
        for index, move in enumerate(self._moves):
            item = QListWidgetItem(str(move))
            item.setData(Qt.ItemDataRole.UserRole, index)
            item.setToolTip(", ".join(sorted(tag.value for tag in move.tags)))
            self._list.addItem(item)
        self._undo_btn.setEnabled(can_undo)
        self._auto_btn.setEnabled(can_auto)

    def show_result(self, text: str | None) -> None:
        self._result_text = text or None
        self._result.setText(text or "")
        self._result.setVisible(bool(text))

    # ── Introspection ────────────────────────────────────────────────────

    def move_texts(self) -> list[str]:
        return [self._list.item(i).text() for i in range(self._list.count())]

    @property
    def result_text(self) -> str | None:
        return self._result_text

    @property
    def undo_enabled(self) -> bool:
        return self._undo_btn.isEnabled()

    @property
    def auto_enabled(self) -> bool:
        return self._auto_btn.isEnabled()

    def click_move(self, index: int) -> None:
        """Programmatically click row *index*."""
        item = self._list.item(index)
        if item is not None:
            self._on_item_activated(item)

    def trigger_undo(self) -> None:
        self._undo_btn.click()

    def trigger_auto(self) -> None:
        self._auto_btn.click()

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        index = item.data(Qt.ItemDataRole.UserRole)
        if isinstance(index, int):
            self.move_clicked.emit(index)
