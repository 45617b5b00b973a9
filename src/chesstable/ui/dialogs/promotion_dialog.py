"""Promotion dialog — lets the user pick the promotion piece."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chesstable.core.enums import Color, PieceType
from chesstable.core.move import Move
from chesstable.core.piece import Piece
from chesstable.game.interfaces import DisambiguationHook
from chesstable.ui.i18n import t

_CHOICES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)


class PromotionDialog(QDialog):
    """Modal dialog to select the promotion piece type."""

    def __init__(
        self,
        color: Color,
        choices: Sequence[PieceType] = _CHOICES,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        self._selected: PieceType = choices[0]
        self._buttons: dict[PieceType, QPushButton] = {}

        layout = QVBoxLayout(self)
        self._label = QLabel()
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._label)

        btn_row = QHBoxLayout()
        glyph_font = QFont()
        glyph_font.setPointSize(32)
        for pt in choices:
            btn = QPushButton(Piece(color, pt).glyph)
            btn.setFont(glyph_font)
            btn.setFixedSize(68, 68)
            btn.setToolTip(pt.name.capitalize())
            btn.clicked.connect(lambda checked, p=pt: self._choose(p))
            btn_row.addWidget(btn)
            self._buttons[pt] = btn

        layout.addLayout(btn_row)
        self.retranslate_ui()

    def retranslate_ui(self) -> None:
        s = t()
        self.setWindowTitle(s.promote_title)
        self._label.setText(s.promote_label)

    def _choose(self, piece_type: PieceType) -> None:
        self._selected = piece_type
        self.accept()

    @property
    def selected(self) -> PieceType:
        return self._selected

    @staticmethod
    def ask(
        color: Color,
        choices: Sequence[PieceType] = _CHOICES,
        parent: QWidget | None = None,
    ) -> PieceType | None:
        """Show the dialog and return the chosen piece type, or ``None`` on cancel."""
        dlg = PromotionDialog(color, choices, parent)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            return dlg.selected
        return None


def dialog_chooser(
    side: Callable[[], Color],
    parent: QWidget | None = None,
) -> DisambiguationHook:
    """Disambiguation hook that asks the user through :class:`PromotionDialog`.

    *side* returns the color of the promoting pawn at the time of the drop.
    """

    def _choose(candidates: Sequence[Move]) -> Move | None:
        offered = [m.promotion for m in candidates if m.promotion is not None]
        if not offered:
            return None
        picked = PromotionDialog.ask(side(), offered, parent)
        if picked is None:
            return None
        for move in candidates:
            if move.promotion == picked:
                return move
        return None

    return _choose
