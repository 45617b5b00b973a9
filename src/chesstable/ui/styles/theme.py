"""Visual theme constants and QSS styles for chesstable."""

from __future__ import annotations

from dataclasses import dataclass, field

from PyQt6.QtGui import QColor

from chesstable.core.enums import MoveTag


def _default_tag_colors() -> dict[MoveTag, QColor]:
    return {
        MoveTag.POSITIONAL: QColor(0, 0, 0, 45),  # dark dot overlay
        MoveTag.CAPTURE: QColor(220, 40, 40, 110),  # red
        MoveTag.DOUBLE_PUSH: QColor(60, 120, 220, 90),  # blue
        MoveTag.EN_PASSANT: QColor(200, 60, 200, 110),  # magenta
        MoveTag.PROMOTION: QColor(255, 170, 0, 120),  # amber
        MoveTag.CASTLE: QColor(0, 160, 140, 100),  # teal
    }


# When a square carries several tags the first match here decides its colour.
TAG_PRIORITY: tuple[MoveTag, ...] = (
    MoveTag.PROMOTION,
    MoveTag.EN_PASSANT,
    MoveTag.CAPTURE,
    MoveTag.CASTLE,
    MoveTag.DOUBLE_PUSH,
    MoveTag.POSITIONAL,
)


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    movable: QColor  # squares holding a piece that can move
    highlight_from: QColor  # hovered / dragged origin
    last_move: QColor
    dim: QColor  # overlay while the opponent thinks
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares
    white_piece: QColor = field(default_factory=lambda: QColor(250, 250, 250))
    black_piece: QColor = field(default_factory=lambda: QColor(20, 20, 20))
    tag_colors: dict[MoveTag, QColor] = field(default_factory=_default_tag_colors)

    def destination_color(self, tags: frozenset[MoveTag]) -> QColor:
        for tag in TAG_PRIORITY:
            if tag in tags:
                return self.tag_colors[tag]
        return self.tag_colors[MoveTag.POSITIONAL]

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            movable=QColor(255, 255, 255, 40),
            highlight_from=QColor(255, 255, 0, 100),  # yellow transparent
            last_move=QColor(155, 199, 0, 105),  # green
            dim=QColor(0, 0, 0, 90),
            coord_light=QColor(181, 136, 99),
            coord_dark=QColor(240, 217, 181),
        )

    @classmethod
    def slate(cls) -> BoardTheme:
        return cls(
            light_square=QColor(224, 226, 231),
            dark_square=QColor(101, 110, 122),
            movable=QColor(255, 255, 255, 40),
            highlight_from=QColor(255, 255, 0, 100),
            last_move=QColor(155, 199, 0, 105),
            dim=QColor(0, 0, 0, 90),
            coord_light=QColor(101, 110, 122),
            coord_dark=QColor(224, 226, 231),
        )


THEMES: dict[str, BoardTheme] = {
    "Classic": BoardTheme.default(),
    "Slate": BoardTheme.slate(),
}


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
}

QListWidget {
    background: #1e1e1e;
    color: #d4d4d4;
    border: 1px solid #3c3c3c;
    font-family: "Consolas", monospace;
    font-size: 13px;
}

QListWidget::item:hover {
    background: #264f78;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}

QPushButton:hover {
    background: #4a4a4a;
}

QPushButton:disabled {
    color: #777;
}
"""
