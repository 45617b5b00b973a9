"""PieceItem — draggable chess glyph on the board scene."""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QCursor, QFont, QPainter, QPainterPath, QPen
from PyQt6.QtWidgets import (
    QGraphicsItem,
    QGraphicsObject,
    QGraphicsSceneHoverEvent,
    QStyleOptionGraphicsItem,
    QWidget,
)

from chesstable.core.enums import Color
from chesstable.core.piece import Piece
from chesstable.core.types import Square

HoverCallback = Callable[[Square, bool], None]  # square, entered


class PieceItem(QGraphicsObject):
    """A single piece drawn as a filled Unicode glyph.

    A ``QGraphicsObject`` so its ``pos`` can be driven by ``QPropertyAnimation``.
    Hover enter/leave are reported through :attr:`on_hover`.
    """

    def __init__(
        self,
        piece: Piece,
        square: Square,
        tile_size: int,
        fill: QColor,
        outline: QColor,
    ) -> None:
        super().__init__()
        self.piece = piece
        self.square = square
        self.on_hover: HoverCallback | None = None
        self._tile_size = tile_size
        self._fill = fill
        self._outline = outline
        self._drag_origin: QPointF | None = None
        self._path = self._glyph_path(piece, tile_size)

        self.setAcceptHoverEvents(True)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, False)
        self.setZValue(1)

    # ── Drawing ──────────────────────────────────────────────────────────

    @staticmethod
    def _glyph_path(piece: Piece, size: int) -> QPainterPath:
        # The solid (black) glyph set gives a fillable silhouette for both sides.
        glyph = Piece(Color.BLACK, piece.piece_type).glyph
        font = QFont()
        font.setPixelSize(int(size * 0.78))
        path = QPainterPath()
        path.addText(0.0, 0.0, font, glyph)
        bounds = path.boundingRect()
        path.translate(size / 2 - bounds.center().x(), size / 2 - bounds.center().y())
        return path

    def boundingRect(self) -> QRectF:
        return QRectF(0.0, 0.0, float(self._tile_size), float(self._tile_size))

    def paint(
        self,
        painter: QPainter | None,
        option: QStyleOptionGraphicsItem | None,
        widget: QWidget | None = None,
    ) -> None:
        if painter is None:
            return
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(QPen(self._outline, max(1.0, self._tile_size / 60)))
        painter.setBrush(QBrush(self._fill))
        painter.drawPath(self._path)

    # ── Hover ────────────────────────────────────────────────────────────

    def hoverEnterEvent(self, event: QGraphicsSceneHoverEvent | None) -> None:
        if self.on_hover is not None:
            self.on_hover(self.square, True)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event: QGraphicsSceneHoverEvent | None) -> None:
        if self.on_hover is not None:
            self.on_hover(self.square, False)
        super().hoverLeaveEvent(event)

    # ── Dragging ─────────────────────────────────────────────────────────

    def set_movable_hint(self, movable: bool) -> None:
        """Show the open-hand cursor on pieces that can move this ply."""
        if movable:
            self.setCursor(QCursor(Qt.CursorShape.OpenHandCursor))
        else:
            self.unsetCursor()

    def enable_drag(self, enabled: bool) -> None:
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, enabled)

    def start_drag(self) -> None:
        """Called at the beginning of a drag gesture."""
        self._drag_origin = self.pos()
        self.setZValue(10)  # bring to front
        self.setCursor(QCursor(Qt.CursorShape.ClosedHandCursor))
        self.setOpacity(0.85)

    def cancel_drag(self) -> None:
        """Snap back to the origin square."""
        if self._drag_origin is not None:
            self.setPos(self._drag_origin)
        self._finish_drag()

    def finish_drag(self) -> None:
        self._finish_drag()

    @property
    def is_dragging(self) -> bool:
        return self._drag_origin is not None

    def _finish_drag(self) -> None:
        self._drag_origin = None
        self.setZValue(1)
        self.setCursor(QCursor(Qt.CursorShape.OpenHandCursor))
        self.setOpacity(1.0)
