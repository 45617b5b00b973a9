"""BoardScene — QGraphicsScene that draws the board and feeds gesture events.

Implements the board-view capability of the turn logic (movable, hover and
destination marks, last move, thinking overlay, opponent-move animation) and
translates Qt mouse events into the abstract gesture events of an
:class:`~chesstable.game.interfaces.IGestureSink`.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping
from typing import TYPE_CHECKING

from PyQt6.QtCore import (
    QAbstractAnimation,
    QEasingCurve,
    QObject,
    QPointF,
    QPropertyAnimation,
    Qt,
)
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chesstable.core.enums import Color, MoveKind, MoveTag
from chesstable.core.move import Move
from chesstable.core.types import (
    ALL_SQUARES,
    Square,
    file_of,
    is_light,
    make_square,
    rank_of,
    square_title,
)
from chesstable.game.interaction import Resolved
from chesstable.ui.board.piece_item import PieceItem
from chesstable.ui.i18n import t
from chesstable.ui.styles.theme import BoardTheme

if TYPE_CHECKING:
    from chesstable.game.interfaces import IGestureSink, IPositionModel


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, affordance overlays and piece items."""

    TILE = 80  # px per square

    _DEFAULT_ANIM_MS = 400

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._flipped = False
        self._sink: IGestureSink | None = None
        self._dragging_item: PieceItem | None = None
        self._thinking = False
        self._show_coordinates = True
        self._show_legal_moves = True
        self._animate_moves = True
        self._anim_duration_ms = self._DEFAULT_ANIM_MS
        self._active_anim: QPropertyAnimation | None = None

        # Affordance state (queried by tests and the status bar)
        self._movable: frozenset[Square] = frozenset()
        self._hover_origin: Square | None = None
        self._hover_tags: dict[Square, frozenset[MoveTag]] = {}
        self._last_move: Move | None = None

        # Visual layers
        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []
        self._movable_items: list[QGraphicsRectItem] = []
        self._hover_items: list[QGraphicsRectItem] = []
        self._last_move_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Square, PieceItem] = {}
        self._dim_item: QGraphicsRectItem | None = None

        self._draw_board()

    # ── Configuration ────────────────────────────────────────────────────

    def bind(self, sink: IGestureSink | None) -> None:
        """Route pointer gestures to *sink* (``None`` disconnects)."""
        self._sink = sink

    def set_flipped(self, flipped: bool) -> None:
        self._flipped = flipped
        self._draw_board()
        self._relayout()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self._relayout()

    def set_show_coordinates(self, visible: bool) -> None:
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        """Show or hide destination highlights while hovering."""
        self._show_legal_moves = visible
        if not visible:
            self._clear_items(self._hover_items)

    def set_animate_moves(self, enabled: bool, duration_ms: int | None = None) -> None:
        self._animate_moves = enabled
        if duration_ms is not None:
            self._anim_duration_ms = max(1, duration_ms)

    # ── Introspection ────────────────────────────────────────────────────

    @property
    def movable_squares(self) -> frozenset[Square]:
        return self._movable

    @property
    def hover_origin(self) -> Square | None:
        return self._hover_origin

    @property
    def hover_tags(self) -> dict[Square, frozenset[MoveTag]]:
        return dict(self._hover_tags)

    @property
    def last_move(self) -> Move | None:
        return self._last_move

    @property
    def is_thinking(self) -> bool:
        return self._thinking

    @property
    def is_animating(self) -> bool:
        return self._active_anim is not None

    def piece_item(self, sq: Square) -> PieceItem | None:
        return self._piece_items.get(sq)

    # ── Board view capability ────────────────────────────────────────────

    def refresh(self, position: IPositionModel) -> None:
        """Re-create all piece items and the last-move highlight."""
        if self._active_anim is not None:
            self._active_anim.stop()
            self._active_anim = None
        self._dragging_item = None
        self._sync_pieces(position)
        self._highlight_last_move(position.last_move)

    def mark_movable(self, squares: Collection[Square]) -> None:
        self.clear_movable()
        self._movable = frozenset(squares)
        for sq in self._movable:
            rect = self._make_highlight(sq, self._theme.movable)
            rect.setZValue(0.4)
            self._movable_items.append(rect)
            item = self._piece_items.get(sq)
            if item is not None:
                item.set_movable_hint(True)

    def clear_movable(self) -> None:
        for sq in self._movable:
            item = self._piece_items.get(sq)
            if item is not None:
                item.set_movable_hint(False)
        self._movable = frozenset()
        self._clear_items(self._movable_items)

    def mark_hover(
        self,
        origin: Square,
        destinations: Mapping[Square, frozenset[MoveTag]],
    ) -> None:
        self.clear_hover()
        self._hover_origin = origin
        self._hover_tags = dict(destinations)
        self._hover_items.append(self._make_highlight(origin, self._theme.highlight_from))
        if not self._show_legal_moves:
            return
        for sq, tags in destinations.items():
            rect = self._make_highlight(sq, self._theme.destination_color(tags))
            rect.setToolTip(", ".join(sorted(tag.value for tag in tags)))
            self._hover_items.append(rect)

    def clear_hover(self) -> None:
        self._hover_origin = None
        self._hover_tags = {}
        self._clear_items(self._hover_items)

    def set_thinking(self, thinking: bool) -> None:
        """Dim the board while the opponent searches."""
        self._thinking = thinking
        if self._dim_item is not None:
            self._dim_item.setVisible(thinking)

    def animate_move(self, move: Move, on_done: Callable[[], None]) -> None:
        """Slide the piece of *move* from its origin to its destination.

        Only the piece items move; the caller refreshes from the model in
        *on_done*. Without animation *on_done* runs immediately.
        """
        if self._active_anim is not None:
            self._active_anim.stop()
            self._active_anim = None

        item = self._piece_items.get(move.from_sq)
        if not self._animate_moves or item is None:
            on_done()
            return

        self._remove_captured(move)
        self._snap_castling_rook(move)

        origin = self._square_origin(move.from_sq)
        target = self._square_origin(move.to_sq)
        displacement = target - origin

        del self._piece_items[move.from_sq]
        self._piece_items[move.to_sq] = item
        item.square = move.to_sq
        item.setZValue(2)

        anim = QPropertyAnimation(item, b"pos", self)
        anim.setDuration(self._anim_duration_ms)
        anim.setStartValue(item.pos())
        anim.setEndValue(item.pos() + displacement)
        anim.setEasingCurve(QEasingCurve.Type.InOutQuad)

        def _on_finished() -> None:
            if self._active_anim is not anim:
                return
            self._active_anim = None
            item.setZValue(1)
            on_done()

        anim.finished.connect(_on_finished)
        self._active_anim = anim
        anim.start(QAbstractAnimation.DeletionPolicy.DeleteWhenStopped)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares, coordinates and the dim overlay."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        self._clear_items(self._coord_items)
        if self._dim_item is not None:
            self.removeItem(self._dim_item)

        t_ = self.TILE
        font = QFont()
        font.setPixelSize(max(9, t_ // 7))

        for sq in ALL_SQUARES:
            f, r = file_of(sq), rank_of(sq)
            vf, vr = self._visual_coords(f, r)
            light = is_light(sq)
            rect = QGraphicsRectItem(vf * t_, vr * t_, t_, t_)
            rect.setBrush(
                QBrush(self._theme.light_square if light else self._theme.dark_square)
            )
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            rect.setToolTip(square_title(sq))
            self.addItem(rect)
            self._square_items[sq] = rect

            text_color = self._theme.coord_dark if not light else self._theme.coord_light
            if vf == 0:
                self._add_coord(str(r + 1), font, text_color, vf * t_ + 2, vr * t_ + 1)
            if vr == 7:
                self._add_coord(
                    chr(ord("a") + f), font, text_color, vf * t_ + t_ - 12, vr * t_ + t_ - 16
                )

        self._dim_item = QGraphicsRectItem(0, 0, 8 * t_, 8 * t_)
        self._dim_item.setBrush(QBrush(self._theme.dim))
        self._dim_item.setPen(QPen(Qt.PenStyle.NoPen))
        self._dim_item.setZValue(20)
        self._dim_item.setVisible(self._thinking)
        self.addItem(self._dim_item)

        self.setSceneRect(0, 0, 8 * t_, 8 * t_)

    def _add_coord(
        self, label: str, font: QFont, color: QColor, x: float, y: float
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    def _relayout(self) -> None:
        """Re-place overlays and pieces after a flip or theme change."""
        for sq, item in self._piece_items.items():
            item.setPos(self._square_origin(sq))
        movable = self._movable
        origin, tags = self._hover_origin, self._hover_tags
        last = self._last_move
        self.mark_movable(movable)
        self._highlight_last_move(last)
        if origin is not None:
            self.mark_hover(origin, tags)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self, position: IPositionModel) -> None:
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        s = t()
        for sq in ALL_SQUARES:
            piece = position.piece_at(sq)
            if piece is None:
                continue
            white = piece.color == Color.WHITE
            item = PieceItem(
                piece,
                sq,
                self.TILE,
                self._theme.white_piece if white else self._theme.black_piece,
                self._theme.black_piece if white else self._theme.white_piece,
            )
            item.setPos(self._square_origin(sq))
            item.setToolTip(
                f"{square_title(sq)}\nPiece: {piece.name}\n"
                f"Color: {s.piece_white if white else s.piece_black}"
            )
            item.on_hover = self._on_piece_hover
            item.set_movable_hint(sq in self._movable)
            self.addItem(item)
            self._piece_items[sq] = item

    def _remove_captured(self, move: Move) -> None:
        if move.kind == MoveKind.EN_PASSANT_CAPTURE:
            captured_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
        else:
            captured_sq = move.to_sq
        cap = self._piece_items.pop(captured_sq, None)
        if cap is not None:
            self.removeItem(cap)

    def _snap_castling_rook(self, move: Move) -> None:
        if not move.is_castle:
            return
        rank = rank_of(move.from_sq)
        if move.kind == MoveKind.KING_CASTLE:
            rook_from, rook_to = make_square(7, rank), make_square(5, rank)
        else:
            rook_from, rook_to = make_square(0, rank), make_square(3, rank)
        rook = self._piece_items.pop(rook_from, None)
        if rook is not None:
            rook.setPos(self._square_origin(rook_to))
            rook.square = rook_to
            self._piece_items[rook_to] = rook

    # ── Mouse interaction ────────────────────────────────────────────────

    def _on_piece_hover(self, sq: Square, entered: bool) -> None:
        if self._sink is None or self._thinking:
            return
        if entered:
            self._sink.hover_enter(sq)
        else:
            self._sink.hover_leave(sq)

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is None or self._sink is None or self._thinking:
            return super().mousePressEvent(event)

        sq = self._pos_to_square(event.scenePos())
        item = self._piece_items.get(sq) if sq is not None else None
        if (
            sq is not None
            and item is not None
            and sq in self._movable
            and event.button() == Qt.MouseButton.LeftButton
            and self._sink.drag_start(sq)
        ):
            item.enable_drag(True)
            item.start_drag()
            self._dragging_item = item

        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        item = self._dragging_item
        if item is not None and event is not None and self._sink is not None:
            self._dragging_item = None
            sink = self._sink
            target = self._pos_to_square(event.scenePos())
            result = sink.drop(target)
            if isinstance(result, Resolved) and target is not None:
                # A refresh from the model may already have replaced this item.
                if item.scene() is self:
                    item.setPos(self._square_origin(target))
                item.finish_drag()
            else:
                item.cancel_drag()
            item.enable_drag(False)
            sink.drag_end()

        super().mouseReleaseEvent(event)

    # ── Overlays ─────────────────────────────────────────────────────────

    def _highlight_last_move(self, move: Move | None) -> None:
        self._clear_items(self._last_move_items)
        self._last_move = move
        if move is None:
            return
        for sq in (move.from_sq, move.to_sq):
            rect = self._make_highlight(sq, self._theme.last_move)
            rect.setZValue(0.5)
            self._last_move_items.append(rect)

    def _clear_items(self, items: list) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    def _make_highlight(self, sq: Square, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t_ = self.TILE
        origin = self._square_origin(sq)
        rect = QGraphicsRectItem(origin.x(), origin.y(), t_, t_)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, file: int, rank: int) -> tuple[int, int]:
        """Convert board file/rank to visual column/row."""
        if self._flipped:
            return 7 - file, rank
        return file, 7 - rank

    def _square_origin(self, sq: Square) -> QPointF:
        vf, vr = self._visual_coords(file_of(sq), rank_of(sq))
        return QPointF(vf * self.TILE, vr * self.TILE)

    def _pos_to_square(self, pos: QPointF) -> Square | None:
        """Scene position → board square."""
        t_ = self.TILE
        col = int(pos.x() // t_)
        row = int(pos.y() // t_)
        if not (0 <= col < 8 and 0 <= row < 8):
            return None
        if self._flipped:
            f, r = 7 - col, row
        else:
            f, r = col, 7 - row
        return make_square(f, r)
