"""Tests for BoardScene rendering state and gesture forwarding."""

from __future__ import annotations

from PyQt6.QtCore import QEvent, QPointF, Qt
from PyQt6.QtTest import QTest
from PyQt6.QtWidgets import QGraphicsSceneMouseEvent

from chesstable.core.enums import MoveTag
from chesstable.core.position import ChessPosition
from chesstable.core.types import parse_square
from chesstable.game.interaction import MoveInteractionController
from chesstable.ui.board.board_scene import BoardScene


def _center(scene: BoardScene, name: str) -> QPointF:
    origin = scene._square_origin(parse_square(name))
    half = scene.TILE / 2
    return QPointF(origin.x() + half, origin.y() + half)


def _mouse(kind: QEvent.Type, pos: QPointF) -> QGraphicsSceneMouseEvent:
    event = QGraphicsSceneMouseEvent(kind)
    event.setScenePos(pos)
    event.setButton(Qt.MouseButton.LeftButton)
    event.setButtons(Qt.MouseButton.LeftButton)
    return event


def _bound_scene(fen: str | None = None):
    position = ChessPosition(fen)
    scene = BoardScene()
    scene.set_animate_moves(False)
    ctrl = MoveInteractionController(position, scene)
    scene.bind(ctrl)
    scene.refresh(position)
    ctrl.begin_turn()
    return scene, ctrl, position


def _drag(scene: BoardScene, origin: str, target: str) -> None:
    scene._on_piece_hover(parse_square(origin), True)
    scene.mousePressEvent(_mouse(QEvent.Type.GraphicsSceneMousePress, _center(scene, origin)))
    scene.mouseReleaseEvent(
        _mouse(QEvent.Type.GraphicsSceneMouseRelease, _center(scene, target))
    )


def test_pos_to_square_respects_orientation() -> None:
    scene = BoardScene()
    scene.set_flipped(False)
    assert scene._pos_to_square(scene.sceneRect().topLeft()) == parse_square("a8")

    scene.set_flipped(True)
    assert scene._pos_to_square(scene.sceneRect().topLeft()) == parse_square("h1")
    assert scene._pos_to_square(QPointF(-5, 10)) is None


def test_set_show_coordinates_toggles_all_labels_visibility() -> None:
    scene = BoardScene()
    assert scene._coord_items

    scene.set_show_coordinates(False)
    assert all(not item.isVisible() for item in scene._coord_items)

    scene.set_show_coordinates(True)
    assert all(item.isVisible() for item in scene._coord_items)


def test_refresh_creates_piece_items() -> None:
    scene = BoardScene()
    scene.refresh(ChessPosition())
    assert len(scene._piece_items) == 32
    item = scene.piece_item(parse_square("e1"))
    assert item is not None
    assert "Piece: king" in item.toolTip()
    assert scene.piece_item(parse_square("e4")) is None


def test_movable_marks() -> None:
    scene, _, position = _bound_scene()
    assert scene.movable_squares == {m.from_sq for m in position.get_legal_moves()}
    scene.clear_movable()
    assert scene.movable_squares == frozenset()
    assert scene._movable_items == []


def test_hover_marks_destinations() -> None:
    scene, _, _ = _bound_scene()
    scene._on_piece_hover(parse_square("e2"), True)
    assert scene.hover_origin == parse_square("e2")
    assert scene.hover_tags == {
        parse_square("e3"): frozenset({MoveTag.POSITIONAL}),
        parse_square("e4"): frozenset({MoveTag.DOUBLE_PUSH}),
    }
    scene._on_piece_hover(parse_square("e2"), False)
    assert scene.hover_origin is None


def test_hide_legal_moves_keeps_origin_highlight_only() -> None:
    scene = BoardScene()
    scene.set_show_legal_moves(False)
    scene.mark_hover(parse_square("g1"), {parse_square("f3"): frozenset({MoveTag.POSITIONAL})})
    assert len(scene._hover_items) == 1


def test_thinking_blocks_hover() -> None:
    scene, ctrl, _ = _bound_scene()
    scene.set_thinking(True)
    assert scene.is_thinking
    assert scene._dim_item is not None and scene._dim_item.isVisible()
    scene._on_piece_hover(parse_square("e2"), True)
    assert ctrl.gesture is not None and ctrl.gesture.origin is None


def test_drag_and_drop_commits_move() -> None:
    scene, _, position = _bound_scene()
    _drag(scene, "e2", "e4")
    assert position.last_move is not None
    assert position.last_move.to_sq == parse_square("e4")
    assert scene.movable_squares == frozenset()


def test_invalid_drop_snaps_back() -> None:
    scene, ctrl, position = _bound_scene()
    item = scene.piece_item(parse_square("e2"))
    assert item is not None
    start = item.pos()
    _drag(scene, "e2", "e5")
    assert position.ply_count == 0
    assert item.pos() == start
    assert not item.is_dragging
    assert ctrl.gesture is not None and not ctrl.gesture.is_dragging


def test_animate_move_disabled_calls_back_immediately() -> None:
    scene = BoardScene()
    position = ChessPosition()
    scene.refresh(position)
    scene.set_animate_moves(False)
    done: list[bool] = []
    scene.animate_move(position.get_legal_moves()[0], lambda: done.append(True))
    assert done == [True]


def test_animate_move_slides_piece() -> None:
    scene = BoardScene()
    position = ChessPosition()
    scene.refresh(position)
    scene.set_animate_moves(True, 20)
    move = next(m for m in position.get_legal_moves() if m.uci == "g1f3")
    done: list[bool] = []

    scene.animate_move(move, lambda: done.append(True))
    assert scene.is_animating
    for _ in range(100):
        if done:
            break
        QTest.qWait(10)

    assert done == [True]
    item = scene.piece_item(parse_square("f3"))
    assert item is not None
    assert item.pos() == scene._square_origin(parse_square("f3"))
    assert scene.piece_item(parse_square("g1")) is None


def test_animate_capture_removes_victim() -> None:
    scene = BoardScene()
    position = ChessPosition("rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2")
    scene.refresh(position)
    scene.set_animate_moves(True, 5000)
    move = next(m for m in position.get_legal_moves() if m.uci == "e4d5")
    before = len(scene._piece_items)

    scene.animate_move(move, lambda: None)

    assert len(scene._piece_items) == before - 1
    moving = scene.piece_item(parse_square("d5"))
    assert moving is not None and moving.piece.color.name == "WHITE"


def test_refresh_shows_last_move() -> None:
    scene = BoardScene()
    position = ChessPosition()
    move = position.get_legal_moves()[0]
    position.make_move(move)
    scene.refresh(position)
    assert scene.last_move is move
    assert len(scene._last_move_items) == 2
