"""MoveInteractionController — turns the legal-move set into gestures and moves.

One instance serves one board. Per ply it caches the legal-move set, builds a
fresh :class:`GestureState`, marks movable origins, and resolves drops and
move-list clicks into exactly one committed move.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from chesstable.core.enums import MoveTag, PieceType
from chesstable.core.move import Move
from chesstable.core.types import Square, square_name
from chesstable.game.errors import StaleMoveSetError
from chesstable.game.gesture import GestureState
from chesstable.game.interfaces import DisambiguationHook, IBoardView, IPositionModel

_LOGGER = logging.getLogger(__name__)

CommitCallback = Callable[[Move], None]


# ── Gesture resolutions ──────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Resolved:
    move: Move


@dataclass(frozen=True, slots=True)
class InvalidDrop:
    """The gesture matched no legal move; nothing was changed."""

    origin: Square | None
    target: Square | None


@dataclass(frozen=True, slots=True)
class AmbiguousMove:
    """Several legal moves share origin and destination (promotions)."""

    candidates: tuple[Move, ...]


GestureResolution = Resolved | InvalidDrop | AmbiguousMove


# ── Disambiguation hooks ─────────────────────────────────────────────────────


def choose_first(candidates: Sequence[Move]) -> Move | None:
    """Take the first candidate in generation order.

    Opt-in only: it never asks the user which piece to promote to.
    """
    return candidates[0] if candidates else None


def prefer_piece(piece_type: PieceType) -> DisambiguationHook:
    """Hook that promotes to *piece_type* when offered, else the first candidate."""

    def _choose(candidates: Sequence[Move]) -> Move | None:
        for move in candidates:
            if move.promotion == piece_type:
                return move
        return choose_first(candidates)

    return _choose


# ── Controller ───────────────────────────────────────────────────────────────


class MoveInteractionController:
    """Resolves pointer gestures against the current ply's legal moves.

    Implements the abstract gesture events (``hover_enter``, ``hover_leave``,
    ``drag_start``, ``drop``, ``drag_end``) that the board scene feeds in.
    Listeners in :attr:`on_commit` run after every committed move, once the
    ply-scoped state has been discarded.
    """

    __slots__ = ("_position", "_view", "_chooser", "_moves", "_gesture", "on_commit")

    def __init__(
        self,
        position: IPositionModel,
        view: IBoardView,
        *,
        chooser: DisambiguationHook | None = None,
    ) -> None:
        self._position = position
        self._view = view
        self._chooser = chooser
        self._moves: tuple[Move, ...] | None = None
        self._gesture: GestureState | None = None
        self.on_commit: list[CommitCallback] = []

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def legal_moves(self) -> tuple[Move, ...] | None:
        """The cached move set, or ``None`` outside a human turn."""
        return self._moves

    @property
    def gesture(self) -> GestureState | None:
        return self._gesture

    @property
    def is_active(self) -> bool:
        return self._moves is not None

    # ── Ply lifecycle ────────────────────────────────────────────────────

    def compute_legal_move_set(self) -> tuple[Move, ...]:
        """Query the model once and cache the result for this ply."""
        moves = tuple(self._position.get_legal_moves())
        self._moves = moves
        self._gesture = GestureState(m.from_sq for m in moves)
        return moves

    def render_affordances(self, moves: Sequence[Move]) -> None:
        self._view.mark_movable(sorted({m.from_sq for m in moves}))

    def begin_turn(self) -> tuple[Move, ...]:
        self.reset()
        moves = self.compute_legal_move_set()
        self.render_affordances(moves)
        return moves

    def reset(self) -> None:
        """Forget the move set and gesture and clear every ply-scoped mark."""
        self._moves = None
        self._gesture = None
        self._view.clear_hover()
        self._view.clear_movable()

    def candidates(self, origin: Square) -> tuple[Move, ...]:
        if self._moves is None:
            return ()
        return tuple(m for m in self._moves if m.from_sq == origin)

    # ── Hover ────────────────────────────────────────────────────────────

    def on_hover_origin(self, sq: Square) -> bool:
        gesture = self._gesture
        if gesture is None or not gesture.hover_enter(sq):
            return False

        destinations: dict[Square, set[MoveTag]] = {}
        for move in self.candidates(sq):
            destinations.setdefault(move.to_sq, set()).update(move.tags)

        self._view.clear_hover()
        self._view.mark_hover(
            sq, {to: frozenset(tags) for to, tags in destinations.items()}
        )
        return True

    def on_hover_exit(self) -> bool:
        gesture = self._gesture
        if gesture is None or not gesture.hover_leave():
            return False
        self._view.clear_hover()
        return True

    # ── Resolution ───────────────────────────────────────────────────────

    def on_gesture_commit(
        self, sq: Square | None, origin: Square | None
    ) -> GestureResolution:
        """Match a drop on *sq* against the candidates leaving *origin*."""
        matches: tuple[Move, ...] = ()
        if sq is not None and origin is not None:
            matches = tuple(m for m in self.candidates(origin) if m.to_sq == sq)

        if not matches:
            _LOGGER.debug(
                "Invalid drop %s -> %s",
                square_name(origin) if origin is not None else "?",
                square_name(sq) if sq is not None else "off-board",
            )
            self._revert()
            return InvalidDrop(origin, sq)
        if len(matches) == 1:
            return Resolved(matches[0])
        return AmbiguousMove(matches)

    def commit(self, move: Move) -> None:
        """Apply *move* to the model and discard this ply's state."""
        if self._moves is None or move not in self._moves:
            raise StaleMoveSetError(f"{move} is not in the current legal-move set")

        _LOGGER.debug("Committing %s", move)
        self._position.make_move(move)
        self.reset()
        for cb in list(self.on_commit):
            cb(move)

    def select_listed(self, index: int) -> GestureResolution:
        """Commit the *index*-th entry of the textual move list."""
        moves = self._moves
        if moves is None:
            raise StaleMoveSetError("No legal-move set for the current ply")
        if not 0 <= index < len(moves):
            _LOGGER.debug("Listed move index %d out of range", index)
            return InvalidDrop(None, None)

        move = moves[index]
        resolution = self.on_gesture_commit(move.to_sq, move.from_sq)
        if isinstance(resolution, AmbiguousMove):
            # The list entry already names the promotion piece.
            resolution = Resolved(move)
        if isinstance(resolution, Resolved):
            self.commit(resolution.move)
        return resolution

    # ── Gesture events ───────────────────────────────────────────────────

    def hover_enter(self, sq: Square) -> None:
        self.on_hover_origin(sq)

    def hover_leave(self, sq: Square) -> None:
        gesture = self._gesture
        if gesture is not None and gesture.origin == sq:
            self.on_hover_exit()

    def drag_start(self, sq: Square) -> bool:
        gesture = self._gesture
        if gesture is None:
            return False
        if gesture.origin != sq:
            self.on_hover_origin(sq)
        return gesture.drag_start(sq)

    def drop(self, sq: Square | None) -> GestureResolution | None:
        """Resolve a drop; returns ``None`` when no drag was in progress."""
        gesture = self._gesture
        if gesture is None or not gesture.is_dragging:
            return None

        origin = gesture.origin
        resolution = self.on_gesture_commit(sq, origin)

        if isinstance(resolution, AmbiguousMove):
            if self._chooser is None:
                self._revert()
                return resolution
            choice = self._chooser(resolution.candidates)
            if choice is None:
                self._revert()
                return InvalidDrop(origin, sq)
            if choice not in resolution.candidates:
                raise ValueError(f"Disambiguation picked a non-candidate move: {choice}")
            resolution = Resolved(choice)

        if isinstance(resolution, Resolved):
            self.commit(resolution.move)
        return resolution

    def drag_end(self) -> None:
        if self._gesture is not None:
            self._gesture.drag_stop()

    def _revert(self) -> None:
        if self._gesture is not None:
            self._gesture.reset()
        self._view.clear_hover()
