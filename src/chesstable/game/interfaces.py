"""Interfaces between the turn logic and its collaborators.

The game layer depends only on these; the python-chess position, the Qt
board scene, the move panel and the engine session satisfy them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Mapping, Sequence
from concurrent.futures import Future
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Protocol

from chesstable.core.enums import Color, MoveTag, PositionStatus

if TYPE_CHECKING:
    from chesstable.core.move import Move
    from chesstable.core.piece import Piece
    from chesstable.core.types import Square


# ── Turn FSM states ──────────────────────────────────────────────────────────


class TurnPhase(IntEnum):
    """Finite-state-machine states of the turn sequencer."""

    NOT_STARTED = auto()
    AWAITING_HUMAN_MOVE = auto()
    COMPUTING_OPPONENT_MOVE = auto()
    ANIMATING_OPPONENT_MOVE = auto()
    GAME_OVER = auto()
    HALTED = auto()  # fatal internal error


class OutcomeKind(IntEnum):
    CONTINUE = auto()
    CHECKMATE = auto()
    DRAW = auto()


@dataclass(frozen=True, slots=True)
class TurnOutcome:
    """What the position status means for the turn loop."""

    kind: OutcomeKind
    status: PositionStatus = PositionStatus.NORMAL
    winner: Color | None = None

    @classmethod
    def from_status(cls, status: PositionStatus, side_to_move: Color) -> TurnOutcome:
        if status == PositionStatus.NORMAL:
            return cls(OutcomeKind.CONTINUE)
        if status == PositionStatus.CHECKMATE:
            return cls(OutcomeKind.CHECKMATE, status, side_to_move.opposite)
        return cls(OutcomeKind.DRAW, status)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.CONTINUE

    @property
    def result_text(self) -> str:
        """PGN-style result: ``1-0``, ``0-1``, ``½-½`` or ``*``."""
        if self.kind == OutcomeKind.CHECKMATE:
            return "1-0" if self.winner == Color.WHITE else "0-1"
        if self.kind == OutcomeKind.DRAW:
            return "½-½"
        return "*"


# Picks one of several legal moves sharing origin and destination.
# ``None`` means the user backed out.
DisambiguationHook = Callable[[Sequence["Move"]], "Move | None"]


# ── Collaborator protocols ───────────────────────────────────────────────────


class IPositionModel(Protocol):
    """Legality oracle and owner of the game history."""

    @property
    def turn_color(self) -> Color: ...

    @property
    def status(self) -> PositionStatus: ...

    @property
    def last_move(self) -> Move | None: ...

    def get_legal_moves(self) -> list[Move]: ...

    def make_move(self, move: Move) -> None: ...

    def unmake_move(self) -> Move: ...

    def can_undo(self) -> bool: ...

    def piece_at(self, sq: Square) -> Piece | None: ...

    def fen(self) -> str: ...

    def copy(self) -> IPositionModel: ...


class IBoardView(Protocol):
    """Per-square affordance marks and the opponent-move animation."""

    def refresh(self, position: IPositionModel) -> None:
        """Redraw pieces, side-to-move marks and the last-move highlight."""

    def mark_movable(self, squares: Collection[Square]) -> None: ...

    def clear_movable(self) -> None: ...

    def mark_hover(
        self,
        origin: Square,
        destinations: Mapping[Square, frozenset[MoveTag]],
    ) -> None: ...

    def clear_hover(self) -> None: ...

    def set_thinking(self, thinking: bool) -> None: ...

    def animate_move(self, move: Move, on_done: Callable[[], None]) -> None:
        """Slide the piece of *move*; must not block, must call *on_done* once."""


class IMoveListView(Protocol):
    """Textual move list with the undo/auto actions and the result line."""

    def show_moves(
        self,
        moves: Sequence[Move],
        *,
        can_undo: bool,
        can_auto: bool,
    ) -> None: ...

    def show_result(self, text: str | None) -> None: ...


class IGestureSink(Protocol):
    """Abstract pointer events fed by the concrete input layer."""

    def hover_enter(self, sq: Square) -> None: ...

    def hover_leave(self, sq: Square) -> None: ...

    def drag_start(self, sq: Square) -> bool: ...

    def drop(self, sq: Square | None) -> object: ...

    def drag_end(self) -> None: ...


class IOpponent(ABC):
    """Asynchronous computer opponent."""

    @abstractmethod
    def request_move(self, position: IPositionModel) -> Future[Move | None]:
        """Start a search on a copy of *position*.

        The returned future resolves on the caller's thread with the chosen
        move, ``None`` if the engine found none, or an
        :class:`~chesstable.game.errors.EngineError`.
        """
