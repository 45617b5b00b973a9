"""TurnSequencer — decides who moves next and drives the opponent's turn.

Runs entirely on the GUI thread. After every mutation of the position it
re-evaluates: game over, human to move, or opponent to move. The opponent's
turn has one suspension point (the engine future) and one cosmetic
continuation (the slide animation).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field

from chesstable.core.enums import Color
from chesstable.core.move import Move
from chesstable.game.errors import (
    EngineDesyncError,
    EngineError,
    IllegalStateError,
)
from chesstable.game.interaction import MoveInteractionController
from chesstable.game.interfaces import (
    DisambiguationHook,
    IBoardView,
    IMoveListView,
    IOpponent,
    IPositionModel,
    TurnOutcome,
    TurnPhase,
)

_LOGGER = logging.getLogger(__name__)

PhaseCallback = Callable[[TurnPhase], None]
MoveCallback = Callable[[Move, bool], None]  # move, played by the human side
GameOverCallback = Callable[[TurnOutcome], None]
FatalCallback = Callable[[EngineError], None]


@dataclass
class TurnEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_fatal: list[FatalCallback] = field(default_factory=list)


class TurnSequencer:
    """Alternates the human and the computer opponent until the game ends."""

    __slots__ = (
        "_position",
        "_opponent",
        "_board",
        "_move_list",
        "_human_color",
        "_interaction",
        "_phase",
        "_outcome",
        "_pending",
        "_animating",
        "_failure",
        "events",
    )

    def __init__(
        self,
        *,
        position: IPositionModel,
        opponent: IOpponent,
        board: IBoardView,
        move_list: IMoveListView,
        human_color: Color = Color.WHITE,
        chooser: DisambiguationHook | None = None,
    ) -> None:
        self._position = position
        self._opponent = opponent
        self._board = board
        self._move_list = move_list
        self._human_color = human_color
        self._interaction = MoveInteractionController(position, board, chooser=chooser)
        self._interaction.on_commit.append(self._on_human_commit)
        self._phase = TurnPhase.NOT_STARTED
        self._outcome = TurnOutcome.from_status(position.status, position.turn_color)
        self._pending: Future[Move | None] | None = None
        self._animating: Move | None = None
        self._failure: EngineError | None = None
        self.events = TurnEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def phase(self) -> TurnPhase:
        return self._phase

    @property
    def outcome(self) -> TurnOutcome:
        return self._outcome

    @property
    def failure(self) -> EngineError | None:
        """The error that halted the sequencer, if any."""
        return self._failure

    @property
    def interaction(self) -> MoveInteractionController:
        return self._interaction

    @property
    def position(self) -> IPositionModel:
        return self._position

    @property
    def human_color(self) -> Color:
        return self._human_color

    @property
    def can_undo(self) -> bool:
        return (
            self._phase in (TurnPhase.AWAITING_HUMAN_MOVE, TurnPhase.GAME_OVER)
            and self._undo_depth() > 0
        )

    @property
    def can_auto(self) -> bool:
        moves = self._interaction.legal_moves
        return self._phase == TurnPhase.AWAITING_HUMAN_MOVE and bool(moves)

    # ── Public actions ───────────────────────────────────────────────────

    def start(self) -> None:
        """Evaluate the initial position."""
        if self._phase != TurnPhase.NOT_STARTED:
            raise IllegalStateError(f"Sequencer already started ({self._phase.name})")
        self.evaluate()

    def evaluate(self) -> None:
        """Re-derive the turn phase from the model and render it."""
        if self._phase == TurnPhase.HALTED:
            return

        self._interaction.reset()
        self._board.refresh(self._position)

        self._outcome = TurnOutcome.from_status(
            self._position.status, self._position.turn_color
        )
        if self._outcome.is_terminal:
            self._enter_game_over()
        elif self._position.turn_color == self._human_color:
            self._enter_human_turn()
        else:
            self._request_opponent_move()

    def undo(self) -> bool:
        """Take back the opponent's reply and the human move before it."""
        if not self.can_undo:
            if self._phase in (
                TurnPhase.COMPUTING_OPPONENT_MOVE,
                TurnPhase.ANIMATING_OPPONENT_MOVE,
            ):
                raise IllegalStateError("Cannot undo while the opponent is moving")
            return False

        undone = [self._position.unmake_move() for _ in range(self._undo_depth())]
        _LOGGER.debug("Undid %s", ", ".join(str(m) for m in undone))

        self.evaluate()
        return True

    def auto_move(self) -> None:
        """Let the engine play the human side's current move."""
        if not self.can_auto:
            raise IllegalStateError(f"Auto move unavailable in {self._phase.name}")
        self._request_opponent_move()

    def shutdown(self) -> None:
        """Drop any pending reply or animation without touching the model."""
        self._pending = None
        self._animating = None
        self._interaction.reset()

    def _undo_depth(self) -> int:
        """Plies to take back to reach the human's previous turn, or 0."""
        scratch = self._position.copy()
        plies = 0
        while scratch.can_undo():
            scratch.unmake_move()
            plies += 1
            if scratch.turn_color == self._human_color:
                return plies
        return 0

    # ── Phase entry ──────────────────────────────────────────────────────

    def _enter_game_over(self) -> None:
        outcome = self._outcome
        self._board.set_thinking(False)
        self._move_list.show_moves((), can_undo=self._undo_depth() > 0, can_auto=False)
        text = outcome.result_text
        if outcome.winner is not None:
            text = f"#\n{text}"
        self._move_list.show_result(text)
        _LOGGER.info("Game over: %s (%s)", outcome.result_text, outcome.status.name)
        self._set_phase(TurnPhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(outcome)

    def _enter_human_turn(self) -> None:
        self._board.set_thinking(False)
        self._move_list.show_result(None)
        self._set_phase(TurnPhase.AWAITING_HUMAN_MOVE)
        moves = self._interaction.begin_turn()
        self._move_list.show_moves(
            moves, can_undo=self.can_undo, can_auto=self.can_auto
        )

    def _request_opponent_move(self) -> None:
        self._interaction.reset()
        self._move_list.show_moves((), can_undo=False, can_auto=False)
        self._move_list.show_result(None)
        self._board.set_thinking(True)
        self._set_phase(TurnPhase.COMPUTING_OPPONENT_MOVE)

        future = self._opponent.request_move(self._position)
        self._pending = future
        future.add_done_callback(self._on_opponent_reply)

    # ── Continuations ────────────────────────────────────────────────────

    def _on_human_commit(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, True)
        self.evaluate()

    def _on_opponent_reply(self, future: Future[Move | None]) -> None:
        if future is not self._pending or self._phase != TurnPhase.COMPUTING_OPPONENT_MOVE:
            _LOGGER.debug("Discarding stale opponent reply")
            return
        self._pending = None

        try:
            if future.cancelled():
                raise EngineError("Opponent request was cancelled")
            exc = future.exception()
            if exc is not None:
                raise EngineError(str(exc)) from exc
            move = future.result()
            if move is None:
                raise EngineDesyncError(self._position.fen())
            by_human = self._position.turn_color == self._human_color
            try:
                self._position.make_move(move)
            except ValueError as illegal:
                raise EngineDesyncError(
                    self._position.fen(), f"Opponent returned illegal move {move}"
                ) from illegal
        except EngineError as err:
            self._halt(err)
            raise

        self._animating = move
        self._board.set_thinking(False)
        self._set_phase(TurnPhase.ANIMATING_OPPONENT_MOVE)
        for cb in self.events.on_move:
            cb(move, by_human)
        self._board.animate_move(move, lambda: self._on_animation_finished(move))

    def _on_animation_finished(self, move: Move) -> None:
        if self._animating is not move or self._phase != TurnPhase.ANIMATING_OPPONENT_MOVE:
            return
        self._animating = None
        self.evaluate()

    def _halt(self, err: EngineError) -> None:
        _LOGGER.error("Turn sequencer halted: %s", err)
        self._failure = err
        self._interaction.reset()
        self._board.set_thinking(False)
        self._set_phase(TurnPhase.HALTED)
        for cb in self.events.on_fatal:
            cb(err)

    def _set_phase(self, phase: TurnPhase) -> None:
        if phase == self._phase:
            return
        _LOGGER.debug("Phase %s -> %s", self._phase.name, phase.name)
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
