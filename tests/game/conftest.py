"""In-memory fakes for the views and the opponent used by the game tests."""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping, Sequence
from concurrent.futures import Future

import pytest

from chesstable.core.enums import MoveTag
from chesstable.core.move import Move
from chesstable.core.types import Square
from chesstable.game.interfaces import IOpponent, IPositionModel


class FakeBoard:
    """Records the affordance marks the game layer asks for."""

    def __init__(self) -> None:
        self.movable: frozenset[Square] = frozenset()
        self.hover: tuple[Square, dict[Square, frozenset[MoveTag]]] | None = None
        self.thinking = False
        self.refreshes = 0
        self.animations: list[Move] = []
        self.finish_animations = True
        self._on_done: Callable[[], None] | None = None

    def refresh(self, position: IPositionModel) -> None:
        self.refreshes += 1

    def mark_movable(self, squares: Collection[Square]) -> None:
        self.movable = frozenset(squares)

    def clear_movable(self) -> None:
        self.movable = frozenset()

    def mark_hover(
        self,
        origin: Square,
        destinations: Mapping[Square, frozenset[MoveTag]],
    ) -> None:
        self.hover = (origin, dict(destinations))

    def clear_hover(self) -> None:
        self.hover = None

    def set_thinking(self, thinking: bool) -> None:
        self.thinking = thinking

    def animate_move(self, move: Move, on_done: Callable[[], None]) -> None:
        self.animations.append(move)
        if self.finish_animations:
            on_done()
        else:
            self._on_done = on_done

    def finish_animation(self) -> None:
        on_done, self._on_done = self._on_done, None
        assert on_done is not None
        on_done()


class FakeMoveList:
    def __init__(self) -> None:
        self.moves: tuple[Move, ...] = ()
        self.can_undo = False
        self.can_auto = False
        self.result: str | None = None

    def show_moves(
        self,
        moves: Sequence[Move],
        *,
        can_undo: bool,
        can_auto: bool,
    ) -> None:
        self.moves = tuple(moves)
        self.can_undo = can_undo
        self.can_auto = can_auto

    def show_result(self, text: str | None) -> None:
        self.result = text


class FakeOpponent(IOpponent):
    """Hands out futures that the test resolves explicitly."""

    def __init__(self) -> None:
        self.requests: list[str] = []
        self.futures: list[Future[Move | None]] = []
        self._positions: list[IPositionModel] = []

    def request_move(self, position: IPositionModel) -> Future[Move | None]:
        future: Future[Move | None] = Future()
        self.requests.append(position.fen())
        self._positions.append(position.copy())
        self.futures.append(future)
        return future

    @property
    def pending(self) -> Future[Move | None]:
        return self.futures[-1]

    def reply(self, move: Move | None) -> None:
        self.pending.set_result(move)

    def reply_first(self) -> Move:
        """Answer with the first legal move of the requested position."""
        move = self._positions[-1].get_legal_moves()[0]
        self.reply(move)
        return move

    def fail(self, exc: Exception) -> None:
        self.pending.set_exception(exc)


@pytest.fixture
def board() -> FakeBoard:
    return FakeBoard()


@pytest.fixture
def move_list() -> FakeMoveList:
    return FakeMoveList()


@pytest.fixture
def opponent() -> FakeOpponent:
    return FakeOpponent()
