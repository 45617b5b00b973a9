"""Tests for the built-in Python opponent search."""

import pytest

from chesstable.core.enums import MoveKind
from chesstable.core.position import STARTING_FEN, ChessPosition
from chesstable.core.types import parse_square
from chesstable.engine import PythonSearchEngine, SearchLimits
from chesstable.engine.python_search import _MATE_SCORE

_UNBOUNDED = SearchLimits(max_depth=2, time_limit_ms=None)


class TestPythonSearchEngine:
    def test_returns_legal_move_from_start(self) -> None:
        pos = ChessPosition()
        result = PythonSearchEngine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move in pos.get_legal_moves()
        assert result.nodes > 0

    def test_finds_back_rank_mate(self) -> None:
        pos = ChessPosition("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        result = PythonSearchEngine().search(pos, _UNBOUNDED)
        assert result.best_move is not None
        assert result.best_move.from_sq == parse_square("a1")
        assert result.best_move.to_sq == parse_square("a8")

    def test_takes_hanging_queen(self) -> None:
        pos = ChessPosition("4k3/8/8/3q4/4P3/8/8/4K3 w - - 0 1")
        result = PythonSearchEngine().search(pos, _UNBOUNDED)
        assert result.best_move is not None
        assert result.best_move.to_sq == parse_square("d5")
        assert result.best_move.is_capture

    def test_checkmated_side_has_no_move(self) -> None:
        pos = ChessPosition("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
        result = PythonSearchEngine().search(pos, _UNBOUNDED)
        assert result.best_move is None
        assert result.score_cp == -_MATE_SCORE

    def test_stalemate_has_no_move(self) -> None:
        pos = ChessPosition("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        result = PythonSearchEngine().search(pos, _UNBOUNDED)
        assert result.best_move is None
        assert result.score_cp == 0

    def test_cancelled_search_still_answers(self) -> None:
        pos = ChessPosition()
        result = PythonSearchEngine().search(pos, _UNBOUNDED, is_cancelled=lambda: True)
        assert result.best_move in pos.get_legal_moves()
        assert result.depth == 0

    def test_tiny_time_budget_answers(self) -> None:
        pos = ChessPosition()
        result = PythonSearchEngine().search(pos, SearchLimits(max_depth=8, time_limit_ms=1))
        assert result.best_move in pos.get_legal_moves()

    def test_promotes(self) -> None:
        pos = ChessPosition("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
        result = PythonSearchEngine().search(pos, _UNBOUNDED)
        assert result.best_move is not None
        assert result.best_move.kind == MoveKind.PROMOTION

    def test_rejects_zero_depth(self) -> None:
        with pytest.raises(ValueError):
            PythonSearchEngine().search(ChessPosition(), SearchLimits(max_depth=0))

    def test_does_not_mutate_position(self) -> None:
        pos = ChessPosition()
        PythonSearchEngine().search(pos, SearchLimits(max_depth=2, time_limit_ms=200))
        assert pos.fen() == STARTING_FEN
