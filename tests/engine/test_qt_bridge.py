"""Tests for the Qt engine bridge worker."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from chesstable.core.position import ChessPosition
from chesstable.engine.qt_bridge import EngineWorker
from chesstable.engine.search import CancelCheck, SearchLimits, SearchResult


class _CancellingEngine:
    def __init__(self, worker: EngineWorker) -> None:
        self._worker = worker

    def search(
        self,
        position: ChessPosition,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        self._worker.cancel()
        return SearchResult(position.get_legal_moves()[0], 0, 1, 1)


class _NoMoveEngine:
    def search(
        self,
        _position: ChessPosition,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        return SearchResult(None, 0, 0, 0)


class _FailingEngine:
    def search(
        self,
        _position: ChessPosition,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        raise RuntimeError("boom")


class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        position = ChessPosition()
        worker = EngineWorker(max_depth=1, time_limit_ms=None)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(position, 3)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        assert best_moves[0][1] in position.get_legal_moves()

    def test_emits_cancelled_when_search_is_cancelled(self) -> None:
        worker = EngineWorker(engine=None)
        worker._engine = _CancellingEngine(worker)
        cancelled = QSignalSpy(worker.search_cancelled)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(ChessPosition(), 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(best_moves) == 0

    def test_emits_no_move_when_search_returns_none(self) -> None:
        worker = EngineWorker(engine=_NoMoveEngine())
        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(ChessPosition(), 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_when_engine_raises(self) -> None:
        worker = EngineWorker(engine=_FailingEngine())
        errors = QSignalSpy(worker.search_error)

        worker.request_move(ChessPosition(), 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert "boom" in errors[0][1]

    def test_rejects_foreign_position(self) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a position", 2)

        assert len(errors) == 1

    def test_set_limits(self) -> None:
        worker = EngineWorker()
        worker.set_limits(5, 1500)
        assert worker.limits == SearchLimits(max_depth=5, time_limit_ms=1500)
