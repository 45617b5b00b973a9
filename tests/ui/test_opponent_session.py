"""Tests for OpponentSession future handoff."""

from __future__ import annotations

from concurrent.futures import Future

import pytest
from PyQt6.QtTest import QTest

from chesstable.core.position import ChessPosition
from chesstable.engine.search import CancelCheck, SearchLimits, SearchResult
from chesstable.game.errors import EngineError
from chesstable.ui.opponent_session import OpponentSession


class _FirstMoveEngine:
    def search(
        self,
        position: ChessPosition,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        return SearchResult(position.get_legal_moves()[0], 0, 1, 1)


def _wait(future: Future, timeout_ms: int = 3000) -> None:
    waited = 0
    while not future.done() and waited < timeout_ms:
        QTest.qWait(10)
        waited += 10


def test_request_before_setup_fails_future() -> None:
    session = OpponentSession()
    future = session.request_move(ChessPosition())
    assert isinstance(future.exception(), EngineError)


def test_shutdown_before_setup_is_noop() -> None:
    session = OpponentSession()
    session.shutdown()
    assert not session.is_started


def test_worker_thread_resolves_future() -> None:
    session = OpponentSession(engine=_FirstMoveEngine())
    session.setup()
    try:
        position = ChessPosition()
        future = session.request_move(position)
        _wait(future)
        assert future.done()
        assert future.result() == position.get_legal_moves()[0]
        assert session.pending is None
    finally:
        session.shutdown()


def test_newer_request_supersedes_older() -> None:
    session = OpponentSession()
    session._is_started = True
    first = session.request_move(ChessPosition())
    second = session.request_move(ChessPosition())
    assert first.cancelled()

    move = ChessPosition().get_legal_moves()[0]
    session._on_best_move(1, move, 0, 1, 1)
    assert not second.done()
    session._on_best_move(2, move, 0, 1, 1)
    assert second.result() == move


def test_no_move_resolves_none() -> None:
    session = OpponentSession()
    session._is_started = True
    future = session.request_move(ChessPosition())
    session._on_no_move(1)
    assert future.result() is None


def test_error_sets_engine_error() -> None:
    session = OpponentSession()
    session._is_started = True
    future = session.request_move(ChessPosition())
    session._on_error(1, "worker died")
    with pytest.raises(EngineError, match="worker died"):
        future.result()


def test_set_limits_before_setup_updates_worker() -> None:
    session = OpponentSession()
    session.set_limits(4, 1200)
    assert session.worker.limits == SearchLimits(max_depth=4, time_limit_ms=1200)
