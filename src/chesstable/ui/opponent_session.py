"""Computer-opponent session: engine thread lifecycle and future handoff."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from chesstable.core.move import Move
from chesstable.engine.qt_bridge import EngineWorker
from chesstable.engine.search import IEngine
from chesstable.game.errors import EngineError
from chesstable.game.interfaces import IOpponent

if TYPE_CHECKING:
    from chesstable.game.interfaces import IPositionModel

_LOGGER = logging.getLogger(__name__)


class _OpponentBus(QObject):
    """Signal bridge living on the GUI thread.

    Commands are queued to the worker thread; worker results are re-emitted
    here so that the futures resolve on the GUI thread.
    """

    move_requested = pyqtSignal(object, int)
    set_limits_requested = pyqtSignal(int, int)

    best_move = pyqtSignal(int, object, int, int, int)
    cancelled = pyqtSignal(int)
    no_move = pyqtSignal(int)
    failed = pyqtSignal(int, str)


class OpponentSession(IOpponent):
    """Runs :class:`EngineWorker` on a dedicated ``QThread``.

    Each :meth:`request_move` supersedes the previous one; only the latest
    request id can resolve its future.
    """

    _THREAD_WAIT_MS = 2000

    __slots__ = (
        "_bus",
        "_thread",
        "_worker",
        "_request_id",
        "_pending_id",
        "_pending",
        "_is_started",
        "_is_shutting_down",
    )

    def __init__(
        self,
        *,
        parent: QObject | None = None,
        max_depth: int = 3,
        time_limit_ms: int = 700,
        engine: IEngine | None = None,
    ) -> None:
        self._bus = _OpponentBus(parent)
        self._thread = QThread(parent)
        self._worker = EngineWorker(
            max_depth=max_depth, time_limit_ms=time_limit_ms, engine=engine
        )
        self._request_id = 0
        self._pending_id: int | None = None
        self._pending: Future[Move | None] | None = None
        self._is_started = False
        self._is_shutting_down = False

        self._bus.best_move.connect(self._on_best_move)
        self._bus.cancelled.connect(self._on_cancelled)
        self._bus.no_move.connect(self._on_no_move)
        self._bus.failed.connect(self._on_error)

    @property
    def is_started(self) -> bool:
        return self._is_started

    @property
    def worker(self) -> EngineWorker:
        return self._worker

    @property
    def pending(self) -> Future[Move | None] | None:
        return self._pending

    def setup(self) -> None:
        """Move the worker to its thread, wire the signals and start it."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._worker.moveToThread(self._thread)
        self._bus.move_requested.connect(self._worker.request_move)
        self._bus.set_limits_requested.connect(self._worker.set_limits)
        self._worker.best_move_ready.connect(self._bus.best_move)
        self._worker.search_cancelled.connect(self._bus.cancelled)
        self._worker.search_no_move.connect(self._bus.no_move)
        self._worker.search_error.connect(self._bus.failed)
        self._thread.start()
        self._is_started = True
        _LOGGER.debug("Opponent thread started")

    def shutdown(self) -> None:
        """Abort the running search, stop the thread and cancel the future."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self._worker.cancel()
        self._thread.quit()
        if not self._thread.wait(self._THREAD_WAIT_MS):
            _LOGGER.warning("Opponent thread did not stop within %d ms", self._THREAD_WAIT_MS)
        self._drop_pending()
        self._is_started = False
        _LOGGER.debug("Opponent thread stopped")

    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Update search limits for subsequent requests."""
        if self._is_started:
            self._bus.set_limits_requested.emit(max_depth, time_limit_ms)
            return
        self._worker.set_limits(max_depth, time_limit_ms)

    # ── IOpponent ────────────────────────────────────────────────────────

    def request_move(self, position: IPositionModel) -> Future[Move | None]:
        future: Future[Move | None] = Future()
        if not self._is_started or self._is_shutting_down:
            future.set_exception(EngineError("Opponent session is not running"))
            return future

        self._drop_pending()
        self._request_id += 1
        self._pending_id = self._request_id
        self._pending = future
        _LOGGER.debug("Opponent request %d for %s", self._request_id, position.fen())
        self._bus.move_requested.emit(position.copy(), self._request_id)
        return future

    # ── Worker results ───────────────────────────────────────────────────

    def _take(self, request_id: int) -> Future[Move | None] | None:
        if self._is_shutting_down or request_id != self._pending_id:
            return None
        future = self._pending
        self._pending_id = None
        self._pending = None
        return future

    def _on_best_move(
        self,
        request_id: int,
        move_obj: object,
        _score_cp: int,
        _depth: int,
        _nodes: int,
    ) -> None:
        future = self._take(request_id)
        if future is None:
            return
        if not isinstance(move_obj, Move):
            future.set_exception(EngineError(f"Engine returned {move_obj!r}"))
            return
        future.set_result(move_obj)

    def _on_no_move(self, request_id: int) -> None:
        future = self._take(request_id)
        if future is not None:
            future.set_result(None)

    def _on_error(self, request_id: int, message: str) -> None:
        future = self._take(request_id)
        if future is not None:
            future.set_exception(EngineError(message))

    def _on_cancelled(self, request_id: int) -> None:
        future = self._take(request_id)
        if future is not None:
            future.cancel()

    def _drop_pending(self) -> None:
        future = self._pending
        self._pending_id = None
        self._pending = None
        if future is not None and not future.done():
            future.cancel()
