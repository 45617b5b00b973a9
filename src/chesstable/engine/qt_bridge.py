"""Qt bridge to run the opponent search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesstable.core.position import ChessPosition
from chesstable.engine.python_search import PythonSearchEngine
from chesstable.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes opponent moves on demand."""

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    def __init__(
        self,
        *,
        max_depth: int = 3,
        time_limit_ms: int | None = 700,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = engine if engine is not None else PythonSearchEngine()
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
        self._cancel_event = threading.Event()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Search for a move in *position_obj* and emit the result."""
        if not isinstance(position_obj, ChessPosition):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                position_obj,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id)
            return

        _LOGGER.info(
            "Request %d: %s (score %d cp, depth %d, %d nodes)",
            request_id,
            result.best_move,
            result.score_cp,
            result.depth,
            result.nodes,
        )
        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score_cp,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Abort the running search; used on shutdown only."""
        self._cancel_event.set()

    @pyqtSlot(int, int)
    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Update search limits (takes effect on the next search)."""
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
