"""Opponent engine package: search implementation and Qt worker bridge."""

from chesstable.engine.python_search import PythonSearchEngine
from chesstable.engine.qt_bridge import EngineWorker
from chesstable.engine.search import IEngine, SearchLimits, SearchResult

__all__ = [
    "EngineWorker",
    "IEngine",
    "PythonSearchEngine",
    "SearchLimits",
    "SearchResult",
]
