"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesstable.core.move import Move
    from chesstable.core.position import ChessPosition

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``time_limit_ms`` bounds the wall-clock time of one search; when it runs
    out the engine answers with the best move of the deepest finished
    iteration (or its first ordered move if none finished).
    """

    max_depth: int = 3
    time_limit_ms: int | None = 700


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score_cp: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for opponent engines used by the game layer."""

    def search(
        self,
        position: ChessPosition,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
