"""Exceptions raised by the game layer."""

from __future__ import annotations


class ChesstableError(Exception):
    """Base class for game-layer errors."""


class StaleMoveSetError(ChesstableError):
    """A move was committed against a legal-move set that is no longer current."""


class IllegalStateError(ChesstableError):
    """An operation was requested in a turn phase that does not allow it."""


class EngineError(ChesstableError):
    """The opponent engine failed while searching."""


class EngineDesyncError(EngineError):
    """The opponent disagrees with the legality oracle about the position.

    Raised when the engine finds no move in a normal position or answers
    with a move that is not legal there.
    """

    def __init__(
        self, fen: str, detail: str = "Opponent returned no move in a normal position"
    ) -> None:
        super().__init__(f"{detail}: {fen}")
        self.fen = fen
