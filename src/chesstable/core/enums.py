"""Core enumerations shared by the model, the game layer and the UI."""

from __future__ import annotations

from enum import Enum, IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


class PieceType(IntEnum):
    """Piece types; values match ``chess.PAWN`` … ``chess.KING``."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveKind(IntEnum):
    """How a move relocates pieces."""

    POSITIONAL = auto()
    DOUBLE_PAWN_PUSH = auto()
    EN_PASSANT_CAPTURE = auto()
    PROMOTION = auto()
    KING_CASTLE = auto()
    QUEEN_CASTLE = auto()


class MoveTag(str, Enum):
    """Per-kind destination classification rendered by the board view."""

    POSITIONAL = "positional"
    CAPTURE = "capture"
    DOUBLE_PUSH = "double-push"
    EN_PASSANT = "en-passant"
    PROMOTION = "promotion"
    CASTLE = "castle"
    KING_CASTLE = "king-castle"
    QUEEN_CASTLE = "queen-castle"


class PositionStatus(IntEnum):
    """Game status reported by the position model."""

    NORMAL = 0
    CHECKMATE = auto()
    STALEMATE_DRAW = auto()
    INSUFFICIENT_MATERIAL_DRAW = auto()
    FIFTY_MOVE_RULE_DRAW = auto()
    THREEFOLD_REPETITION_DRAW = auto()

    @property
    def is_draw(self) -> bool:
        return self not in (PositionStatus.NORMAL, PositionStatus.CHECKMATE)
