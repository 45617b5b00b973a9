"""Chess domain values and the python-chess backed position model."""

from chesstable.core.enums import Color, MoveKind, MoveTag, PieceType, PositionStatus
from chesstable.core.move import Move
from chesstable.core.piece import Piece
from chesstable.core.position import STARTING_FEN, ChessPosition
from chesstable.core.types import Square, parse_square, square_name

__all__ = [
    "STARTING_FEN",
    "ChessPosition",
    "Color",
    "Move",
    "MoveKind",
    "MoveTag",
    "Piece",
    "PieceType",
    "PositionStatus",
    "Square",
    "parse_square",
    "square_name",
]
