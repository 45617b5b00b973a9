"""ChessPosition — position model backed by :class:`chess.Board`.

python-chess is the legality oracle. This adapter translates its moves into
classified :class:`~chesstable.core.move.Move` values and keeps the list of
played moves so ``last_move`` returns the exact object that was committed.
"""

from __future__ import annotations

import chess

from chesstable.core.enums import Color, MoveKind, PieceType, PositionStatus
from chesstable.core.move import Move
from chesstable.core.piece import Piece
from chesstable.core.types import Square

STARTING_FEN = chess.STARTING_FEN


def _classify(board: chess.Board, move: chess.Move) -> Move:
    """Build a :class:`Move` for *move*, which must be legal on *board*."""
    if move.promotion is not None:
        kind = MoveKind.PROMOTION
    elif board.is_kingside_castling(move):
        kind = MoveKind.KING_CASTLE
    elif board.is_queenside_castling(move):
        kind = MoveKind.QUEEN_CASTLE
    elif board.is_en_passant(move):
        kind = MoveKind.EN_PASSANT_CAPTURE
    elif (
        board.piece_type_at(move.from_square) == chess.PAWN
        and abs(move.to_square - move.from_square) == 16
    ):
        kind = MoveKind.DOUBLE_PAWN_PUSH
    else:
        kind = MoveKind.POSITIONAL

    return Move(
        move.from_square,
        move.to_square,
        kind,
        board.is_capture(move),
        PieceType(move.promotion) if move.promotion is not None else None,
    )


def _to_chess(move: Move) -> chess.Move:
    promotion = int(move.promotion) if move.promotion is not None else None
    return chess.Move(move.from_sq, move.to_sq, promotion=promotion)


class ChessPosition:
    """Mutable game position with make/unmake history."""

    __slots__ = ("_board", "_history")

    def __init__(self, fen: str | None = None) -> None:
        self._board = chess.Board(fen or STARTING_FEN)
        self._history: list[Move] = []

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def board(self) -> chess.Board:
        """Underlying python-chess board (treat as read-only)."""
        return self._board

    @property
    def turn_color(self) -> Color:
        return Color.WHITE if self._board.turn == chess.WHITE else Color.BLACK

    @property
    def last_move(self) -> Move | None:
        return self._history[-1] if self._history else None

    @property
    def ply_count(self) -> int:
        return len(self._history)

    @property
    def status(self) -> PositionStatus:
        board = self._board
        if board.is_checkmate():
            return PositionStatus.CHECKMATE
        if board.is_stalemate():
            return PositionStatus.STALEMATE_DRAW
        if board.is_insufficient_material():
            return PositionStatus.INSUFFICIENT_MATERIAL_DRAW
        if board.is_fifty_moves():
            return PositionStatus.FIFTY_MOVE_RULE_DRAW
        if board.is_repetition(3):
            return PositionStatus.THREEFOLD_REPETITION_DRAW
        return PositionStatus.NORMAL

    def is_in_check(self) -> bool:
        return self._board.is_check()

    def get_legal_moves(self) -> list[Move]:
        """Legal moves for the side to move, in generation order."""
        board = self._board
        return [_classify(board, m) for m in board.legal_moves]

    def piece_at(self, sq: Square) -> Piece | None:
        piece = self._board.piece_at(sq)
        return Piece.from_chess(piece) if piece is not None else None

    def color_at(self, sq: Square) -> Color | None:
        color = self._board.color_at(sq)
        if color is None:
            return None
        return Color.WHITE if color == chess.WHITE else Color.BLACK

    def to_move(self, move: chess.Move) -> Move:
        """Classify a python-chess move; raises ``ValueError`` if illegal."""
        if not self._board.is_legal(move):
            raise ValueError(f"Illegal move in {self.fen()}: {move.uci()}")
        return _classify(self._board, move)

    def fen(self) -> str:
        return self._board.fen()

    def snapshot(self) -> chess.Board:
        """Detached copy of the current state, comparable with ``==``."""
        return self._board.copy(stack=False)

    def copy(self) -> ChessPosition:
        clone = ChessPosition.__new__(ChessPosition)
        clone._board = self._board.copy()
        clone._history = list(self._history)
        return clone

    # ── Mutation ─────────────────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move*; raises ``ValueError`` if it is not legal here."""
        cm = _to_chess(move)
        if not self._board.is_legal(cm):
            raise ValueError(f"Illegal move in {self.fen()}: {move}")
        self._board.push(cm)
        self._history.append(move)

    def unmake_move(self) -> Move:
        """Take back the last move and return it."""
        if not self._history:
            raise IndexError("No move to unmake")
        self._board.pop()
        return self._history.pop()

    def can_undo(self) -> bool:
        return bool(self._history)

    def __repr__(self) -> str:
        return f"ChessPosition({self.fen()!r})"
