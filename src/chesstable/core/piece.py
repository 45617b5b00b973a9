"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

import chess

from chesstable.core.enums import Color, PieceType


@dataclass(frozen=True, slots=True)
class Piece:
    color: Color
    piece_type: PieceType

    @property
    def name(self) -> str:
        return self.piece_type.name.lower()

    @property
    def symbol(self) -> str:
        """FEN letter: upper case for White."""
        return chess.Piece(int(self.piece_type), self.color == Color.WHITE).symbol()

    @property
    def glyph(self) -> str:
        """Unicode chess symbol, e.g. ♔ for the white king."""
        return chess.UNICODE_PIECE_SYMBOLS[self.symbol]

    @classmethod
    def from_chess(cls, piece: chess.Piece) -> Piece:
        color = Color.WHITE if piece.color == chess.WHITE else Color.BLACK
        return cls(color, PieceType(piece.piece_type))

    def __str__(self) -> str:
        return f"{self.color} {self.name}"
