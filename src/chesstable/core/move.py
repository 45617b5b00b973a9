"""Move value object.

Moves are produced by the position model only; the game layer selects among
them and never builds one itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from chesstable.core.enums import MoveKind, MoveTag, PieceType
from chesstable.core.types import Square, square_name

_PROMO_LETTERS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

_KIND_TAGS: dict[MoveKind, tuple[MoveTag, ...]] = {
    MoveKind.POSITIONAL: (MoveTag.POSITIONAL,),
    MoveKind.DOUBLE_PAWN_PUSH: (MoveTag.DOUBLE_PUSH,),
    MoveKind.EN_PASSANT_CAPTURE: (MoveTag.EN_PASSANT,),
    MoveKind.PROMOTION: (MoveTag.PROMOTION,),
    MoveKind.KING_CASTLE: (MoveTag.CASTLE, MoveTag.KING_CASTLE),
    MoveKind.QUEEN_CASTLE: (MoveTag.CASTLE, MoveTag.QUEEN_CASTLE),
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable single move with its classification."""

    from_sq: Square
    to_sq: Square
    kind: MoveKind = MoveKind.POSITIONAL
    is_capture: bool = False
    promotion: PieceType | None = None

    @property
    def is_promotion(self) -> bool:
        return self.kind == MoveKind.PROMOTION

    @property
    def is_castle(self) -> bool:
        return self.kind in (MoveKind.KING_CASTLE, MoveKind.QUEEN_CASTLE)

    @property
    def tags(self) -> frozenset[MoveTag]:
        """View classification tags for the destination square."""
        tags = set(_KIND_TAGS[self.kind])
        if self.is_capture:
            tags.add(MoveTag.CAPTURE)
        return frozenset(tags)

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation, e.g. ``e7e8q``."""
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_LETTERS[self.promotion]
        return base

    def __str__(self) -> str:
        sep = "x" if self.is_capture else "-"
        text = f"{square_name(self.from_sq)}{sep}{square_name(self.to_sq)}"
        if self.promotion is not None:
            text += "=" + _PROMO_LETTERS[self.promotion].upper()
        return text
