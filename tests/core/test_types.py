"""Tests for square helpers and the move/piece value objects."""

import pytest

from chesstable.core.enums import Color, MoveKind, MoveTag, PieceType
from chesstable.core.move import Move
from chesstable.core.piece import Piece
from chesstable.core.types import (
    ALL_SQUARES,
    file_of,
    is_light,
    make_square,
    parse_square,
    rank_of,
    square_name,
    square_title,
)


class TestSquares:
    def test_round_trip_names(self) -> None:
        for sq in ALL_SQUARES:
            assert parse_square(square_name(sq)) == sq

    def test_layout(self) -> None:
        e4 = parse_square("e4")
        assert e4 == 28
        assert file_of(e4) == 4
        assert rank_of(e4) == 3
        assert make_square(4, 3) == e4

    def test_colors(self) -> None:
        assert not is_light(parse_square("a1"))
        assert is_light(parse_square("h1"))
        assert not is_light(parse_square("h8"))

    @pytest.mark.parametrize("bad", ["", "i1", "a9", "e44"])
    def test_parse_rejects(self, bad: str) -> None:
        with pytest.raises(ValueError):
            parse_square(bad)

    def test_square_name_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            square_name(64)

    def test_title(self) -> None:
        title = square_title(parse_square("b1"))
        assert "Algebraic: b1" in title
        assert "Index: 1" in title
        assert "Color: light" in title


class TestMove:
    def test_str_quiet_and_capture(self) -> None:
        e2, e4, d5 = parse_square("e2"), parse_square("e4"), parse_square("d5")
        assert str(Move(e2, e4, MoveKind.DOUBLE_PAWN_PUSH)) == "e2-e4"
        assert str(Move(e4, d5, is_capture=True)) == "e4xd5"

    def test_promotion(self) -> None:
        move = Move(parse_square("e7"), parse_square("e8"), MoveKind.PROMOTION,
                    promotion=PieceType.QUEEN)
        assert str(move) == "e7-e8=Q"
        assert move.uci == "e7e8q"
        assert move.is_promotion
        assert move.tags == frozenset({MoveTag.PROMOTION})

    def test_castle_tags(self) -> None:
        move = Move(parse_square("e1"), parse_square("g1"), MoveKind.KING_CASTLE)
        assert move.is_castle
        assert move.tags == frozenset({MoveTag.CASTLE, MoveTag.KING_CASTLE})

    def test_capture_tag_added(self) -> None:
        move = Move(parse_square("e5"), parse_square("f6"), MoveKind.EN_PASSANT_CAPTURE, True)
        assert move.tags == frozenset({MoveTag.EN_PASSANT, MoveTag.CAPTURE})

    def test_value_equality(self) -> None:
        assert Move(12, 28, MoveKind.DOUBLE_PAWN_PUSH) == Move(12, 28, MoveKind.DOUBLE_PAWN_PUSH)


class TestPiece:
    def test_str(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.PAWN)) == "white pawn"

    def test_symbol_case(self) -> None:
        assert Piece(Color.WHITE, PieceType.KNIGHT).symbol == "N"
        assert Piece(Color.BLACK, PieceType.KNIGHT).symbol == "n"

    def test_glyph(self) -> None:
        assert Piece(Color.WHITE, PieceType.KING).glyph == "♔"
        assert Piece(Color.BLACK, PieceType.QUEEN).glyph == "♛"
