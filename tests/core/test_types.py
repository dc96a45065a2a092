"""Tests for Square helpers, enums and Piece."""

import pytest

from chessrules.core.enums import CastleSide, CastlingRights, GameStatus, PieceKind, Side
from chessrules.core.errors import InvalidCoordinate
from chessrules.core.piece import Piece
from chessrules.core.types import (
    A1, E4, H8,
    Square,
    all_squares,
    check_square,
    parse_square,
    square_at,
    square_name,
)


class TestSquare:
    def test_of_returns_cached_instance(self) -> None:
        assert Square.of(3, 4) is E4

    def test_of_rejects_out_of_range(self) -> None:
        with pytest.raises(InvalidCoordinate):
            Square.of(8, 0)
        with pytest.raises(InvalidCoordinate):
            Square.of(0, -1)

    def test_index(self) -> None:
        assert A1.idx == 0
        assert H8.idx == 63
        assert E4.idx == 28

    def test_name_and_str(self) -> None:
        assert E4.name == "e4"
        assert str(H8) == "h8"
        assert square_name(A1) == "a1"

    def test_offset(self) -> None:
        assert E4.offset(1, 1) == parse_square("f5")
        assert H8.offset(1, 0) is None
        assert A1.offset(0, -1) is None

    def test_square_at(self) -> None:
        assert square_at(28) is E4
        with pytest.raises(InvalidCoordinate):
            square_at(64)

    def test_check_square(self) -> None:
        assert check_square(E4) is E4
        for rank, file in ((8, 0), (0, 8), (-1, 0), (-7, 4)):
            with pytest.raises(InvalidCoordinate):
                check_square(Square(rank, file))

    def test_all_squares(self) -> None:
        squares = all_squares()
        assert len(squares) == 64
        assert squares[0] == A1
        assert squares[-1] == H8


class TestParseSquare:
    @pytest.mark.parametrize("name", ["a1", "e4", "h8", "d5"])
    def test_round_trip(self, name: str) -> None:
        assert parse_square(name).name == name

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "a0", "e44", "E4"])
    def test_invalid(self, name: str) -> None:
        with pytest.raises(InvalidCoordinate):
            parse_square(name)

    def test_invalid_coordinate_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_square("z9")


class TestSide:
    def test_opposite(self) -> None:
        assert Side.WHITE.opposite == Side.BLACK
        assert Side.BLACK.opposite == Side.WHITE

    def test_home_rank_and_direction(self) -> None:
        assert Side.WHITE.home_rank == 0
        assert Side.BLACK.home_rank == 7
        assert Side.WHITE.pawn_direction == 1
        assert Side.BLACK.pawn_direction == -1

    def test_str(self) -> None:
        assert str(Side.WHITE) == "white"
        assert str(Side.BLACK) == "black"


class TestCastlingRights:
    def test_for_side(self) -> None:
        assert CastlingRights.for_side(Side.WHITE, CastleSide.KING) == CastlingRights.WHITE_KINGSIDE
        assert CastlingRights.for_side(Side.BLACK, CastleSide.QUEEN) == CastlingRights.BLACK_QUEENSIDE

    def test_both(self) -> None:
        both = CastlingRights.both(Side.BLACK)
        assert both & CastlingRights.BLACK_KINGSIDE
        assert both & CastlingRights.BLACK_QUEENSIDE
        assert not both & CastlingRights.WHITE_KINGSIDE


class TestGameStatus:
    def test_terminal(self) -> None:
        assert GameStatus.CHECKMATE.is_terminal
        assert GameStatus.STALEMATE.is_terminal
        assert not GameStatus.CHECK.is_terminal
        assert not GameStatus.NORMAL.is_terminal


class TestPiece:
    def test_from_char(self) -> None:
        assert Piece.from_char("N") == Piece(Side.WHITE, PieceKind.KNIGHT)
        assert Piece.from_char("q") == Piece(Side.BLACK, PieceKind.QUEEN)

    def test_from_char_invalid(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_code(self) -> None:
        assert Piece(Side.WHITE, PieceKind.KING).code == "K"
        assert str(Piece(Side.BLACK, PieceKind.PAWN)) == "p"

    def test_promoted_keeps_side(self) -> None:
        pawn = Piece(Side.BLACK, PieceKind.PAWN)
        assert pawn.promoted(PieceKind.KNIGHT) == Piece(Side.BLACK, PieceKind.KNIGHT)

    def test_immutable(self) -> None:
        piece = Piece(Side.WHITE, PieceKind.ROOK)
        with pytest.raises(AttributeError):
            piece.kind = PieceKind.QUEEN  # type: ignore[misc]
