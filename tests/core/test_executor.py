"""Tests for MoveExecutor and advance: special moves and state bookkeeping."""

import logging

import pytest

from chessrules.core.enums import CastleSide, CastlingRights, PieceKind, Side
from chessrules.core.errors import (
    IllegalMove,
    InvalidCoordinate,
    NoPieceAtSource,
    PromotionRequired,
)
from chessrules.core.executor import MoveExecutor, advance, is_promotion_move
from chessrules.core.notation import position_from_fen
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import Square, parse_square


def _play(position: Position, *moves: str) -> Position:
    executor = MoveExecutor()
    for text in moves:
        position = executor.apply(
            position, parse_square(text[:2]), parse_square(text[2:4])
        )
    return position


class TestBasicMoves:
    def test_pawn_double_step_sets_en_passant(self) -> None:
        pos = _play(Position.initial(), "e2e4")
        assert pos.en_passant == parse_square("e3")
        assert pos.side_to_move == Side.BLACK
        assert pos.piece_at(parse_square("e4")) == Piece(Side.WHITE, PieceKind.PAWN)
        assert pos.piece_at(parse_square("e2")) is None

    def test_en_passant_cleared_after_next_move(self) -> None:
        pos = _play(Position.initial(), "e2e4", "g8f6")
        assert pos.en_passant is None

    def test_single_step_leaves_no_target(self) -> None:
        pos = _play(Position.initial(), "e2e3")
        assert pos.en_passant is None

    def test_original_position_untouched(self) -> None:
        start = Position.initial()
        after = _play(start, "e2e4")
        assert start.piece_at(parse_square("e2")) == Piece(Side.WHITE, PieceKind.PAWN)
        assert start.move_history == ()
        assert after.board is not start.board

    def test_history_records(self) -> None:
        pos = _play(Position.initial(), "e2e4", "e7e5", "g1f3")
        assert pos.history_strings == ("e2e4", "e7e5", "g1f3")
        record = pos.last_move
        assert record is not None
        assert record.moved_piece == Piece(Side.WHITE, PieceKind.KNIGHT)
        assert not record.is_capture

    def test_clocks(self) -> None:
        pos = _play(Position.initial(), "g1f3", "g8f6")
        assert pos.halfmove_clock == 2
        assert pos.fullmove_number == 2
        pos = _play(pos, "e2e4")
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 2

    def test_capture_flag(self) -> None:
        pos = _play(Position.initial(), "e2e4", "d7d5", "e4d5")
        record = pos.last_move
        assert record is not None and record.is_capture
        assert pos.halfmove_clock == 0


class TestErrors:
    def test_no_piece(self) -> None:
        with pytest.raises(NoPieceAtSource) as info:
            MoveExecutor().apply(Position.initial(), parse_square("e4"), parse_square("e5"))
        assert info.value.from_sq == parse_square("e4")
        assert info.value.to_sq == parse_square("e5")

    def test_wrong_side(self) -> None:
        with pytest.raises(IllegalMove):
            MoveExecutor().apply(Position.initial(), parse_square("e7"), parse_square("e5"))

    def test_illegal_destination(self) -> None:
        with pytest.raises(IllegalMove):
            MoveExecutor().apply(Position.initial(), parse_square("e2"), parse_square("e5"))

    def test_self_check_rejected(self) -> None:
        pos = position_from_fen("4k3/4q3/8/8/8/8/4N3/4K3 w - - 0 1")
        with pytest.raises(IllegalMove):
            MoveExecutor().apply(pos, parse_square("e2"), parse_square("c3"))

    def test_advance_empty_square(self) -> None:
        with pytest.raises(NoPieceAtSource):
            advance(Position.initial(), parse_square("e4"), parse_square("e5"))

    def test_off_board_square(self) -> None:
        with pytest.raises(InvalidCoordinate):
            MoveExecutor().apply(Position.initial(), Square(-7, 4), parse_square("e4"))
        with pytest.raises(InvalidCoordinate):
            advance(Position.initial(), parse_square("e2"), Square(8, 4))

    def test_invalid_default_promotion(self) -> None:
        with pytest.raises(ValueError):
            MoveExecutor(default_promotion=PieceKind.KING)


class TestCastling:
    FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_white_kingside(self) -> None:
        pos = position_from_fen(self.FEN)
        pos = MoveExecutor().apply(pos, parse_square("e1"), parse_square("g1"))
        assert pos.piece_at(parse_square("g1")) == Piece(Side.WHITE, PieceKind.KING)
        assert pos.piece_at(parse_square("f1")) == Piece(Side.WHITE, PieceKind.ROOK)
        assert pos.piece_at(parse_square("h1")) is None
        assert pos.castling == CastlingRights.BLACK_BOTH
        assert pos.last_move is not None and pos.last_move.castle == CastleSide.KING

    def test_black_queenside(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        pos = MoveExecutor().apply(pos, parse_square("e8"), parse_square("c8"))
        assert pos.piece_at(parse_square("c8")) == Piece(Side.BLACK, PieceKind.KING)
        assert pos.piece_at(parse_square("d8")) == Piece(Side.BLACK, PieceKind.ROOK)
        assert pos.piece_at(parse_square("a8")) is None
        assert pos.castling == CastlingRights.WHITE_BOTH
        assert pos.last_move is not None and pos.last_move.castle == CastleSide.QUEEN

    def test_king_step_clears_both_rights(self) -> None:
        pos = position_from_fen(self.FEN)
        pos = MoveExecutor().apply(pos, parse_square("e1"), parse_square("f1"))
        assert not pos.castling & CastlingRights.WHITE_BOTH
        assert pos.last_move is not None and not pos.last_move.is_castle

    def test_rook_move_clears_one_right(self) -> None:
        pos = position_from_fen(self.FEN)
        pos = MoveExecutor().apply(pos, parse_square("h1"), parse_square("h4"))
        assert not pos.has_castling_right(CastlingRights.WHITE_KINGSIDE)
        assert pos.has_castling_right(CastlingRights.WHITE_QUEENSIDE)

    def test_rook_captured_on_corner(self) -> None:
        pos = position_from_fen(self.FEN)
        pos = MoveExecutor().apply(pos, parse_square("a1"), parse_square("a8"))
        assert pos.castling == CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_KINGSIDE


class TestEnPassant:
    def test_capture_removes_passed_pawn(self) -> None:
        pos = _play(Position.initial(), "e2e4", "a7a6", "e4e5", "d7d5")
        assert pos.en_passant == parse_square("d6")
        pos = _play(pos, "e5d6")
        assert pos.piece_at(parse_square("d6")) == Piece(Side.WHITE, PieceKind.PAWN)
        assert pos.piece_at(parse_square("d5")) is None
        record = pos.last_move
        assert record is not None
        assert record.is_en_passant and record.is_capture

    def test_right_expires(self) -> None:
        pos = _play(Position.initial(), "e2e4", "a7a6", "e4e5", "d7d5", "g1f3", "a6a5")
        with pytest.raises(IllegalMove):
            _play(pos, "e5d6")


class TestPromotion:
    FEN = "1r2k3/P7/8/8/8/8/8/4K3 w - - 0 1"

    def test_requires_choice(self) -> None:
        pos = position_from_fen(self.FEN)
        with pytest.raises(PromotionRequired):
            MoveExecutor().apply(pos, parse_square("a7"), parse_square("a8"))

    def test_explicit_choice(self) -> None:
        pos = position_from_fen(self.FEN)
        pos = MoveExecutor().apply(
            pos, parse_square("a7"), parse_square("b8"), PieceKind.KNIGHT
        )
        assert pos.piece_at(parse_square("b8")) == Piece(Side.WHITE, PieceKind.KNIGHT)
        record = pos.last_move
        assert record is not None
        assert record.is_capture
        assert record.promotion == PieceKind.KNIGHT
        assert record.coordinate == "a7b8n"

    def test_default_policy(self) -> None:
        pos = position_from_fen(self.FEN)
        pos = MoveExecutor(default_promotion=PieceKind.QUEEN).apply(
            pos, parse_square("a7"), parse_square("a8")
        )
        assert pos.piece_at(parse_square("a8")) == Piece(Side.WHITE, PieceKind.QUEEN)

    def test_choice_on_ordinary_move(self) -> None:
        with pytest.raises(IllegalMove):
            MoveExecutor().apply(
                Position.initial(), parse_square("e2"), parse_square("e4"), PieceKind.QUEEN
            )

    def test_king_is_not_a_choice(self) -> None:
        pos = position_from_fen(self.FEN)
        with pytest.raises(IllegalMove):
            MoveExecutor().apply(pos, parse_square("a7"), parse_square("a8"), PieceKind.KING)

    def test_is_promotion_move(self) -> None:
        pos = position_from_fen(self.FEN)
        assert is_promotion_move(pos, parse_square("a7"), parse_square("a8"))
        assert not is_promotion_move(pos, parse_square("e1"), parse_square("e2"))


class TestLogging:
    def test_commit_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="chessrules.core.executor"):
            _play(Position.initial(), "e2e4")
        assert "e2e4" in caplog.text
