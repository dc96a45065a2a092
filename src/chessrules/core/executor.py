"""Move execution: turn a validated move into the next :class:`Position`."""

from __future__ import annotations

import logging
from dataclasses import replace

from chessrules.core.enums import (
    PROMOTION_KINDS,
    CastleSide,
    CastlingRights,
    PieceKind,
    Side,
)
from chessrules.core.errors import IllegalMove, NoPieceAtSource, PromotionRequired
from chessrules.core.move import MoveRecord
from chessrules.core.move_generator import CASTLING_GEOMETRY
from chessrules.core.position import Position
from chessrules.core.types import Square, check_square

_LOGGER = logging.getLogger(__name__)

# Original rook squares and the right that dies when they are vacated or hit.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    Square.of(0, 0): CastlingRights.WHITE_QUEENSIDE,
    Square.of(0, 7): CastlingRights.WHITE_KINGSIDE,
    Square.of(7, 0): CastlingRights.BLACK_QUEENSIDE,
    Square.of(7, 7): CastlingRights.BLACK_KINGSIDE,
}

# wing -> rook destination file
_ROOK_CASTLED_FILE: dict[CastleSide, int] = {
    CastleSide.KING: 5,
    CastleSide.QUEEN: 3,
}


def is_promotion_move(position: Position, from_sq: Square, to_sq: Square) -> bool:
    """Whether moving the piece on *from_sq* to *to_sq* promotes a pawn."""
    piece = position.board[from_sq]
    if piece is None or piece.kind != PieceKind.PAWN:
        return False
    return to_sq.rank == piece.side.opposite.home_rank


def advance(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceKind | None = None,
) -> Position:
    """Play a move without checking legality and return the new position.

    Handles the castling rook transfer, en passant capture removal,
    promotion, castling-rights and en-passant-target bookkeeping. The input
    position is left untouched; the result owns a fresh board.

    Raises:
        NoPieceAtSource: *from_sq* is empty.
        PromotionRequired: a pawn reaches the last rank with no *promotion*.
        IllegalMove: *promotion* is given for a non-promoting move or is not
            a piece a pawn may become.
    """
    check_square(from_sq)
    check_square(to_sq)
    piece = position.board[from_sq]
    if piece is None:
        raise NoPieceAtSource(f"No piece on {from_sq.name}", from_sq, to_sq)

    board = position.board.copy()
    side = piece.side
    captured = board[to_sq]

    castle: CastleSide | None = None
    if piece.kind == PieceKind.KING and abs(to_sq.file - from_sq.file) == 2:
        castle = CastleSide.KING if to_sq.file > from_sq.file else CastleSide.QUEEN

    is_en_passant = (
        piece.kind == PieceKind.PAWN
        and to_sq == position.en_passant
        and to_sq.file != from_sq.file
        and captured is None
    )

    promotes = piece.kind == PieceKind.PAWN and to_sq.rank == side.opposite.home_rank
    if promotes:
        if promotion is None:
            raise PromotionRequired(
                f"Pawn reaching {to_sq.name} needs a promotion piece", from_sq, to_sq
            )
        if promotion not in PROMOTION_KINDS:
            raise IllegalMove(
                f"Cannot promote to {promotion.name.lower()}", from_sq, to_sq
            )
    elif promotion is not None:
        raise IllegalMove(
            f"{from_sq.name}{to_sq.name} is not a promotion", from_sq, to_sq
        )

    # Lift piece from origin and drop it (or its promoted form) on the target
    board[from_sq] = None
    board[to_sq] = piece.promoted(promotion) if promotion is not None else piece

    if is_en_passant:
        victim_sq = Square.of(from_sq.rank, to_sq.file)
        captured = board[victim_sq]
        board[victim_sq] = None

    if castle is not None:
        rook_file = CASTLING_GEOMETRY[castle][0]
        rook_from = Square.of(from_sq.rank, rook_file)
        rook_to = Square.of(from_sq.rank, _ROOK_CASTLED_FILE[castle])
        board[rook_to] = board[rook_from]
        board[rook_from] = None

    castling = position.castling
    if piece.kind == PieceKind.KING:
        castling &= ~CastlingRights.both(side)
    for sq in (from_sq, to_sq):
        corner_right = _ROOK_CORNERS.get(sq)
        if corner_right is not None:
            castling &= ~corner_right

    next_en_passant: Square | None = None
    if piece.kind == PieceKind.PAWN and abs(to_sq.rank - from_sq.rank) == 2:
        next_en_passant = Square.of((from_sq.rank + to_sq.rank) // 2, from_sq.file)

    is_capture = captured is not None
    if piece.kind == PieceKind.PAWN or is_capture:
        halfmove_clock = 0
    else:
        halfmove_clock = position.halfmove_clock + 1

    fullmove_number = position.fullmove_number
    if side == Side.BLACK:
        fullmove_number += 1

    record = MoveRecord(
        from_sq=from_sq,
        to_sq=to_sq,
        moved_piece=piece,
        is_capture=is_capture,
        castle=castle,
        is_en_passant=is_en_passant,
        promotion=promotion,
    )

    return replace(
        position,
        board=board,
        side_to_move=side.opposite,
        castling=castling,
        en_passant=next_en_passant,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
        move_history=position.move_history + (record,),
    )


class MoveExecutor:
    """Validates and commits moves, producing new positions.

    Args:
        default_promotion: Piece a pawn becomes when the caller gives no
            choice. ``None`` means a choice is mandatory and
            :class:`PromotionRequired` is raised without one.
    """

    __slots__ = ("_default_promotion",)

    def __init__(self, default_promotion: PieceKind | None = None) -> None:
        if default_promotion is not None and default_promotion not in PROMOTION_KINDS:
            raise ValueError(f"Invalid default promotion: {default_promotion!r}")
        self._default_promotion = default_promotion

    @property
    def default_promotion(self) -> PieceKind | None:
        return self._default_promotion

    def apply(
        self,
        position: Position,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceKind | None = None,
    ) -> Position:
        """Apply a move if legal; all-or-nothing.

        The committed :class:`MoveRecord` is the last entry of the returned
        position's history. *position* is never modified.
        """
        from chessrules.core.rules import Rules

        check_square(from_sq)
        check_square(to_sq)
        piece = position.board[from_sq]
        if piece is None:
            raise NoPieceAtSource(f"No piece on {from_sq.name}", from_sq, to_sq)
        if piece.side != position.side_to_move:
            raise IllegalMove(
                f"It is {position.side_to_move}'s turn, not {piece.side}'s",
                from_sq,
                to_sq,
            )
        if to_sq not in Rules.legal_moves(position, from_sq):
            raise IllegalMove(
                f"{from_sq.name}{to_sq.name} is not a legal move", from_sq, to_sq
            )

        if promotion is None and is_promotion_move(position, from_sq, to_sq):
            promotion = self._default_promotion

        new_position = advance(position, from_sq, to_sq, promotion)
        _LOGGER.debug("Committed %s (%s)", new_position.move_history[-1], piece)
        return new_position
