"""Pseudo-legal move generation (self-check is not considered here)."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    AttackMap,
)
from chessrules.core.enums import CastleSide, CastlingRights, PieceKind, Side
from chessrules.core.piece import Piece
from chessrules.core.types import Square, check_square

if TYPE_CHECKING:
    from chessrules.core.position import Position

KING_HOME_FILE = 4
# wing -> (rook file, king destination file, squares strictly between king and rook)
CASTLING_GEOMETRY: dict[CastleSide, tuple[int, int, tuple[int, ...]]] = {
    CastleSide.KING: (7, 6, (5, 6)),
    CastleSide.QUEEN: (0, 2, (1, 2, 3)),
}

_Generator = Callable[["MoveGenerator", Square, Piece], set[Square]]


class MoveGenerator:
    """Generates pseudo-legal destinations for pieces of a :class:`Position`.

    Each piece kind has its own generator; :meth:`pseudo_legal_moves`
    dispatches on :class:`PieceKind` through a single table.
    """

    __slots__ = ("_pos", "_board", "_attacks")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board
        self._attacks = AttackMap(position)

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, sq: Square) -> set[Square]:
        """Destinations for the piece on *sq*; empty set for an empty square."""
        piece = self._board[check_square(sq)]
        if piece is None:
            return set()
        return _DISPATCH[piece.kind](self, sq, piece)

    def pseudo_legal_moves_for(self, side: Side) -> dict[Square, set[Square]]:
        """Pseudo-legal destinations for every piece of *side*."""
        return {
            sq: _DISPATCH[piece.kind](self, sq, piece)
            for sq, piece in self._board.occupied(side)
        }

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece) -> set[Square]:
        board = self._board
        side = piece.side
        direction = side.pawn_direction
        moves: set[Square] = set()

        one_step = sq.offset(direction, 0)
        if one_step is not None and board.is_empty(one_step):
            moves.add(one_step)
            start_rank = 1 if side == Side.WHITE else 6
            if sq.rank == start_rank:
                two_step = one_step.offset(direction, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.add(two_step)

        ep = self._pos.en_passant
        for d_file in (-1, 1):
            cap_sq = sq.offset(direction, d_file)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.side != side:
                    moves.add(cap_sq)
            elif cap_sq == ep:
                # The pawn that just double-stepped sits beside the mover.
                victim = board[Square.of(sq.rank, cap_sq.file)]
                if victim == Piece(side.opposite, PieceKind.PAWN):
                    moves.add(cap_sq)
        return moves

    def _gen_knight(self, sq: Square, piece: Piece) -> set[Square]:
        return self._gen_steps(KNIGHT_TARGETS[sq.idx], piece.side)

    def _gen_bishop(self, sq: Square, piece: Piece) -> set[Square]:
        return self._gen_sliding(BISHOP_RAYS[sq.idx], piece.side)

    def _gen_rook(self, sq: Square, piece: Piece) -> set[Square]:
        return self._gen_sliding(ROOK_RAYS[sq.idx], piece.side)

    def _gen_queen(self, sq: Square, piece: Piece) -> set[Square]:
        return self._gen_sliding(QUEEN_RAYS[sq.idx], piece.side)

    def _gen_king(self, sq: Square, piece: Piece) -> set[Square]:
        moves = self._gen_steps(KING_TARGETS[sq.idx], piece.side)
        moves |= self._gen_castling(sq, piece.side)
        return moves

    def _gen_steps(self, targets: tuple[Square, ...], side: Side) -> set[Square]:
        board = self._board
        moves: set[Square] = set()
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.side != side:
                moves.add(to_sq)
        return moves

    def _gen_sliding(
        self,
        rays: tuple[tuple[Square, ...], ...],
        side: Side,
    ) -> set[Square]:
        board = self._board
        moves: set[Square] = set()
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.add(to_sq)
                    continue
                if target.side != side:
                    moves.add(to_sq)
                break
        return moves

    def _gen_castling(self, king_sq: Square, side: Side) -> set[Square]:
        home = side.home_rank
        if king_sq != Square.of(home, KING_HOME_FILE):
            return set()
        if not self._pos.castling & CastlingRights.both(side):
            return set()

        board = self._board
        opponent = side.opposite
        if self._attacks.is_attacked(king_sq, opponent):
            return set()

        moves: set[Square] = set()
        own_rook = Piece(side, PieceKind.ROOK)
        for wing, (rook_file, dest_file, between) in CASTLING_GEOMETRY.items():
            if not self._pos.castling & CastlingRights.for_side(side, wing):
                continue
            if board[Square.of(home, rook_file)] != own_rook:
                continue
            if any(not board.is_empty(Square.of(home, f)) for f in between):
                continue
            step = 1 if dest_file > KING_HOME_FILE else -1
            path_sq = Square.of(home, KING_HOME_FILE + step)
            dest_sq = Square.of(home, dest_file)
            if self._attacks.is_attacked(path_sq, opponent):
                continue
            if self._attacks.is_attacked(dest_sq, opponent):
                continue
            moves.add(dest_sq)
        return moves


_DISPATCH: dict[PieceKind, _Generator] = {
    PieceKind.PAWN: MoveGenerator._gen_pawn,
    PieceKind.KNIGHT: MoveGenerator._gen_knight,
    PieceKind.BISHOP: MoveGenerator._gen_bishop,
    PieceKind.ROOK: MoveGenerator._gen_rook,
    PieceKind.QUEEN: MoveGenerator._gen_queen,
    PieceKind.KING: MoveGenerator._gen_king,
}
