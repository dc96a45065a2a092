"""High-level chess rules: legal moves, check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.attacks import AttackMap
from chessrules.core.enums import GameStatus, PieceKind, Side
from chessrules.core.executor import advance, is_promotion_move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.types import check_square

if TYPE_CHECKING:
    from chessrules.core.position import Position
    from chessrules.core.types import Square


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Legality is decided by simulation: each pseudo-legal candidate is played
    on a copy of the position and rejected if the mover's king is then
    attacked.
    """

    @staticmethod
    def is_king_in_check(position: Position, side: Side) -> bool:
        """Is *side*'s king attacked? ``False`` when *side* has no king."""
        king_sq = position.king_square(side)
        if king_sq is None:
            return False
        return AttackMap(position).is_attacked(king_sq, side.opposite)

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return Rules.is_king_in_check(position, position.side_to_move)

    @staticmethod
    def legal_moves(position: Position, sq: Square) -> set[Square]:
        """Destinations for the piece on *sq* that keep its own king safe."""
        check_square(sq)
        piece = position.board[sq]
        if piece is None:
            return set()
        candidates = MoveGenerator(position).pseudo_legal_moves(sq)
        return Rules._filter(position, sq, piece.side, candidates)

    @staticmethod
    def all_legal_moves(position: Position) -> dict[Square, set[Square]]:
        """Legal destinations for every piece of the side to move.

        Pieces without a legal move are omitted.
        """
        side = position.side_to_move
        legal: dict[Square, set[Square]] = {}
        pseudo = MoveGenerator(position).pseudo_legal_moves_for(side)
        for from_sq, candidates in pseudo.items():
            targets = Rules._filter(position, from_sq, side, candidates)
            if targets:
                legal[from_sq] = targets
        return legal

    @staticmethod
    def has_legal_move(position: Position) -> bool:
        side = position.side_to_move
        pseudo = MoveGenerator(position).pseudo_legal_moves_for(side)
        for from_sq, candidates in pseudo.items():
            for to_sq in candidates:
                if Rules._is_safe(position, from_sq, to_sq, side):
                    return True
        return False

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not Rules.has_legal_move(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not Rules.has_legal_move(position)

    @staticmethod
    def game_status(position: Position) -> GameStatus:
        """Status of the side to move."""
        in_check = Rules.is_in_check(position)
        if not Rules.has_legal_move(position):
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        return GameStatus.CHECK if in_check else GameStatus.NORMAL

    # -- Internals ----------------------------------------------------------

    @staticmethod
    def _filter(
        position: Position,
        from_sq: Square,
        side: Side,
        candidates: set[Square],
    ) -> set[Square]:
        return {
            to_sq
            for to_sq in candidates
            if Rules._is_safe(position, from_sq, to_sq, side)
        }

    @staticmethod
    def _is_safe(position: Position, from_sq: Square, to_sq: Square, side: Side) -> bool:
        # The promoted piece stands on the same square whatever it is, so any
        # choice gives the same answer.
        promotion = PieceKind.QUEEN if is_promotion_move(position, from_sq, to_sq) else None
        simulated = advance(position, from_sq, to_sq, promotion)
        return not Rules.is_king_in_check(simulated, side)
