"""Position: complete game state (board + metadata) as an immutable value."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Side
from chessrules.core.move import MoveRecord
from chessrules.core.piece import Piece
from chessrules.core.types import Square

_CASTLING_LABELS: tuple[tuple[CastlingRights, str], ...] = (
    (CastlingRights.WHITE_KINGSIDE, "White K-side"),
    (CastlingRights.WHITE_QUEENSIDE, "White Q-side"),
    (CastlingRights.BLACK_KINGSIDE, "Black K-side"),
    (CastlingRights.BLACK_QUEENSIDE, "Black Q-side"),
)


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant.

    Positions are produced by the fixed initial setup, by the notation
    loaders, or by the move executor, and are never mutated afterwards:
    applying a move yields a new :class:`Position` that owns a fresh board.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Side = Side.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    move_history: tuple[MoveRecord, ...] = ()
    # Coordinate strings of moves that were loaded from an external snapshot
    # and have no full record.
    loaded_history: tuple[str, ...] = ()

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls()

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def king_square(self, side: Side) -> Square | None:
        return self.board.king_square(side)

    @property
    def history_strings(self) -> tuple[str, ...]:
        """Every move of the game in coordinate notation, oldest first."""
        return self.loaded_history + tuple(r.coordinate for r in self.move_history)

    @property
    def wire_history(self) -> tuple[str, ...]:
        """Every move as a bare four-character ``from``+``to`` string (no promotion letter)."""
        return self.loaded_history + tuple(
            f"{r.from_sq.name}{r.to_sq.name}" for r in self.move_history
        )

    @property
    def ply_count(self) -> int:
        return len(self.loaded_history) + len(self.move_history)

    @property
    def last_move(self) -> MoveRecord | None:
        return self.move_history[-1] if self.move_history else None

    def has_castling_right(self, right: CastlingRights) -> bool:
        return bool(self.castling & right)

    def context_lines(self) -> list[str]:
        """Short human-readable context: move number, castling, en passant."""
        lines = [f"Move #{self.ply_count + 1}"]
        available = [label for right, label in _CASTLING_LABELS if self.castling & right]
        if available:
            lines.append(f"Castling available: {', '.join(available)}")
        else:
            lines.append("No castling available")
        if self.en_passant is not None:
            lines.append(f"En passant target: {self.en_passant.name}")
        return lines

