"""Move record value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import CastleSide, PieceKind
from chessrules.core.piece import Piece
from chessrules.core.types import Square

_PROMO_CHARS: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A committed move, appended to the position history.

    Created by the executor at commit time and never modified afterwards.
    """

    from_sq: Square
    to_sq: Square
    moved_piece: Piece
    is_capture: bool = False
    castle: CastleSide | None = None
    is_en_passant: bool = False
    promotion: PieceKind | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return self.coordinate

    @property
    def coordinate(self) -> str:
        """Coordinate notation, e.g. ``'e2e4'`` or ``'e7e8q'``."""
        base = f"{self.from_sq.name}{self.to_sq.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def is_castle(self) -> bool:
        return self.castle is not None
