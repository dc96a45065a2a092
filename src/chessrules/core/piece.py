"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PieceKind, Side

# Wire character ↔ (Side, PieceKind)
_CHAR_MAP: dict[str, tuple[Side, PieceKind]] = {
    "P": (Side.WHITE, PieceKind.PAWN),
    "N": (Side.WHITE, PieceKind.KNIGHT),
    "B": (Side.WHITE, PieceKind.BISHOP),
    "R": (Side.WHITE, PieceKind.ROOK),
    "Q": (Side.WHITE, PieceKind.QUEEN),
    "K": (Side.WHITE, PieceKind.KING),
    "p": (Side.BLACK, PieceKind.PAWN),
    "n": (Side.BLACK, PieceKind.KNIGHT),
    "b": (Side.BLACK, PieceKind.BISHOP),
    "r": (Side.BLACK, PieceKind.ROOK),
    "q": (Side.BLACK, PieceKind.QUEEN),
    "k": (Side.BLACK, PieceKind.KING),
}

_CODES: dict[tuple[Side, PieceKind], str] = {v: k for k, v in _CHAR_MAP.items()}

PIECE_CODES = frozenset(_CHAR_MAP)


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    Moving a piece never mutates it; promotion places a new value.
    """

    side: Side
    kind: PieceKind

    def __str__(self) -> str:
        """Single-letter code (uppercase = White, lowercase = Black)."""
        return _CODES[(self.side, self.kind)]

    @property
    def code(self) -> str:
        return _CODES[(self.side, self.kind)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its letter, e.g. ``'N'`` → white knight."""
        try:
            side, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(side, kind)

    def promoted(self, kind: PieceKind) -> Piece:
        return Piece(self.side, kind)
