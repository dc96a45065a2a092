"""Coordinate move notation (``e2e4``, ``e7e8q``)."""

from __future__ import annotations

from chessrules.core.enums import PieceKind
from chessrules.core.errors import InvalidCoordinate
from chessrules.core.types import Square, parse_square

_PROMO_KINDS: dict[str, PieceKind] = {
    "q": PieceKind.QUEEN,
    "r": PieceKind.ROOK,
    "b": PieceKind.BISHOP,
    "n": PieceKind.KNIGHT,
}
_PROMO_CHARS: dict[PieceKind, str] = {v: k for k, v in _PROMO_KINDS.items()}


def parse_coordinate_move(text: str) -> tuple[Square, Square, PieceKind | None]:
    """Parse ``'e7e5'`` (optionally ``'e7e8q'``) into squares and promotion.

    Case-insensitive; surrounding whitespace is ignored.
    """
    move = text.strip().lower()
    if len(move) not in (4, 5):
        raise InvalidCoordinate(f"Invalid coordinate move: {text!r}")
    from_sq = parse_square(move[0:2])
    to_sq = parse_square(move[2:4])
    promotion: PieceKind | None = None
    if len(move) == 5:
        promotion = _PROMO_KINDS.get(move[4])
        if promotion is None:
            raise InvalidCoordinate(f"Invalid promotion piece in move: {text!r}")
    return from_sq, to_sq, promotion


def format_coordinate_move(
    from_sq: Square,
    to_sq: Square,
    promotion: PieceKind | None = None,
) -> str:
    """Inverse of :func:`parse_coordinate_move`."""
    text = f"{from_sq.name}{to_sq.name}"
    if promotion is not None:
        text += _PROMO_CHARS[promotion]
    return text
