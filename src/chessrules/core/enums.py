"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, StrEnum, auto


class Side(IntEnum):
    """Side to play."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Side:
        return Side(1 - self.value)

    @property
    def home_rank(self) -> int:
        """Back rank of this side (0 for White, 7 for Black)."""
        return 0 if self == Side.WHITE else 7

    @property
    def pawn_direction(self) -> int:
        return 1 if self == Side.WHITE else -1

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


class CastleSide(StrEnum):
    """Wing of the board a castling move goes to."""

    KING = "king"
    QUEEN = "queen"


class CastlingRights(IntFlag):
    """Bitmask for castling availability.

    Rights are only ever cleared during play, never set again.
    """

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, side: Side, wing: CastleSide) -> CastlingRights:
        """Single right for *side* castling towards *wing*."""
        if side == Side.WHITE:
            return cls.WHITE_KINGSIDE if wing == CastleSide.KING else cls.WHITE_QUEENSIDE
        return cls.BLACK_KINGSIDE if wing == CastleSide.KING else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, side: Side) -> CastlingRights:
        return cls.WHITE_BOTH if side == Side.WHITE else cls.BLACK_BOTH


class GameStatus(IntEnum):
    """Status of the side to move."""

    NORMAL = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)
