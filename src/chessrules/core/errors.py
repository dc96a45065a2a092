"""Exception hierarchy for the rules engine.

Every error here is recoverable: the caller reports it and keeps the
current position.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.types import Square


class ChessRulesError(Exception):
    """Base class for all rules-engine errors."""


class MoveError(ChessRulesError):
    """A requested move could not be applied."""

    def __init__(
        self,
        message: str,
        from_sq: Square | None = None,
        to_sq: Square | None = None,
    ) -> None:
        super().__init__(message)
        self.from_sq = from_sq
        self.to_sq = to_sq


class NoPieceAtSource(MoveError):
    """The move starts on an empty square."""


class IllegalMove(MoveError):
    """Destination is not a legal move for that piece (including self-check)."""


class PromotionRequired(MoveError):
    """A pawn reaches the last rank, no piece was chosen and no default is set."""


class InvalidCoordinate(ChessRulesError, ValueError):
    """Square or coordinate text outside the board."""


class MalformedPosition(ChessRulesError, ValueError):
    """Externally supplied position data is structurally invalid."""
