"""Abstract interfaces and configuration for the game layer.

High-level :class:`~chessrules.game.session.GameSession` and
:class:`~chessrules.game.suggestion.SuggestionRelay` depend on these, not on
concrete move sources.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from chessrules.core.enums import PROMOTION_KINDS, PieceKind

# ── Session configuration ────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SessionOptions:
    """Immutable session configuration.

    Args:
        default_promotion: Piece used when a pawn reaches the last rank and
            the caller gives no choice. ``None`` makes the choice mandatory.
        max_suggestion_attempts: How many times an external move source is
            asked before its failure is reported.
    """

    default_promotion: PieceKind | None = None
    max_suggestion_attempts: int = 1

    def __post_init__(self) -> None:
        if self.default_promotion is not None and self.default_promotion not in PROMOTION_KINDS:
            raise ValueError(f"Invalid default promotion: {self.default_promotion!r}")
        if self.max_suggestion_attempts < 1:
            raise ValueError(
                f"max_suggestion_attempts must be >= 1, got {self.max_suggestion_attempts}"
            )


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IMoveSource(ABC):
    """Interface for an external move suggester (remote opponent, engine)."""

    @abstractmethod
    async def suggest_move(self, snapshot: dict[str, Any]) -> str:
        """Return a coordinate move such as ``"e7e5"`` for *snapshot*.

        *snapshot* is the JSON wire form of the current position.
        """
