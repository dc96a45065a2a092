"""GameSession: the orchestrator owning the live position.

Coordinates: Position, MoveExecutor, Rules.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from chessrules.core.enums import GameStatus, PieceKind, Side
from chessrules.core.errors import MoveError
from chessrules.core.executor import MoveExecutor
from chessrules.core.move import MoveRecord
from chessrules.core.notation.coordinate import parse_coordinate_move
from chessrules.core.notation.fen import position_from_fen, position_to_fen
from chessrules.core.notation.snapshot import (
    position_from_json,
    position_from_snapshot,
    position_to_json,
    position_to_snapshot,
)
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import Square, check_square
from chessrules.game.interfaces import SessionOptions

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, Position], None]
StatusCallback = Callable[[GameStatus], None]
ResetCallback = Callable[[], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status: list[StatusCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Holds one live :class:`Position` and applies moves to it.

    Every mutation (moves, reset, loads) runs under a single re-entrant lock,
    so at most one change is in flight per session. Readers always see a
    complete position because positions are never modified in place.
    On any raised error the held position is unchanged.
    """

    __slots__ = ("_position", "_options", "_executor", "_lock", "events")

    def __init__(
        self,
        options: SessionOptions | None = None,
        position: Position | None = None,
    ) -> None:
        self._options = options or SessionOptions()
        self._executor = MoveExecutor(self._options.default_promotion)
        self._position = position if position is not None else Position.initial()
        self._lock = threading.RLock()
        self.events = SessionEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def options(self) -> SessionOptions:
        return self._options

    @property
    def side_to_move(self) -> Side:
        return self._position.side_to_move

    @property
    def history(self) -> tuple[str, ...]:
        """All moves played so far in coordinate notation."""
        return self._position.history_strings

    @property
    def last_move(self) -> MoveRecord | None:
        return self._position.last_move

    # ── Queries ──────────────────────────────────────────────────────────

    def status(self) -> GameStatus:
        return Rules.game_status(self._position)

    def legal_destinations(self, sq: Square) -> set[Square]:
        """Where the piece on *sq* may go; empty unless it belongs to the side to move."""
        position = self._position
        piece = position.board[check_square(sq)]
        if piece is None or piece.side != position.side_to_move:
            return set()
        return Rules.legal_moves(position, sq)

    def snapshot(self) -> dict[str, Any]:
        """Wire snapshot of the current position (see :mod:`~chessrules.core.notation.snapshot`)."""
        return position_to_snapshot(self._position)

    def to_json(self) -> str:
        return position_to_json(self._position)

    def fen(self) -> str:
        return position_to_fen(self._position)

    # ── Moves ────────────────────────────────────────────────────────────

    def request_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceKind | None = None,
    ) -> MoveRecord:
        """Validate and commit a move; return its record.

        Raises:
            InvalidCoordinate: a square lies off the board.
            NoPieceAtSource: *from_sq* is empty.
            IllegalMove: the move is not legal in the current position.
            PromotionRequired: a promoting move without a choice and no
                configured default.
        """
        with self._lock:
            try:
                new_position = self._executor.apply(
                    self._position, from_sq, to_sq, promotion
                )
            except MoveError as exc:
                _LOGGER.warning(
                    "Rejected %s%s: %s (%s)",
                    from_sq.name,
                    to_sq.name,
                    type(exc).__name__,
                    exc,
                )
                raise
            self._position = new_position
            record = new_position.move_history[-1]
            _LOGGER.debug("Accepted %s", record)
            self._emit_move(record, new_position)
            self._emit_status(Rules.game_status(new_position))
            return record

    def apply_coordinate_move(self, text: str) -> MoveRecord:
        """Parse ``"e2e4"`` / ``"e7e8q"`` and play it.

        Raises :class:`~chessrules.core.errors.InvalidCoordinate` for text
        that is not a coordinate move, otherwise as :meth:`request_move`.
        """
        from_sq, to_sq, promotion = parse_coordinate_move(text)
        return self.request_move(from_sq, to_sq, promotion)

    # ── Setup ────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Restore the standard starting position."""
        with self._lock:
            self._position = Position.initial()
            _LOGGER.info("Session reset to the initial position")
            self._emit_reset()
            self._emit_status(GameStatus.NORMAL)

    def load_fen(self, fen: str) -> None:
        position = position_from_fen(fen)
        self._replace(position, "FEN")

    def load_snapshot(self, data: dict[str, Any]) -> None:
        position = position_from_snapshot(data)
        self._replace(position, "snapshot")

    def load_json(self, text: str | bytes) -> None:
        position = position_from_json(text)
        self._replace(position, "JSON")

    # ── Internal helpers ─────────────────────────────────────────────────

    def _replace(self, position: Position, source: str) -> None:
        with self._lock:
            self._position = position
            _LOGGER.info(
                "Loaded position from %s (%s to move)", source, position.side_to_move
            )
            self._emit_status(Rules.game_status(position))

    def _emit_move(self, record: MoveRecord, position: Position) -> None:
        for cb in self.events.on_move:
            cb(record, position)

    def _emit_status(self, status: GameStatus) -> None:
        for cb in self.events.on_status:
            cb(status)

    def _emit_reset(self) -> None:
        for cb in self.events.on_reset:
            cb()
