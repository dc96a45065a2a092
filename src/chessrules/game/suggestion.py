"""Relay between an external move source and a :class:`GameSession`."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from chessrules.core.errors import InvalidCoordinate, MoveError
from chessrules.game.interfaces import IMoveSource

if TYPE_CHECKING:
    from chessrules.core.move import MoveRecord
    from chessrules.game.session import GameSession

_LOGGER = logging.getLogger(__name__)

SuggestCallback = Callable[[dict[str, Any]], "str | Awaitable[str]"]


class CallbackMoveSource(IMoveSource):
    """A move source that delegates to a plain callable.

    The actual opponent (network client, engine process) is decoupled:
    ``CallbackMoveSource`` only stores a reference to a *bridge* callable
    that receives the position snapshot and returns a coordinate move,
    either directly or as an awaitable.

    Args:
        on_suggest: ``(snapshot) -> str`` or ``async (snapshot) -> str``.
        name: Display name used in log messages.
    """

    __slots__ = ("_on_suggest", "_name")

    def __init__(self, on_suggest: SuggestCallback, name: str = "Engine") -> None:
        self._on_suggest = on_suggest
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def suggest_move(self, snapshot: dict[str, Any]) -> str:
        result = self._on_suggest(snapshot)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"CallbackMoveSource({self._name!r})"


class SuggestionRelay:
    """Asks an :class:`IMoveSource` for a move and plays it on a session.

    A suggestion that does not parse or is not legal is logged and the
    source is asked again, up to the session's ``max_suggestion_attempts``.
    When every attempt fails, the last error is raised and the session's
    position is unchanged. Cancelling the awaiting task propagates as usual.
    """

    __slots__ = ("_session", "_source")

    def __init__(self, session: GameSession, source: IMoveSource) -> None:
        self._session = session
        self._source = source

    @property
    def source(self) -> IMoveSource:
        return self._source

    async def play_turn(self) -> MoveRecord:
        """Fetch a suggestion and commit it; return the committed record."""
        attempts = self._session.options.max_suggestion_attempts
        attempt = 1
        while True:
            suggestion = await self._source.suggest_move(self._session.snapshot())
            try:
                return self._session.apply_coordinate_move(suggestion)
            except (MoveError, InvalidCoordinate) as exc:
                _LOGGER.warning(
                    "Suggestion %r rejected (attempt %d/%d): %s",
                    suggestion,
                    attempt,
                    attempts,
                    exc,
                )
                if attempt >= attempts:
                    _LOGGER.error(
                        "Move source %r gave no legal move in %d attempts",
                        self._source,
                        attempts,
                    )
                    raise
            attempt += 1
