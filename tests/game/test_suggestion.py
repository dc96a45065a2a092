"""Tests for SuggestionRelay and CallbackMoveSource."""

import asyncio
import logging
from typing import Any

import pytest

from chessrules.core.enums import Side
from chessrules.core.errors import IllegalMove, InvalidCoordinate
from chessrules.game.interfaces import IMoveSource, SessionOptions
from chessrules.game.session import GameSession
from chessrules.game.suggestion import CallbackMoveSource, SuggestionRelay


class ScriptedSource(IMoveSource):
    """Returns canned answers in order and records what it was shown."""

    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.seen: list[dict[str, Any]] = []

    async def suggest_move(self, snapshot: dict[str, Any]) -> str:
        self.seen.append(snapshot)
        return self._answers.pop(0)


class TestCallbackMoveSource:
    def test_sync_callback(self) -> None:
        source = CallbackMoveSource(lambda snapshot: "e2e4", name="Fixed")
        assert asyncio.run(source.suggest_move({})) == "e2e4"
        assert source.name == "Fixed"

    def test_async_callback(self) -> None:
        async def answer(snapshot: dict[str, Any]) -> str:
            await asyncio.sleep(0)
            return "g1f3"

        source = CallbackMoveSource(answer)
        assert asyncio.run(source.suggest_move({})) == "g1f3"

    def test_receives_snapshot(self) -> None:
        seen: list[dict[str, Any]] = []

        def answer(snapshot: dict[str, Any]) -> str:
            seen.append(snapshot)
            return "e2e4"

        session = GameSession()
        asyncio.run(SuggestionRelay(session, CallbackMoveSource(answer)).play_turn())
        assert seen[0]["toMove"] == "white"
        assert seen[0]["moveHistory"] == []


class TestSuggestionRelay:
    def test_legal_suggestion_played(self) -> None:
        session = GameSession()
        source = ScriptedSource("e2e4")
        record = asyncio.run(SuggestionRelay(session, source).play_turn())
        assert record.coordinate == "e2e4"
        assert session.side_to_move == Side.BLACK
        assert len(source.seen) == 1

    def test_illegal_suggestion_raises(self) -> None:
        session = GameSession()
        before = session.position
        relay = SuggestionRelay(session, ScriptedSource("e2e5"))
        with pytest.raises(IllegalMove):
            asyncio.run(relay.play_turn())
        assert session.position is before

    def test_unparsable_suggestion_raises(self) -> None:
        session = GameSession()
        relay = SuggestionRelay(session, ScriptedSource("I think Nf3"))
        with pytest.raises(InvalidCoordinate):
            asyncio.run(relay.play_turn())
        assert session.history == ()

    def test_retries_until_legal(self) -> None:
        session = GameSession(SessionOptions(max_suggestion_attempts=3))
        source = ScriptedSource("e2e5", "hello", "d2d4")
        record = asyncio.run(SuggestionRelay(session, source).play_turn())
        assert record.coordinate == "d2d4"
        assert len(source.seen) == 3

    def test_attempts_exhausted(self, caplog: pytest.LogCaptureFixture) -> None:
        session = GameSession(SessionOptions(max_suggestion_attempts=2))
        relay = SuggestionRelay(session, ScriptedSource("e2e5", "e7e5"))
        with caplog.at_level(logging.WARNING, logger="chessrules.game.suggestion"):
            with pytest.raises(IllegalMove):
                asyncio.run(relay.play_turn())
        relay_records = [r for r in caplog.records if r.name == "chessrules.game.suggestion"]
        warnings = [r for r in relay_records if r.levelno == logging.WARNING]
        errors = [r for r in relay_records if r.levelno == logging.ERROR]
        assert len(warnings) == 2
        assert len(errors) == 1
        assert session.history == ()

    def test_cancellation_propagates(self) -> None:
        class SlowSource(IMoveSource):
            async def suggest_move(self, snapshot: dict[str, Any]) -> str:
                await asyncio.sleep(10)
                return "e2e4"

        session = GameSession()
        relay = SuggestionRelay(session, SlowSource())

        async def run() -> None:
            task = asyncio.create_task(relay.play_turn())
            await asyncio.sleep(0)
            task.cancel()
            await task

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(run())
        assert session.history == ()

    def test_last_error_is_raised(self) -> None:
        session = GameSession(SessionOptions(max_suggestion_attempts=2))
        source = ScriptedSource("e2e5", "nonsense", "e2e4")
        with pytest.raises(InvalidCoordinate):
            asyncio.run(SuggestionRelay(session, source).play_turn())
        assert len(source.seen) == 2
        assert session.history == ()
