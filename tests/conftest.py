"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessrules.core.position import Position
from chessrules.game.session import GameSession


@pytest.fixture
def start_position() -> Position:
    """Fresh standard starting position."""
    return Position.initial()


@pytest.fixture
def session() -> GameSession:
    """Session with default options at the starting position."""
    return GameSession()
