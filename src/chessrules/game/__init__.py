"""Game management layer: session orchestration and external move sources.

Quick start::

    from chessrules.game import GameSession
    from chessrules.core import parse_square

    session = GameSession()
    session.request_move(parse_square("e2"), parse_square("e4"))
    print(session.status())
"""

from chessrules.game.interfaces import IMoveSource, SessionOptions
from chessrules.game.session import GameSession, SessionEvents
from chessrules.game.suggestion import CallbackMoveSource, SuggestionRelay

__all__ = [
    # Interfaces / config
    "IMoveSource",
    "SessionOptions",
    # Concrete
    "CallbackMoveSource",
    "GameSession",
    "SessionEvents",
    "SuggestionRelay",
]
