"""Core rules layer: pure chess logic; only the snapshot model needs pydantic.

Quick start::

    from chessrules.core import Position, Rules, parse_square

    pos = Position.initial()
    print(Rules.legal_moves(pos, parse_square("g1")))   # {f3, h3}
    print(Rules.game_status(pos))                        # GameStatus.NORMAL
"""

from chessrules.core.attacks import AttackMap
from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_KINDS,
    CastleSide,
    CastlingRights,
    GameStatus,
    PieceKind,
    Side,
)
from chessrules.core.errors import (
    ChessRulesError,
    IllegalMove,
    InvalidCoordinate,
    MalformedPosition,
    MoveError,
    NoPieceAtSource,
    PromotionRequired,
)
from chessrules.core.executor import MoveExecutor, advance
from chessrules.core.move import MoveRecord
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import (
    STARTING_FEN,
    format_coordinate_move,
    parse_coordinate_move,
    position_from_fen,
    position_from_json,
    position_from_snapshot,
    position_to_fen,
    position_to_json,
    position_to_snapshot,
)
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import Square, all_squares, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastleSide",
    "CastlingRights",
    "GameStatus",
    "PieceKind",
    "PROMOTION_KINDS",
    "Side",
    # Errors
    "ChessRulesError",
    "IllegalMove",
    "InvalidCoordinate",
    "MalformedPosition",
    "MoveError",
    "NoPieceAtSource",
    "PromotionRequired",
    # Types / helpers
    "Square",
    "all_squares",
    "parse_square",
    "square_name",
    # Domain objects
    "AttackMap",
    "Board",
    "MoveExecutor",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Position",
    "Rules",
    "advance",
    # Notation
    "STARTING_FEN",
    "format_coordinate_move",
    "parse_coordinate_move",
    "position_from_fen",
    "position_from_json",
    "position_from_snapshot",
    "position_to_fen",
    "position_to_json",
    "position_to_snapshot",
]
