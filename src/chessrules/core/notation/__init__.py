"""Notation package: FEN, coordinate moves and the JSON snapshot format."""

from chessrules.core.notation.coordinate import (
    format_coordinate_move,
    parse_coordinate_move,
)
from chessrules.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chessrules.core.notation.snapshot import (
    CastleRightsModel,
    PositionSnapshot,
    position_from_json,
    position_from_snapshot,
    position_to_json,
    position_to_snapshot,
)

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "parse_coordinate_move",
    "format_coordinate_move",
    "CastleRightsModel",
    "PositionSnapshot",
    "position_to_snapshot",
    "position_from_snapshot",
    "position_to_json",
    "position_from_json",
]
