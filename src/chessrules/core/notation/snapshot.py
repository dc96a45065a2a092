"""JSON position snapshot: the persisted / transmitted wire format.

Shape::

    {
      "board": [[ "r", "n", ..., null ], ...],   # 8 rows, rank 8 first
      "toMove": "white" | "black",
      "moveHistory": ["e2e4", "e7e5", ...],
      "castleRights": {"whiteKingside": true, ...},
      "enPassant": "e3" | null
    }
"""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Side
from chessrules.core.errors import InvalidCoordinate, MalformedPosition
from chessrules.core.notation.fen import check_kings
from chessrules.core.piece import PIECE_CODES
from chessrules.core.position import Position
from chessrules.core.types import parse_square

_HISTORY_RE = re.compile(r"^[a-h][1-8][a-h][1-8]$")


class CastleRightsModel(BaseModel):
    """The four castling flags. Missing flags default to ``True``."""

    white_kingside: bool = Field(default=True, alias="whiteKingside")
    white_queenside: bool = Field(default=True, alias="whiteQueenside")
    black_kingside: bool = Field(default=True, alias="blackKingside")
    black_queenside: bool = Field(default=True, alias="blackQueenside")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_flags(cls, castling: CastlingRights) -> CastleRightsModel:
        return cls(
            white_kingside=bool(castling & CastlingRights.WHITE_KINGSIDE),
            white_queenside=bool(castling & CastlingRights.WHITE_QUEENSIDE),
            black_kingside=bool(castling & CastlingRights.BLACK_KINGSIDE),
            black_queenside=bool(castling & CastlingRights.BLACK_QUEENSIDE),
        )

    def to_flags(self) -> CastlingRights:
        flags = CastlingRights.NONE
        if self.white_kingside:
            flags |= CastlingRights.WHITE_KINGSIDE
        if self.white_queenside:
            flags |= CastlingRights.WHITE_QUEENSIDE
        if self.black_kingside:
            flags |= CastlingRights.BLACK_KINGSIDE
        if self.black_queenside:
            flags |= CastlingRights.BLACK_QUEENSIDE
        return flags


class PositionSnapshot(BaseModel):
    """Validated wire representation of a :class:`Position`."""

    board: list[list[str | None]]
    to_move: Literal["white", "black"] = Field(alias="toMove")
    move_history: list[str] = Field(default_factory=list, alias="moveHistory")
    castle_rights: CastleRightsModel = Field(
        default_factory=CastleRightsModel, alias="castleRights"
    )
    en_passant: str | None = Field(default=None, alias="enPassant")

    model_config = {"populate_by_name": True}

    @field_validator("board")
    @classmethod
    def validate_board(cls, v: list[list[str | None]]) -> list[list[str | None]]:
        if len(v) != 8 or any(len(row) != 8 for row in v):
            raise ValueError("Board must be 8 rows of 8 squares")
        for row in v:
            for code in row:
                if code is not None and code not in PIECE_CODES:
                    raise ValueError(f"Invalid piece code: {code!r}")
        return v

    @field_validator("move_history")
    @classmethod
    def validate_history(cls, v: list[str]) -> list[str]:
        for entry in v:
            if not _HISTORY_RE.match(entry):
                raise ValueError(f"Invalid history entry: {entry!r}")
        return v

    @field_validator("en_passant")
    @classmethod
    def validate_en_passant(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            parse_square(v)
        except InvalidCoordinate as exc:
            raise ValueError(str(exc)) from exc
        return v

    @model_validator(mode="after")
    def check_en_passant_rank(self) -> PositionSnapshot:
        if self.en_passant is not None:
            # The skipped square lies behind the opponent's double-stepped pawn.
            expected = "6" if self.to_move == "white" else "3"
            if self.en_passant[1] != expected:
                raise ValueError(
                    f"En passant square {self.en_passant} impossible with "
                    f"{self.to_move} to move"
                )
        return self


# -- Conversions -------------------------------------------------------------


def _build_snapshot(position: Position) -> PositionSnapshot:
    en_passant = position.en_passant
    # Positions are trusted here; validation is for incoming data only.
    return PositionSnapshot.model_construct(
        board=position.board.to_rows(),
        to_move=str(position.side_to_move),
        move_history=list(position.wire_history),
        castle_rights=CastleRightsModel.from_flags(position.castling),
        en_passant=en_passant.name if en_passant is not None else None,
    )


def position_to_snapshot(position: Position) -> dict[str, Any]:
    """Serialize *position* to a JSON-ready dict using the wire key names."""
    return _build_snapshot(position).model_dump(by_alias=True)


def position_from_snapshot(data: dict[str, Any] | PositionSnapshot) -> Position:
    """Rebuild a :class:`Position` from a wire snapshot.

    The history arrives as plain coordinate strings and is kept verbatim in
    :attr:`Position.loaded_history`. The halfmove clock is not part of the
    format and restarts at zero.

    Raises:
        MalformedPosition: the snapshot fails validation or a side does not
            have exactly one king.
    """
    if isinstance(data, PositionSnapshot):
        snapshot = data
    else:
        try:
            snapshot = PositionSnapshot.model_validate(data)
        except ValidationError as exc:
            raise MalformedPosition(f"Invalid position snapshot: {exc}") from exc

    try:
        board = Board.from_rows(snapshot.board)
    except ValueError as exc:
        raise MalformedPosition(str(exc)) from exc
    check_kings(board)

    history = tuple(snapshot.move_history)
    en_passant = parse_square(snapshot.en_passant) if snapshot.en_passant else None
    return Position(
        board=board,
        side_to_move=Side.WHITE if snapshot.to_move == "white" else Side.BLACK,
        castling=snapshot.castle_rights.to_flags(),
        en_passant=en_passant,
        fullmove_number=1 + len(history) // 2,
        loaded_history=history,
    )


def position_to_json(position: Position) -> str:
    return _build_snapshot(position).model_dump_json(by_alias=True)


def position_from_json(text: str | bytes) -> Position:
    """Parse a JSON document into a :class:`Position`."""
    try:
        snapshot = PositionSnapshot.model_validate_json(text)
    except ValidationError as exc:
        raise MalformedPosition(f"Invalid position snapshot: {exc}") from exc
    return position_from_snapshot(snapshot)
