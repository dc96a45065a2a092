"""FEN parsing and serialization."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Side
from chessrules.core.errors import InvalidCoordinate, MalformedPosition
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def check_kings(board: Board) -> None:
    """Raise :class:`MalformedPosition` unless each side has exactly one king."""
    for side in Side:
        count = len(board.kings(side))
        if count != 1:
            raise MalformedPosition(f"Expected one {side} king, found {count}")


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise MalformedPosition(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedPosition(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise MalformedPosition(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise MalformedPosition(f"Invalid FEN rank width: {fen!r}")
                try:
                    board[Square.of(rank, file)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise MalformedPosition(str(exc)) from exc
                file += 1
            if file > 8:
                raise MalformedPosition(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise MalformedPosition(f"Invalid FEN rank width: {fen!r}")
    check_kings(board)

    # 2. Side to move
    if side_part == "w":
        side = Side.WHITE
    elif side_part == "b":
        side = Side.BLACK
    else:
        raise MalformedPosition(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise MalformedPosition(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except InvalidCoordinate as exc:
            raise MalformedPosition(str(exc)) from exc
        expected_ep_rank = 5 if side == Side.WHITE else 2
        if ep.rank != expected_ep_rank:
            raise MalformedPosition(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks (optional)
    try:
        halfmove = int(parts[4]) if len(parts) > 4 else 0
        fullmove = int(parts[5]) if len(parts) > 5 else 1
    except ValueError as exc:
        raise MalformedPosition(f"Invalid FEN clock field: {fen!r}") from exc
    if halfmove < 0:
        raise MalformedPosition(f"Invalid FEN halfmove clock: {parts[4]!r}")
    if fullmove < 1:
        raise MalformedPosition(f"Invalid FEN fullmove number: {parts[5]!r}")

    return Position(
        board=board,
        side_to_move=side,
        castling=castling,
        en_passant=ep,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    # 1. Board
    rows: list[str] = []
    for codes in pos.board.to_rows():
        empty = 0
        row = ""
        for code in codes:
            if code is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += code
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Side.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = pos.en_passant.name if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"
