"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from chessrules.core.enums import PieceKind, Side
from chessrules.core.piece import Piece
from chessrules.core.types import Square, square_at

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


class Board:
    """64-square mapping from :class:`Square` to optional :class:`Piece`.

    A board is mutated only by whoever is building it (setup, loaders,
    :func:`~chessrules.core.executor.advance`). Once handed to a
    :class:`~chessrules.core.position.Position` it is treated as frozen;
    use :meth:`copy` to get an independently owned board.
    """

    __slots__ = ("_squares", "_kings")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [side] -> squares holding that side's king(s); arbitrary input may
        # have zero or several.
        self._kings: tuple[list[Square], list[Square]] = ([], [])

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq.idx]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        idx = sq.idx
        old_piece = self._squares[idx]
        if old_piece == piece:
            return
        if old_piece is not None and old_piece.kind == PieceKind.KING:
            self._kings[old_piece.side].remove(sq)
        self._squares[idx] = piece
        if piece is not None and piece.kind == PieceKind.KING:
            self._kings[piece.side].append(sq)

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, a1 first."""
        for idx, piece in enumerate(self._squares):
            if piece is not None:
                yield square_at(idx), piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq.idx] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, side: Side, kind: PieceKind) -> list[Square]:
        """Squares occupied by *side*'s *kind*."""
        target = Piece(side, kind)
        return [sq for sq, piece in self if piece == target]

    def occupied(self, side: Side) -> list[tuple[Square, Piece]]:
        """All ``(square, piece)`` pairs belonging to *side*."""
        return [(sq, piece) for sq, piece in self if piece.side == side]

    def kings(self, side: Side) -> list[Square]:
        return list(self._kings[side])

    def king_square(self, side: Side) -> Square | None:
        """The king square for *side*, or ``None`` when it is missing."""
        kings = self._kings[side]
        return kings[0] if kings else None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._kings = (self._kings[0].copy(), self._kings[1].copy())
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._kings = ([], [])

    # -- Factories / export -------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard 32-piece starting setup."""
        b = cls()
        for file in range(8):
            b[Square.of(1, file)] = Piece(Side.WHITE, PieceKind.PAWN)
            b[Square.of(6, file)] = Piece(Side.BLACK, PieceKind.PAWN)
        for file, kind in enumerate(_BACK_RANK):
            b[Square.of(0, file)] = Piece(Side.WHITE, kind)
            b[Square.of(7, file)] = Piece(Side.BLACK, kind)
        return b

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str | None]]) -> Board:
        """Build a board from 8 rows of piece codes, rank 8 first."""
        if len(rows) != 8 or any(len(row) != 8 for row in rows):
            raise ValueError("Board must be 8 rows of 8 squares")
        b = cls()
        for row_idx, row in enumerate(rows):
            for file, code in enumerate(row):
                if code:
                    b[Square.of(7 - row_idx, file)] = Piece.from_char(code)
        return b

    def to_rows(self) -> list[list[str | None]]:
        """Inverse of :meth:`from_rows`."""
        rows: list[list[str | None]] = []
        for rank in range(7, -1, -1):
            row: list[str | None] = []
            for file in range(8):
                piece = self[Square.of(rank, file)]
                row.append(piece.code if piece is not None else None)
            rows.append(row)
        return rows

    def diagram(self) -> str:
        """Text diagram with coordinates on every edge."""
        lines = ["   a b c d e f g h", ""]
        for rank in range(7, -1, -1):
            cells = []
            for file in range(8):
                piece = self[Square.of(rank, file)]
                cells.append(piece.code if piece is not None else ".")
            lines.append(f"{rank + 1}  {' '.join(cells)}  {rank + 1}")
        lines.extend(["", "   a b c d e f g h"])
        return "\n".join(lines)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(tuple(self._squares))

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[Square.of(rank, file)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
