"""Square type and coordinate helpers.

A square is a ``(rank, file)`` pair, both 0–7::

    a1 = (0, 0), b1 = (0, 1), ..., h1 = (0, 7)
    a2 = (1, 0), ...
    ...
    a8 = (7, 0), ..., h8 = (7, 7)

``Square.idx`` maps the pair onto 0–63 (``rank * 8 + file``) for table
lookups.
"""

from __future__ import annotations

from typing import NamedTuple

from chessrules.core.errors import InvalidCoordinate

_FILES = "abcdefgh"
_RANKS = "12345678"


class Square(NamedTuple):
    """Board coordinate. Build checked instances with :meth:`of`."""

    rank: int
    file: int

    @classmethod
    def of(cls, rank: int, file: int) -> Square:
        """Return the square at (*rank*, *file*), validating both axes."""
        if not (0 <= rank < 8 and 0 <= file < 8):
            raise InvalidCoordinate(f"Square out of range: rank={rank}, file={file}")
        return _SQUARES[rank * 8 + file]

    @property
    def idx(self) -> int:
        """Little-endian rank-file index 0–63."""
        return self.rank * 8 + self.file

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``(3, 4)`` → ``'e4'``."""
        return _FILES[self.file] + _RANKS[self.rank]

    def offset(self, d_rank: int, d_file: int) -> Square | None:
        """Neighbouring square, or ``None`` when it falls off the board."""
        rank = self.rank + d_rank
        file = self.file + d_file
        if 0 <= rank < 8 and 0 <= file < 8:
            return _SQUARES[rank * 8 + file]
        return None

    def __str__(self) -> str:
        return self.name


_SQUARES: tuple[Square, ...] = tuple(Square(i >> 3, i & 7) for i in range(64))


def check_square(sq: Square) -> Square:
    """Return *sq* unchanged, or raise :class:`InvalidCoordinate` if it is off the board.

    Catches squares built directly as ``Square(rank, file)`` rather than via
    :meth:`Square.of`; a negative axis would otherwise alias a real index.
    """
    if not (0 <= sq.rank < 8 and 0 <= sq.file < 8):
        raise InvalidCoordinate(f"Square out of range: rank={sq.rank}, file={sq.file}")
    return sq


def square_at(index: int) -> Square:
    """Square for a 0–63 index."""
    if not (0 <= index < 64):
        raise InvalidCoordinate(f"Square index out of range: {index}")
    return _SQUARES[index]


def all_squares() -> tuple[Square, ...]:
    """All 64 squares, a1 first, h8 last."""
    return _SQUARES


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(0, 0)`` → ``'a1'``."""
    return sq.name


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` → ``Square(3, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise InvalidCoordinate(f"Invalid square name: {name!r}")
    return _SQUARES[_RANKS.index(name[1]) * 8 + _FILES.index(name[0])]


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = _SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = _SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = _SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = _SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = _SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = _SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = _SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = _SQUARES[56:64]
