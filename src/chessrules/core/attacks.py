"""Attack detection: which squares a side's pieces cover on the current board."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import PieceKind, Side
from chessrules.core.types import Square, all_squares, check_square

if TYPE_CHECKING:
    from chessrules.core.position import Position


# (d_rank, d_file) offsets
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables (indexed by Square.idx) -----------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in all_squares():
        moves: list[Square] = []
        for dr, df in offsets:
            target = sq.offset(dr, df)
            if target is not None:
                moves.append(target)
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in all_squares():
        square_rays: list[tuple[Square, ...]] = []
        for dr, df in directions:
            ray: list[Square] = []
            cur = sq.offset(dr, df)
            while cur is not None:
                ray.append(cur)
                cur = cur.offset(dr, df)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_attacks(side: Side) -> tuple[tuple[Square, ...], ...]:
    """Squares a *side* pawn standing on each square attacks."""
    direction = side.pawn_direction
    return _build_targets(((direction, -1), (direction, 1)))


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
PAWN_ATTACKS: tuple[tuple[tuple[Square, ...], ...], ...] = (
    _build_pawn_attacks(Side.WHITE),
    _build_pawn_attacks(Side.BLACK),
)

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_DIAGONAL_SLIDERS = (PieceKind.BISHOP, PieceKind.QUEEN)
_STRAIGHT_SLIDERS = (PieceKind.ROOK, PieceKind.QUEEN)


class AttackMap:
    """Raw attack coverage for a :class:`Position`.

    Attack patterns, not move patterns: pawns attack diagonally only, kings
    attack their eight neighbours and never castle here. Sliding attacks
    stop at (and include) the first occupied square whatever its colour.
    Whose turn it is and self-check are irrelevant.
    """

    __slots__ = ("_board",)

    def __init__(self, position: Position) -> None:
        self._board = position.board

    def is_attacked(self, sq: Square, by_side: Side) -> bool:
        """Is *sq* attacked by any piece of *by_side*?"""
        board = self._board
        idx = check_square(sq).idx

        # A by_side pawn attacks sq from the squares an opposing pawn on sq
        # would attack.
        for from_sq in PAWN_ATTACKS[by_side.opposite][idx]:
            piece = board[from_sq]
            if piece is not None and piece.side == by_side and piece.kind == PieceKind.PAWN:
                return True

        for from_sq in KNIGHT_TARGETS[idx]:
            piece = board[from_sq]
            if piece is not None and piece.side == by_side and piece.kind == PieceKind.KNIGHT:
                return True

        for from_sq in KING_TARGETS[idx]:
            piece = board[from_sq]
            if piece is not None and piece.side == by_side and piece.kind == PieceKind.KING:
                return True

        if self._ray_hit(BISHOP_RAYS[idx], by_side, _DIAGONAL_SLIDERS):
            return True
        return self._ray_hit(ROOK_RAYS[idx], by_side, _STRAIGHT_SLIDERS)

    def attacks_from(self, sq: Square) -> set[Square]:
        """Squares attacked by the piece on *sq* (empty set for an empty square)."""
        piece = self._board[check_square(sq)]
        if piece is None:
            return set()
        idx = sq.idx
        kind = piece.kind
        if kind == PieceKind.PAWN:
            return set(PAWN_ATTACKS[piece.side][idx])
        if kind == PieceKind.KNIGHT:
            return set(KNIGHT_TARGETS[idx])
        if kind == PieceKind.KING:
            return set(KING_TARGETS[idx])
        if kind == PieceKind.BISHOP:
            rays = BISHOP_RAYS[idx]
        elif kind == PieceKind.ROOK:
            rays = ROOK_RAYS[idx]
        else:
            rays = QUEEN_RAYS[idx]
        return self._ray_cover(rays)

    def attacked_squares(self, by_side: Side) -> set[Square]:
        """Union of every *by_side* piece's attack pattern."""
        covered: set[Square] = set()
        for sq, _ in self._board.occupied(by_side):
            covered |= self.attacks_from(sq)
        return covered

    # -- Internals ----------------------------------------------------------

    def _ray_hit(
        self,
        rays: tuple[tuple[Square, ...], ...],
        by_side: Side,
        kinds: tuple[PieceKind, ...],
    ) -> bool:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.side == by_side and piece.kind in kinds:
                    return True
                break
        return False

    def _ray_cover(self, rays: tuple[tuple[Square, ...], ...]) -> set[Square]:
        board = self._board
        covered: set[Square] = set()
        for ray in rays:
            for to_sq in ray:
                covered.add(to_sq)
                if board[to_sq] is not None:
                    break
        return covered
