from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterator, Tuple

# Boards are N x N with N*N <= 64, cells numbered row-major: (r, c) -> r*N + c.
# A position is three bitsets: occupied cells, owner (1 = Maximizing's disc,
# only meaningful where occupied) and stable discs (subset of occupied).

MASK64 = 0xFFFFFFFFFFFFFFFF
MAX_CELLS = 64

# Compass deltas (dr, dc) in row-major order around a cell.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

# The four undirected lines through a cell: horizontal, vertical, both diagonals.
AXES: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


class Player(IntEnum):
    NONE = 0
    MAXIMIZING = 1
    MINIMIZING = 2

    @property
    def opponent(self) -> "Player":
        assert self is not Player.NONE, "an empty cell has no opponent"
        return Player.MINIMIZING if self is Player.MAXIMIZING else Player.MAXIMIZING

    @property
    def sign(self) -> int:
        if self is Player.MAXIMIZING:
            return 1
        if self is Player.MINIMIZING:
            return -1
        return 0


def popcount(x: int) -> int:
    """Hamming weight of a 64-bit word (SWAR parallel bit count)."""
    x &= MASK64
    x = x - ((x >> 1) & 0x5555555555555555)
    x = (x & 0x3333333333333333) + ((x >> 2) & 0x3333333333333333)
    x = (x + (x >> 4)) & 0x0F0F0F0F0F0F0F0F
    return ((x * 0x0101010101010101) & MASK64) >> 56


@dataclass(frozen=True)
class Position:
    size: int
    occupied: int = 0
    owner: int = 0
    stable: int = 0

    def __post_init__(self) -> None:
        if self.size < 1 or self.size * self.size > MAX_CELLS:
            raise ValueError(f"unsupported board size: {self.size}")

    @property
    def cells(self) -> int:
        return self.size * self.size

    @property
    def full_mask(self) -> int:
        return (1 << self.cells) - 1

    def occupied_count(self) -> int:
        return popcount(self.occupied)

    def maximizing_count(self) -> int:
        return popcount(self.occupied & self.owner)

    def minimizing_count(self) -> int:
        return popcount(self.occupied & ~self.owner)

    def stable_counts(self) -> Tuple[int, int]:
        """Stable discs as (maximizing, minimizing)."""
        s = self.stable & self.occupied
        return popcount(s & self.owner), popcount(s & ~self.owner)

    def is_full(self) -> bool:
        return (self.occupied & self.full_mask) == self.full_mask


def index(size: int, row: int, col: int) -> int:
    return row * size + col


def in_bounds(size: int, row: int, col: int) -> bool:
    return 0 <= row < size and 0 <= col < size


def get_cell(pos: Position, row: int, col: int) -> Player:
    bit = 1 << (row * pos.size + col)
    if not pos.occupied & bit:
        return Player.NONE
    return Player.MAXIMIZING if pos.owner & bit else Player.MINIMIZING


def set_cell(pos: Position, player: Player, row: int, col: int) -> Position:
    bit = 1 << (row * pos.size + col)
    if player is Player.NONE:
        return replace(pos, occupied=pos.occupied & ~bit, owner=pos.owner & ~bit, stable=pos.stable & ~bit)
    owner = pos.owner | bit if player is Player.MAXIMIZING else pos.owner & ~bit
    return replace(pos, occupied=pos.occupied | bit, owner=owner)


def get_stable(pos: Position, row: int, col: int) -> bool:
    return bool((pos.stable >> (row * pos.size + col)) & 1)


def set_stable(pos: Position, flag: bool, row: int, col: int) -> Position:
    bit = 1 << (row * pos.size + col)
    return replace(pos, stable=pos.stable | bit if flag else pos.stable & ~bit)


def iter_cells(size: int) -> Iterator[Tuple[int, int]]:
    for r in range(size):
        for c in range(size):
            yield r, c
