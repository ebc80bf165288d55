from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .bitboard import DIRECTIONS, Player, Position, get_cell, in_bounds


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    directions: Tuple[Tuple[int, int], ...]

    def index(self, size: int) -> int:
        return self.row * size + self.col


def captures_direction(pos: Position, player: Player, row: int, col: int, dr: int, dc: int) -> bool:
    """True if placing `player` at (row, col) brackets an opponent run along (dr, dc).

    The first stepped-to cell must hold an opponent disc; the walk then continues
    over opponent discs and must end on one of the mover's discs. Running into an
    empty cell or off the board rejects the direction.
    """
    n = pos.size
    opp = player.opponent
    r, c = row + dr, col + dc
    if not in_bounds(n, r, c) or get_cell(pos, r, c) is not opp:
        return False
    while True:
        r += dr
        c += dc
        if not in_bounds(n, r, c):
            return False
        value = get_cell(pos, r, c)
        if value is player:
            return True
        if value is not opp:
            return False


def captured_directions(pos: Position, player: Player, row: int, col: int) -> Tuple[Tuple[int, int], ...]:
    return tuple(d for d in DIRECTIONS if captures_direction(pos, player, row, col, d[0], d[1]))


def legal_moves(pos: Position, player: Player) -> List[Move]:
    """Legal moves for `player` in row-major cell order."""
    n = pos.size
    occupied = pos.occupied
    moves: List[Move] = []
    for r in range(n):
        for c in range(n):
            if occupied & (1 << (r * n + c)):
                continue
            dirs = captured_directions(pos, player, r, c)
            if dirs:
                moves.append(Move(r, c, dirs))
    return moves


def has_legal_move(pos: Position, player: Player) -> bool:
    n = pos.size
    occupied = pos.occupied
    for r in range(n):
        for c in range(n):
            if occupied & (1 << (r * n + c)):
                continue
            for dr, dc in DIRECTIONS:
                if captures_direction(pos, player, r, c, dr, dc):
                    return True
    return False


def mobility(pos: Position, player: Player) -> int:
    return len(legal_moves(pos, player))


def legal_moves_mask(pos: Position, player: Player) -> int:
    mask = 0
    for m in legal_moves(pos, player):
        mask |= 1 << m.index(pos.size)
    return mask
