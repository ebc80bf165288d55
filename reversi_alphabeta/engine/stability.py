from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Tuple

from .bitboard import AXES, DIRECTIONS, Player, Position, get_cell, get_stable, in_bounds, iter_cells, set_stable

# A stable disc can never change owner again. Stability only grows along a game:
# a disc flagged stable cannot be captured, so descendants inherit the flag.


def unstable_cells(pos: Position) -> Iterator[Tuple[int, int]]:
    n = pos.size
    candidates = pos.occupied & ~pos.stable
    for r, c in iter_cells(n):
        if candidates & (1 << (r * n + c)):
            yield r, c


def _stable_ally(pos: Position, row: int, col: int, player: Player) -> bool:
    return get_stable(pos, row, col) and get_cell(pos, row, col) is player


def _line_filled(pos: Position, row: int, col: int, dr: int, dc: int) -> bool:
    n = pos.size
    r, c = row + dr, col + dc
    while in_bounds(n, r, c):
        if get_cell(pos, r, c) is Player.NONE:
            return False
        r += dr
        c += dc
    return True


def is_stable(pos: Position, row: int, col: int) -> bool:
    """Whether the disc at (row, col) is safe on all four axes.

    An axis is safe when the disc touches the board edge along it, when one of its
    two neighbours on the axis is a stable disc of the same colour, or when the
    whole line through the disc is filled.
    """
    player = get_cell(pos, row, col)
    if player is Player.NONE:
        return False
    n = pos.size
    for dr, dc in AXES:
        fr, fc = row + dr, col + dc
        br, bc = row - dr, col - dc
        if not in_bounds(n, fr, fc) or not in_bounds(n, br, bc):
            continue
        if _stable_ally(pos, fr, fc, player) or _stable_ally(pos, br, bc, player):
            continue
        if _line_filled(pos, row, col, dr, dc) and _line_filled(pos, row, col, -dr, -dc):
            continue
        return False
    return True


def update_stability(pos: Position) -> Position:
    """Extend the stable set of `pos` to its fixed point.

    Existing stable bits are kept. Every newly stabilised disc re-queues its
    occupied, still unstable neighbours.
    """
    n = pos.size
    queue: Deque[Tuple[int, int]] = deque(unstable_cells(pos))
    while queue:
        r, c = queue.popleft()
        if get_stable(pos, r, c) or not is_stable(pos, r, c):
            continue
        pos = set_stable(pos, True, r, c)
        for dr, dc in DIRECTIONS:
            nr, nc = r + dr, c + dc
            if (
                in_bounds(n, nr, nc)
                and get_cell(pos, nr, nc) is not Player.NONE
                and not get_stable(pos, nr, nc)
            ):
                queue.append((nr, nc))
    return pos
