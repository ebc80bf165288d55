from __future__ import annotations

from dataclasses import replace

from .bitboard import Player, Position, get_cell, in_bounds, set_cell
from .movegen import Move, captured_directions


def initial_position(size: int = 8) -> Position:
    """Standard Reversi start: two discs per player crossed in the centre."""
    if size < 4 or size % 2:
        raise ValueError(f"reversi needs an even board size of at least 4, got {size}")
    pos = Position(size)
    middle = size // 2 - 1
    pos = set_cell(pos, Player.MAXIMIZING, middle, middle + 1)
    pos = set_cell(pos, Player.MAXIMIZING, middle + 1, middle)
    pos = set_cell(pos, Player.MINIMIZING, middle, middle)
    pos = set_cell(pos, Player.MINIMIZING, middle + 1, middle + 1)
    return pos


def flip_mask(pos: Position, move: Move, player: Player) -> int:
    """Bitboard of opponent discs flipped by `move`."""
    n = pos.size
    opp = player.opponent
    flips = 0
    for dr, dc in move.directions:
        r, c = move.row + dr, move.col + dc
        while in_bounds(n, r, c) and get_cell(pos, r, c) is opp:
            flips |= 1 << (r * n + c)
            r += dr
            c += dc
    return flips


def apply_move(pos: Position, move: Move, player: Player) -> Position:
    """Return the position after `player` plays `move`; `pos` is left untouched.

    Stability bits are carried over as-is, the caller refreshes them.
    """
    bit = 1 << move.index(pos.size)
    flips = flip_mask(pos, move, player)
    owner = pos.owner
    if player is Player.MAXIMIZING:
        owner |= bit
    else:
        owner &= ~bit
    # every flipped disc belonged to the opponent, so its owner bit simply toggles
    owner ^= flips
    return replace(pos, occupied=pos.occupied | bit, owner=owner)


def play(pos: Position, player: Player, row: int, col: int) -> Position:
    if not in_bounds(pos.size, row, col) or get_cell(pos, row, col) is not Player.NONE:
        raise ValueError("illegal move")
    dirs = captured_directions(pos, player, row, col)
    if not dirs:
        raise ValueError("illegal move")
    return apply_move(pos, Move(row, col, dirs), player)
