from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

from .bitboard import Player, Position, set_cell
from .node import BoardNode

# Tic-Tac-Toe on the same bit-packed Position (stable bits unused).
# A finished game is worth +/-VICTORY_POINTS; otherwise every line still open
# to a player is worth LINE_POINTS to that player.

SIZE = 3
VICTORY_POINTS = 1000
LINE_POINTS = 1


@lru_cache(maxsize=None)
def winning_lines(size: int) -> Tuple[int, ...]:
    lines = []
    for r in range(size):
        lines.append(sum(1 << (r * size + c) for c in range(size)))
    for c in range(size):
        lines.append(sum(1 << (r * size + c) for r in range(size)))
    lines.append(sum(1 << (i * size + i) for i in range(size)))
    lines.append(sum(1 << (i * size + size - 1 - i) for i in range(size)))
    return tuple(lines)


def winner(pos: Position) -> Player:
    for line in winning_lines(pos.size):
        if (pos.occupied & line) != line:
            continue
        owned = pos.owner & line
        if owned == line:
            return Player.MAXIMIZING
        if owned == 0:
            return Player.MINIMIZING
    return Player.NONE


def open_lines(pos: Position, player: Player) -> int:
    """Lines holding no disc of `player`'s opponent."""
    count = 0
    for line in winning_lines(pos.size):
        taken = pos.occupied & line
        if player is Player.MAXIMIZING:
            blocked = taken & ~pos.owner
        else:
            blocked = taken & pos.owner
        if not blocked:
            count += 1
    return count


@dataclass(frozen=True)
class TicTacToeNode(BoardNode):
    position: Position
    player: Player = Player.MAXIMIZING
    move: Optional[int] = None

    @staticmethod
    def initial(size: int = SIZE) -> "TicTacToeNode":
        return TicTacToeNode(Position(size), Player.MAXIMIZING)

    @property
    def winner(self) -> Player:
        return winner(self.position)

    @property
    def children(self) -> List["TicTacToeNode"]:
        pos = self.position
        if winner(pos) is not Player.NONE:
            return []
        n = pos.size
        out: List[TicTacToeNode] = []
        for r in range(n):
            for c in range(n):
                if pos.occupied & (1 << (r * n + c)):
                    continue
                out.append(TicTacToeNode(set_cell(pos, self.player, r, c), self.opponent, r * n + c))
        return out

    @property
    def heuristic(self) -> int:
        assert self.player is not Player.NONE, "node has no side to move"
        w = winner(self.position)
        if w is not Player.NONE:
            return w.sign * VICTORY_POINTS
        if self.position.is_full():
            return 0
        return (open_lines(self.position, Player.MAXIMIZING) - open_lines(self.position, Player.MINIMIZING)) * LINE_POINTS
