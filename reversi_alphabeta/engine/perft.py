from __future__ import annotations

from typing import Iterable, Optional

from .node import GameNode, ReversiNode, initial_node
from .notation import PASS, notation_to_coord


def perft(node: GameNode, depth: int) -> int:
    """Count leaf nodes of the move tree; a pass counts as a move."""
    if depth == 0:
        return 1
    return sum(perft(child, depth - 1) for child in node.children)


def play_moves(node: Optional[ReversiNode], moves: Iterable[str], size: int = 8) -> ReversiNode:
    """Replay moves like ['d3', 'c5', '--'] from `node` (default: start position)."""
    b = initial_node(size) if node is None else node
    for mv in moves:
        coord = PASS if mv == "--" else notation_to_coord(mv, b.position.size)
        for child in b.children:
            if (coord == PASS and child.is_pass) or (coord != PASS and child.move == coord):
                b = child
                break
        else:
            raise ValueError(f"illegal move: {mv}")
    return b
