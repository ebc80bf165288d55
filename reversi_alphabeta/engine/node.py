from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from . import bitboard
from .bitboard import Player, Position
from .board import apply_move, initial_position
from .eval import DEFAULT_WEIGHTS, EvalWeights, evaluate
from .movegen import has_legal_move, legal_moves
from .stability import update_stability


class GameNode(ABC):
    """Immutable state of a two-player zero-sum game.

    Subclasses provide `player` (the side to move, never Player.NONE),
    `children` in move-generation order (empty iff terminal) and `heuristic`,
    the value of the position from Maximizing's point of view.
    """

    player: Player

    @property
    @abstractmethod
    def children(self) -> Sequence["GameNode"]:
        ...

    @property
    @abstractmethod
    def heuristic(self) -> int:
        ...

    @property
    def opponent(self) -> Player:
        return self.player.opponent

    @property
    def maximizing(self) -> bool:
        return self.player is Player.MAXIMIZING

    @property
    def is_terminal(self) -> bool:
        return not self.children


class BoardNode(GameNode):
    position: Position

    def get_cell(self, row: int, col: int) -> Player:
        n = self.position.size
        if not 0 <= row < n:
            raise ValueError(f"row {row} is outside the {n}x{n} board")
        if not 0 <= col < n:
            raise ValueError(f"column {col} is outside the {n}x{n} board")
        return bitboard.get_cell(self.position, row, col)

    def disc_counts(self) -> Tuple[int, int]:
        return self.position.maximizing_count(), self.position.minimizing_count()


@dataclass(frozen=True)
class ReversiNode(BoardNode):
    position: Position
    player: Player = Player.MAXIMIZING
    pass_allowed: bool = True
    # cell index of the move that produced this node; None for the root or a pass
    move: Optional[int] = None
    weights: EvalWeights = field(default=DEFAULT_WEIGHTS, compare=False, repr=False)

    @property
    def is_pass(self) -> bool:
        return not self.pass_allowed

    @property
    def children(self) -> List["ReversiNode"]:
        moves = legal_moves(self.position, self.player)
        if moves:
            opponent = self.opponent
            return [
                ReversiNode(
                    update_stability(apply_move(self.position, m, self.player)),
                    opponent,
                    True,
                    m.index(self.position.size),
                    self.weights,
                )
                for m in moves
            ]
        if self.pass_allowed and has_legal_move(self.position, self.opponent):
            return [replace(self, player=self.opponent, pass_allowed=False, move=None)]
        return []

    @property
    def heuristic(self) -> int:
        assert self.player is not Player.NONE, "node has no side to move"
        return evaluate(self.position, self.player, self.pass_allowed, self.weights)


def initial_node(size: int = 8, weights: EvalWeights = DEFAULT_WEIGHTS) -> ReversiNode:
    return ReversiNode(initial_position(size), Player.MAXIMIZING, weights=weights)
