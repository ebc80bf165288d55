from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .bitboard import MAX_CELLS, Player, Position
from .movegen import mobility

# Mobility + stability evaluation. Scores are always from Maximizing's point of
# view; a decided game is worth its disc differential times `victory`.


@dataclass(frozen=True)
class EvalWeights:
    """Evaluation weights, validated so a decided game outranks any heuristic.

    The bound uses the largest supported board (64 cells) whatever size is
    played. Weights that would be enough for a smaller board alone are still
    rejected.
    """

    mobility: int = 5
    stability: int = 25
    victory: int = 1_000_000

    def __post_init__(self) -> None:
        # any terminal score must outrank every heuristic score on any legal board
        if self.victory <= MAX_CELLS * (self.mobility + self.stability):
            raise ValueError(
                f"victory={self.victory} must exceed {MAX_CELLS} * (mobility + stability)"
            )

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "EvalWeights":
        section = cfg.get("eval", {}) or {}
        default = cls()
        return cls(
            mobility=int(section.get("mobility", default.mobility)),
            stability=int(section.get("stability", default.stability)),
            victory=int(section.get("victory", default.victory)),
        )


DEFAULT_WEIGHTS = EvalWeights()


def terminal_score(pos: Position, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    return (pos.maximizing_count() - pos.minimizing_count()) * weights.victory


def stability_term(pos: Position, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    stable_max, stable_min = pos.stable_counts()
    return (stable_max - stable_min) * weights.stability


def evaluate(pos: Position, player: Player, pass_allowed: bool = True, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    assert player is not Player.NONE, "cannot evaluate a position without a side to move"
    own = mobility(pos, player)
    opp = mobility(pos, player.opponent)
    if own == 0 and (opp == 0 or not pass_allowed):
        return terminal_score(pos, weights)
    return (own - opp) * player.sign * weights.mobility + stability_term(pos, weights)
