"""Computer-vs-computer games driven by the alpha-beta engine"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from dataclasses import dataclass, field
from typing import List, Optional

import orjson

from ..engine.bitboard import Player
from ..engine.eval import EvalWeights
from ..engine.node import BoardNode, initial_node
from ..engine.notation import PASS, moves_to_string
from ..engine.search import AlphaBeta, EngineConfig
from ..engine.tictactoe import TicTacToeNode
from ..logging_setup import setup_logging
from .diag import load_config, log_event

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    game: str
    size: int
    depth: int
    moves: List[int] = field(default_factory=list)
    scores: List[int] = field(default_factory=list)
    final_score: int = 0
    winner: str = "tie"

    @property
    def notation(self) -> str:
        return moves_to_string(self.moves, self.size)


def winner_name(score: int) -> str:
    if score > 0:
        return Player.MAXIMIZING.name.capitalize()
    if score < 0:
        return Player.MINIMIZING.name.capitalize()
    return "tie"


def play_game(root: BoardNode, engine: AlphaBeta, game: str = "reversi", max_plies: int = 200) -> GameRecord:
    record = GameRecord(game=game, size=root.position.size, depth=engine.depth)
    node = root
    while not node.is_terminal and len(record.moves) < max_plies:
        result = engine.search(node)
        child = result.best
        move = PASS if getattr(child, "is_pass", False) else child.move
        record.moves.append(move)
        record.scores.append(result.score)
        log_event(
            "selfplay", "move",
            ply=len(record.moves), player=node.player.name, move=move,
            score=result.score, nodes=result.nodes, time_ms=result.time_ms,
        )
        node = child
    record.final_score = node.heuristic
    record.winner = winner_name(record.final_score)
    log_event("selfplay", "game_over", game=game, winner=record.winner, score=record.final_score, moves=record.notation)
    return record


def build_root(game: str, size: int, weights: EvalWeights) -> BoardNode:
    if game == "tictactoe":
        return TicTacToeNode.initial()
    return initial_node(size, weights)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for reversi-selfplay"""
    parser = argparse.ArgumentParser(prog="reversi-selfplay", description="Let the engine play itself")
    parser.add_argument('--game', choices=['reversi', 'tictactoe'], default='reversi')
    parser.add_argument('--depth', type=int, help='Search depth (default: from config)')
    parser.add_argument('--size', type=int, help='Reversi board size (default: from config)')
    parser.add_argument('--workers', type=int, help='Root workers (default: one per move)')
    parser.add_argument('--backend', choices=['thread', 'process'], help='Root task executor')
    parser.add_argument('--config', help='Configuration file path')
    parser.add_argument('--output', help='Output file for the game record (JSON)')
    args = parser.parse_args(argv)

    try:
        cfg = load_config(pathlib.Path(args.config) if args.config else None)
        log_cfg = cfg.get("logging", {}) or {}
        setup_logging(overwrite=bool(log_cfg.get("overwrite", True)), level=log_cfg.get("level", "INFO"))

        engine_cfg = EngineConfig.from_dict(cfg)
        if args.depth is not None:
            engine_cfg.depth = args.depth
        if args.size is not None:
            engine_cfg.size = args.size
        if args.workers is not None:
            engine_cfg.workers = args.workers
        if args.backend is not None:
            engine_cfg.backend = args.backend
        weights = EvalWeights.from_dict(cfg)

        logger.info("Self-play %s: size=%d depth=%d backend=%s", args.game, engine_cfg.size, engine_cfg.depth, engine_cfg.backend)
        record = play_game(build_root(args.game, engine_cfg.size, weights), AlphaBeta.from_config(engine_cfg), args.game)
        logger.info("Winner: %s (score %d) moves=%s", record.winner, record.final_score, record.notation)

        if args.output:
            data = {
                'game': record.game,
                'size': record.size,
                'depth': record.depth,
                'moves': record.notation,
                'scores': record.scores,
                'final_score': record.final_score,
                'winner': record.winner,
            }
            pathlib.Path(args.output).write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
            logger.info("Game record saved to %s", args.output)
    except KeyboardInterrupt:
        logger.info("Self-play interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.exception("Error running self-play: %s", e)
        sys.exit(1)


if __name__ == '__main__':
    main()
