from __future__ import annotations

import argparse
import logging
import sys
from time import perf_counter
from typing import Optional

from reversi_alphabeta.engine.node import initial_node
from reversi_alphabeta.engine.perft import perft, play_moves
from reversi_alphabeta.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def run(depth: int, position: Optional[str] = None, size: int = 8) -> int:
    b = initial_node(size)
    if position:
        moves = [position[i : i + 2] for i in range(0, len(position), 2)]
        b = play_moves(b, moves)
    t0 = perf_counter()
    n = perft(b, depth)
    dt = perf_counter() - t0
    logger.info("perft(d=%d)=%d in %.3fs", depth, n, dt)
    return n


def main(argv=None) -> None:
    p = argparse.ArgumentParser(prog="reversi-perft")
    p.add_argument("--depth", type=int, required=True)
    p.add_argument("--position", type=str, default=None, help="move sequence like d3c5--f6")
    p.add_argument("--size", type=int, default=8)
    args = p.parse_args(argv)

    setup_logging(overwrite=False, level=logging.INFO)
    try:
        run(args.depth, args.position, args.size)
    except Exception as e:
        logger.exception("Error running perft: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
