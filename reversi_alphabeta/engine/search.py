from __future__ import annotations

import logging
import math
import os
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .bitboard import Player
from .node import GameNode

logger = logging.getLogger(__name__)

BACKENDS = ("thread", "process")


@dataclass
class EngineConfig:
    size: int = 8
    depth: int = 6
    workers: Optional[int] = None  # None: one worker per root move
    backend: str = "thread"

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "EngineConfig":
        section = cfg.get("engine", {}) or {}
        default = cls()
        return cls(
            size=int(section.get("size", default.size)),
            depth=int(section.get("depth", default.depth)),
            # TOML has no null, 0 means "auto"
            workers=int(section.get("workers", 0)) or None,
            backend=str(section.get("backend", default.backend)),
        )


@dataclass
class SearchStats:
    nodes: int = 0


@dataclass
class SearchResult:
    best: Optional[GameNode]
    score: int
    depth: int
    nodes: int
    time_ms: int


def alphabeta(node: GameNode, depth: int, alpha: float, beta: float, maximizing: bool, stats: Optional[SearchStats] = None) -> int:
    if stats is not None:
        stats.nodes += 1
    children = node.children if depth > 0 else ()
    if depth == 0 or not children:
        return node.heuristic

    if maximizing:
        value = -math.inf
        for child in children:
            value = max(value, alphabeta(child, depth - 1, alpha, beta, False, stats))
            alpha = max(alpha, value)
            if beta <= alpha:
                # beta cutoff
                break
        return value

    value = math.inf
    for child in children:
        value = min(value, alphabeta(child, depth - 1, alpha, beta, True, stats))
        beta = min(beta, value)
        if beta <= alpha:
            # alpha cutoff
            break
    return value


def minimax(node: GameNode, depth: int, maximizing: bool, stats: Optional[SearchStats] = None) -> int:
    """Exhaustive minimax; reference for checking that pruning keeps the value."""
    if stats is not None:
        stats.nodes += 1
    children = node.children if depth > 0 else ()
    if depth == 0 or not children:
        return node.heuristic
    values = [minimax(child, depth - 1, not maximizing, stats) for child in children]
    return max(values) if maximizing else min(values)


def _search_child(child: GameNode, depth: int, maximizing: bool) -> Tuple[int, int]:
    stats = SearchStats()
    value = alphabeta(child, depth, -math.inf, math.inf, maximizing, stats)
    return value, stats.nodes


class AlphaBeta:
    """Depth-bounded minimax with alpha-beta pruning, parallel over root moves."""

    def __init__(self, depth: int, workers: Optional[int] = None, backend: str = "thread") -> None:
        if depth < 1:
            raise ValueError(f"search depth must be at least 1, got {depth}")
        if backend not in BACKENDS:
            raise ValueError(f"unknown search backend {backend!r}, expected one of {BACKENDS}")
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        self.depth = depth
        self.workers = workers
        self.backend = backend

    @classmethod
    def from_config(cls, config: EngineConfig) -> "AlphaBeta":
        return cls(config.depth, workers=config.workers, backend=config.backend)

    def _executor(self, tasks: int) -> Executor:
        workers = self.workers or tasks
        if self.backend == "process":
            return ProcessPoolExecutor(max_workers=min(workers, os.cpu_count() or 1))
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="alphabeta")

    def value(self, node: GameNode) -> int:
        return alphabeta(node, self.depth, -math.inf, math.inf, node.player is Player.MAXIMIZING)

    def best(self, root: GameNode) -> GameNode:
        return self.search(root).best

    def search(self, root: GameNode) -> SearchResult:
        if root is None:
            raise ValueError("search needs a root node")
        assert root.player is not Player.NONE, "root node has no side to move"
        children: List[GameNode] = list(root.children)
        if not children:
            raise ValueError("no moves: the root position is terminal")

        start = time.perf_counter()
        maximizing = root.player is Player.MAXIMIZING
        with self._executor(len(children)) as pool:
            futures = [pool.submit(_search_child, child, self.depth - 1, not maximizing) for child in children]
            # wait for every task; a failing task raises here and aborts the search
            results = [f.result() for f in futures]

        best_node: Optional[GameNode] = None
        best_value: Optional[int] = None
        nodes = 1
        for child, (value, visited) in zip(children, results):
            nodes += visited
            # strict comparison: the first child wins ties
            if best_value is None or (value > best_value if maximizing else value < best_value):
                best_node, best_value = child, value

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "search depth=%d moves=%d best=%s score=%s nodes=%d time_ms=%d",
            self.depth, len(children), getattr(best_node, "move", None), best_value, nodes, elapsed_ms,
        )
        return SearchResult(best_node, int(best_value), self.depth, nodes, elapsed_ms)
