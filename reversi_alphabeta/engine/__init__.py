"""Bitboard game engine: positions, move generation, stability and alpha-beta search"""

from .bitboard import Player, Position
from .eval import EvalWeights
from .node import GameNode, ReversiNode, initial_node
from .search import AlphaBeta, EngineConfig, SearchResult
from .tictactoe import TicTacToeNode

__all__ = [
    'Player',
    'Position',
    'EvalWeights',
    'GameNode',
    'ReversiNode',
    'initial_node',
    'AlphaBeta',
    'EngineConfig',
    'SearchResult',
    'TicTacToeNode',
]
