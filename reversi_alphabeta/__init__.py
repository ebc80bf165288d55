"""Alpha-beta search for Reversi and Tic-Tac-Toe on bit-packed boards"""

__version__ = "0.1.0"
