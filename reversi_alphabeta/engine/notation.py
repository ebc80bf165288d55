"""
Coordinate notation for board cells.

Cells are numbered row-major (0 .. size*size-1). A cell is written as its column
letter followed by its 1-based row number, e.g. 'd3' is row 2, column 3.
"""

from __future__ import annotations

from typing import List

# Special string for pass moves (no available moves)
PASS_NOTATION = '--'
PASS = -1


def coord_to_notation(coord: int, size: int = 8) -> str:
    """Convert a cell index to coordinate notation (e.g., 'e4')."""
    if coord < 0 or coord >= size * size:
        raise ValueError(f"Invalid coordinate: {coord}")
    col = coord % size
    row = coord // size + 1
    return f"{chr(ord('a') + col)}{row}"


def notation_to_coord(notation: str, size: int = 8) -> int:
    """Convert coordinate notation (e.g., 'e4') to a cell index."""
    if notation == PASS_NOTATION:
        raise ValueError(f"Cannot convert pass notation '{PASS_NOTATION}' to coordinate")
    if len(notation) != 2:
        raise ValueError(f"Invalid notation format: {notation}")

    col_char = notation[0].lower()
    row_char = notation[1]
    if not col_char.isalpha() or not row_char.isdigit():
        raise ValueError(f"Invalid notation format: {notation}")

    col = ord(col_char) - ord('a')
    row = int(row_char) - 1
    if not 0 <= col < size or not 0 <= row < size:
        raise ValueError(f"Invalid notation: {notation}")
    return row * size + col


def moves_to_string(moves: List[int], size: int = 8) -> str:
    """Join moves into one string; PASS (-1) entries become '--'."""
    return ''.join(PASS_NOTATION if m == PASS else coord_to_notation(m, size) for m in moves)


def string_to_moves(moves_str: str, size: int = 8) -> List[int]:
    """Split a move string into cell indices, PASS (-1) for '--'.

    Raises ValueError on malformed input.
    """
    if len(moves_str) % 2:
        raise ValueError(f"Incomplete move string: {moves_str}")
    moves = []
    for i in range(0, len(moves_str), 2):
        chunk = moves_str[i:i + 2]
        moves.append(PASS if chunk == PASS_NOTATION else notation_to_coord(chunk, size))
    return moves
