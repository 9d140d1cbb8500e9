"""
utils.py - Constants, enumerations and grid helpers for fourplay

This module provides the shared constants, the Player and GameStatus
enumerations, and pure functions that operate on a numpy board grid of
any shape.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

# Default board dimensions
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameStatus(Enum):
    """Enumeration representing the state of a round."""
    IN_PROGRESS = auto()
    WON = auto()
    DRAWN = auto()

    def is_game_over(self) -> bool:
        """Check if the round has reached a terminal state."""
        return self != GameStatus.IN_PROGRESS


class Direction(Enum):
    """The four axes a line can run along."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()  # top-left to bottom-right
    DIAGONAL_DOWN_LEFT = auto()   # top-right to bottom-left


# Direction vectors (row, col) for each axis; the opposite way is the negation
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def is_valid_position(grid: np.ndarray, row: int, col: int) -> bool:
    """Check if a position lies inside the grid (no wraparound)."""
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols


def find_landing_row(grid: np.ndarray, column: int) -> Optional[int]:
    """
    Find the row a piece dropped into a column would land in.

    Args:
        grid: The game board
        column: The column to drop into

    Returns:
        The lowest empty row index, or None if the column is full
    """
    rows = grid.shape[0]
    for row in range(rows - 1, -1, -1):
        if grid[row, column] == Player.EMPTY.value:
            return row
    return None


def get_column_height(grid: np.ndarray, column: int) -> int:
    """Number of pieces stacked in a column."""
    return int(np.count_nonzero(grid[:, column]))


def line_through(grid: np.ndarray, row: int, col: int, dr: int, dc: int) -> List[Tuple[int, int]]:
    """
    Collect the contiguous run of same-player cells through (row, col).

    The run extends both ways along (dr, dc) and includes (row, col) once.
    Returns an empty list if the starting cell is empty.
    """
    player_value = grid[row, col]
    if player_value == Player.EMPTY.value:
        return []

    positions = [(row, col)]

    r, c = row + dr, col + dc
    while is_valid_position(grid, r, c) and grid[r, c] == player_value:
        positions.append((r, c))
        r += dr
        c += dc

    r, c = row - dr, col - dc
    while is_valid_position(grid, r, c) and grid[r, c] == player_value:
        positions.append((r, c))
        r -= dr
        c -= dc

    return positions


def get_winning_line_at(grid: np.ndarray, row: int, col: int) -> List[Tuple[int, int]]:
    """Return the first run of CONNECT_N or more through (row, col), or []."""
    for dr, dc in DIRECTION_VECTORS.values():
        positions = line_through(grid, row, col, dr, dc)
        if len(positions) >= CONNECT_N:
            return sorted(positions)
    return []


def is_grid_full(grid: np.ndarray) -> bool:
    return bool(np.all(grid != Player.EMPTY.value))


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Column numbers wrap at 10 so wide boards keep their alignment.
    """
    rows, cols = grid.shape
    symbols = {Player.EMPTY.value: " ", Player.ONE.value: "X", Player.TWO.value: "O"}

    border = "|" + "-" * (cols * 2 - 1) + "|"
    result = [border]
    for row in range(rows):
        result.append("|" + " ".join(symbols[int(cell)] for cell in grid[row]) + "|")
    result.append(border)
    result.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(result)
