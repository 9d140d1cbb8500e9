"""
board.py - Board representation for fourplay

This module implements the Board class, a numpy grid of configurable size
that knows how to drop and lift pieces and how to spot a line of four
through a given cell. Turn order, history and scoring live in the engine.
"""

import numpy as np
from typing import List, Optional, Tuple

from fourplay.debug import debug
from fourplay.errors import ColumnFullError, InvalidInputError
from fourplay.utils import (ROWS, COLS, Player, find_landing_row, get_column_height,
                            get_winning_line_at, is_grid_full, render_board_ascii)


class Board:
    """
    A rows x cols grid of cells.

    Row 0 is the top of the board, so pieces fall towards row rows-1.
    Each cell holds a Player value; Player.EMPTY marks a free cell.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        debug.debug(f"Initializing new {rows}x{cols} Board", "board")
        self.rows = rows
        self.cols = cols
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.zeros((self.rows, self.cols), dtype=int)

    def copy(self) -> 'Board':
        new_board = Board(self.rows, self.cols)
        new_board.grid = self.grid.copy()
        return new_board

    def _check_column(self, column: int):
        if not (0 <= column < self.cols):
            raise InvalidInputError(f"column {column} is outside 0..{self.cols - 1}")

    def _check_position(self, row: int, column: int):
        if not (0 <= row < self.rows and 0 <= column < self.cols):
            raise InvalidInputError(f"position ({row}, {column}) is outside the {self.rows}x{self.cols} board")

    def landing_row(self, column: int) -> Optional[int]:
        """Row a piece dropped into the column would occupy, or None if full."""
        self._check_column(column)
        return find_landing_row(self.grid, column)

    def is_column_full(self, column: int) -> bool:
        return self.landing_row(column) is None

    def column_height(self, column: int) -> int:
        self._check_column(column)
        return get_column_height(self.grid, column)

    def valid_columns(self) -> List[int]:
        return [col for col in range(self.cols) if self.grid[0, col] == Player.EMPTY.value]

    def drop(self, column: int, player: Player) -> int:
        """
        Drop a piece for the player into a column.

        Args:
            column: The column to place a piece (0-indexed)
            player: Player.ONE or Player.TWO

        Returns:
            The row the piece landed in

        Raises:
            InvalidInputError: if the column is outside the board
            ColumnFullError: if the column has no empty cell
        """
        row = self.landing_row(column)
        if row is None:
            raise ColumnFullError(f"column {column} is full")

        debug.trace(f"Placing {player.name} at ({row}, {column})", "board")
        self.grid[row, column] = player.value
        return row

    def lift(self, row: int, column: int) -> Player:
        """Empty a cell and return the player whose piece was there."""
        player = self.cell(row, column)
        debug.trace(f"Lifting {player.name} from ({row}, {column})", "board")
        self.grid[row, column] = Player.EMPTY.value
        return player

    def cell(self, row: int, column: int) -> Player:
        self._check_position(row, column)
        return Player(int(self.grid[row, column]))

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_full(self) -> bool:
        return is_grid_full(self.grid)

    def check_win_at(self, row: int, column: int) -> bool:
        """True if the piece at (row, column) completes a line of four or more."""
        return bool(self.winning_line(row, column))

    def winning_line(self, row: int, column: int) -> List[Tuple[int, int]]:
        """Positions of the winning run through (row, column), or []."""
        self._check_position(row, column)
        return get_winning_line_at(self.grid, row, column)

    def get_state(self) -> np.ndarray:
        """Copy of the grid as a numpy array."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
