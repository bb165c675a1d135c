"""
board.py - Board representation for Connect Four

This module implements the Board class, a fixed-size grid of cells that are
either empty or hold a player identifier. The board answers gravity and
occupancy queries; it knows nothing about turns or winning.
"""

from typing import Any, Dict, Hashable, List, Optional, Tuple

import numpy as np

from connect_four.debug import debug
from connect_four.errors import CellAlreadyOccupied, InvalidDimensions, OutOfBounds
from connect_four.utils import (DEFAULT_COLS, DEFAULT_ROWS, EMPTY, MIN_SIZE,
                                is_valid_position, render_board_ascii)


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the top of the board and row height-1 the bottom; pieces
    settle from the bottom up. Once a cell is occupied it never changes
    for the lifetime of the board.
    """

    def __init__(self, height: int = DEFAULT_ROWS, width: int = DEFAULT_COLS):
        """
        Create an empty board.

        Args:
            height: Number of rows (at least MIN_SIZE)
            width: Number of columns (at least MIN_SIZE)

        Raises:
            InvalidDimensions: If either dimension is below MIN_SIZE
        """
        if height < MIN_SIZE or width < MIN_SIZE:
            raise InvalidDimensions(height, width, MIN_SIZE)

        debug.debug(f"Initializing new {height}x{width} Board", "board")
        self.grid = np.full((height, width), EMPTY, dtype=object)

    @property
    def height(self) -> int:
        return self.grid.shape[0]

    @property
    def width(self) -> int:
        return self.grid.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.grid.shape

    def copy(self) -> 'Board':
        """Create an independent copy of the board."""
        new_board = Board(self.height, self.width)
        new_board.grid = self.grid.copy()
        return new_board

    def in_bounds(self, row: int, column: int) -> bool:
        return is_valid_position(self.grid, row, column)

    def lowest_empty_row(self, column: int) -> Optional[int]:
        """
        Find where a piece dropped into a column would land.

        Args:
            column: The column to inspect (0-indexed)

        Returns:
            The largest empty row index in the column, or None if the
            column is full or outside the board
        """
        if not (0 <= column < self.width):
            return None

        for row in range(self.height - 1, -1, -1):
            if self.grid[row, column] is EMPTY:
                return row
        return None

    def is_column_full(self, column: int) -> bool:
        """Check whether a column can take no more pieces (true for columns off the board)."""
        return self.lowest_empty_row(column) is None

    def valid_columns(self) -> List[int]:
        """List the columns that can still take a piece."""
        return [col for col in range(self.width) if not self.is_column_full(col)]

    def place(self, row: int, column: int, player: Hashable) -> None:
        """
        Mark a cell as occupied by player.

        The row must come from lowest_empty_row for the same column; gravity
        is not re-checked here.

        Raises:
            OutOfBounds: If the coordinates are outside the grid
            CellAlreadyOccupied: If the cell already holds a piece
        """
        if not self.in_bounds(row, column):
            raise OutOfBounds(row, column)
        if self.grid[row, column] is not EMPTY:
            raise CellAlreadyOccupied(row, column)

        debug.trace(f"Placing {player!r} at ({row}, {column})", "board")
        self.grid[row, column] = player

    def is_full(self) -> bool:
        """Check whether every cell is occupied."""
        return all(cell is not EMPTY for cell in self.grid.flat)

    def cell_at(self, row: int, column: int) -> Any:
        """
        Get the occupant of a cell.

        Returns:
            The player identifier, or EMPTY (None) for an empty cell

        Raises:
            OutOfBounds: If the coordinates are outside the grid
        """
        if not self.in_bounds(row, column):
            raise OutOfBounds(row, column)
        return self.grid[row, column]

    def get_state(self) -> np.ndarray:
        """Get a copy of the raw grid."""
        return self.grid.copy()

    def render(self, symbols: Optional[Dict[Any, str]] = None) -> str:
        return render_board_ascii(self.grid, symbols)

    def __str__(self) -> str:
        return self.render()
