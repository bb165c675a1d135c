"""
utils.py - Constants, enumerations and grid helpers for Connect Four

This module provides the game constants, the status enumerations and the
pure functions over a board grid (bounds checks, the four-in-a-row scan and
ASCII rendering) shared by the board, the engine and the interfaces.
"""

from enum import Enum, auto
from typing import Any, Dict, Hashable, Optional, Tuple

import numpy as np

# Game constants
DEFAULT_ROWS = 6
DEFAULT_COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
MIN_SIZE = CONNECT_N  # Smallest height/width that can hold a line of CONNECT_N

DEFAULT_PLAYERS = ("red", "blue")

# Marker stored in empty cells
EMPTY = None

# Symbols used when no explicit mapping is given to render_board_ascii
FIRST_SYMBOL = "X"
SECOND_SYMBOL = "O"
EMPTY_SYMBOL = " "


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    WON = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


class Direction(Enum):
    """Enumeration representing the line directions checked for a win."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()  # From top-left to bottom-right
    DIAGONAL_DOWN_LEFT = auto()   # From top-right to bottom-left


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def is_valid_position(grid: np.ndarray, row: int, col: int) -> bool:
    """
    Check if a position is within the grid boundaries.

    Args:
        grid: The board grid
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols


def line_matches(grid: np.ndarray, row: int, col: int,
                 direction: Direction, player: Hashable) -> bool:
    """
    Check the CONNECT_N cells starting at (row, col) along a direction.

    Stops at the first cell that is off the grid or not owned by player.
    """
    dr, dc = DIRECTION_VECTORS[direction]
    for step in range(CONNECT_N):
        r, c = row + dr * step, col + dc * step
        if not is_valid_position(grid, r, c) or grid[r, c] != player:
            return False
    return True


def has_four_in_a_row(grid: np.ndarray, player: Hashable) -> bool:
    """
    Check whether player owns CONNECT_N cells in a straight line.

    Every cell is tried as the start of a line in each of the four
    directions. A line can start anywhere along its length, so the four
    forward directions cover every possible line without scanning the
    opposite rays.

    Args:
        grid: The board grid
        player: The player identifier to look for

    Returns:
        True if the player has a line of CONNECT_N, False otherwise
    """
    if player is EMPTY:
        return False

    rows, cols = grid.shape
    for row in range(rows):
        for col in range(cols):
            for direction in DIRECTION_VECTORS:
                if line_matches(grid, row, col, direction, player):
                    return True
    return False


def default_symbols(players: Tuple[Hashable, Hashable]) -> Dict[Any, str]:
    """Map the two seated players to the X/O symbols."""
    return {players[0]: FIRST_SYMBOL, players[1]: SECOND_SYMBOL}


def render_board_ascii(grid: np.ndarray,
                       symbols: Optional[Dict[Any, str]] = None) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The board grid
        symbols: Mapping from player identifier to a one-character symbol.
            Players missing from the mapping are drawn with the first
            character of their string form.

    Returns:
        ASCII representation of the board
    """
    symbols = symbols or {}
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"

    result = [border]
    for row in range(rows):
        cells = []
        for col in range(cols):
            cell = grid[row, col]
            if cell is EMPTY:
                cells.append(EMPTY_SYMBOL)
            else:
                cells.append(symbols.get(cell, str(cell)[:1] or "?"))
        result.append("|" + " ".join(cells) + "|")
    result.append(border)

    # Column numbers wrap past 9 so they stay one character wide
    result.append("|" + " ".join(str(col % 10) for col in range(cols)) + "|")

    return "\n".join(result)
