"""
errors.py - Exceptions raised by the Connect Four core

Every failure is raised before any state is changed, so a caller that
catches one of these can keep using the same board or engine.
"""


class ConnectFourError(ValueError):
    """Base class for all rejected Connect Four operations."""


class InvalidDimensions(ConnectFourError):
    """The requested grid is too small to ever hold four in a row."""

    def __init__(self, height: int, width: int, minimum: int):
        self.height = height
        self.width = width
        super().__init__(
            f"Board must be at least {minimum}x{minimum}, got {height}x{width}"
        )


class InvalidPlayers(ConnectFourError):
    """The two seated players are missing or not distinct."""


class InvalidColumn(ConnectFourError):
    """A drop targeted a column outside the board."""

    def __init__(self, column: int, width: int):
        self.column = column
        super().__init__(f"Column {column} is out of range 0-{width - 1}")


class ColumnFull(ConnectFourError):
    """A drop targeted a column with no empty cell."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is full")


class GameAlreadyOver(ConnectFourError):
    """A drop was attempted after the game was won or drawn."""


class OutOfBounds(ConnectFourError):
    """A board coordinate lies outside the grid."""

    def __init__(self, row: int, column: int):
        self.row = row
        self.column = column
        super().__init__(f"Position ({row}, {column}) is outside the board")


class CellAlreadyOccupied(ConnectFourError):
    """A piece was placed on a cell that already holds one."""

    def __init__(self, row: int, column: int):
        self.row = row
        self.column = column
        super().__init__(f"Cell ({row}, {column}) is already occupied")
