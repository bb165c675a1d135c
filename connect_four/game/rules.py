"""
rules.py - Turn management, win detection and game lifecycle for Connect Four

This module provides the GameEngine, which owns one Board and the two seated
players, enforces turn order, resolves gravity drops and reports the outcome
of every move. Terminal statuses are sticky until reset.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Tuple

from connect_four.debug import debug
from connect_four.errors import ColumnFull, GameAlreadyOver, InvalidColumn, InvalidPlayers
from connect_four.game.board import Board
from connect_four.utils import (DEFAULT_COLS, DEFAULT_PLAYERS, DEFAULT_ROWS, EMPTY,
                                GameResult, default_symbols, has_four_in_a_row)


@dataclass(frozen=True)
class GameStatus:
    """Status of a game: in progress, won by a player, or drawn."""
    result: GameResult
    winner: Optional[Hashable] = None

    @classmethod
    def in_progress(cls) -> 'GameStatus':
        return cls(GameResult.IN_PROGRESS)

    @classmethod
    def won(cls, player: Hashable) -> 'GameStatus':
        return cls(GameResult.WON, player)

    @classmethod
    def draw(cls) -> 'GameStatus':
        return cls(GameResult.DRAW)

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def __str__(self) -> str:
        if self.result == GameResult.WON:
            return f"Won({self.winner})"
        if self.result == GameResult.DRAW:
            return "Draw"
        return "InProgress"


@dataclass(frozen=True)
class MoveOutcome:
    """Where a dropped piece landed, who dropped it, and the status after the move."""
    row: int
    column: int
    player: Hashable
    status: GameStatus


def _check_players(player1: Hashable, player2: Hashable) -> None:
    if player1 is EMPTY or player2 is EMPTY:
        raise InvalidPlayers("Player identifiers must not be None")
    if player1 == player2:
        raise InvalidPlayers(f"Players must be distinct, got {player1!r} twice")


class GameEngine:
    """
    Two-player Connect Four game.

    The engine is the only writer of its board. Callers mutate it through
    drop() and reset() and observe it through the read-only properties and
    cell_at(); every drop returns a MoveOutcome so a presentation layer can
    draw the new piece without rescanning the board.
    """

    def __init__(self, height: int = DEFAULT_ROWS, width: int = DEFAULT_COLS,
                 player1: Hashable = DEFAULT_PLAYERS[0],
                 player2: Hashable = DEFAULT_PLAYERS[1]):
        """
        Initialize a new game.

        Args:
            height: Number of rows
            width: Number of columns
            player1: Identifier of the first-seated player, who moves first
            player2: Identifier of the second-seated player

        Raises:
            InvalidDimensions: If the board would be smaller than 4x4
            InvalidPlayers: If the players are None or equal
        """
        _check_players(player1, player2)
        debug.debug(f"Initializing GameEngine {height}x{width} "
                    f"for {player1!r} vs {player2!r}", "engine")
        self._board = Board(height, width)
        self._players: Tuple[Hashable, Hashable] = (player1, player2)
        self._current_player = player1
        self._status = GameStatus.in_progress()
        self._move_count = 0
        self._last_move: Optional[Tuple[int, int]] = None

    # --- Queries ---

    @property
    def board(self) -> Board:
        return self._board

    @property
    def height(self) -> int:
        return self._board.height

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def players(self) -> Tuple[Hashable, Hashable]:
        return self._players

    @property
    def current_player(self) -> Hashable:
        return self._current_player

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def winner(self) -> Optional[Hashable]:
        return self._status.winner

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def last_move(self) -> Optional[Tuple[int, int]]:
        return self._last_move

    def is_game_over(self) -> bool:
        return self._status.is_game_over()

    def cell_at(self, row: int, column: int) -> Any:
        return self._board.cell_at(row, column)

    def valid_columns(self) -> List[int]:
        """Columns a drop would currently be accepted in (none once the game is over)."""
        if self.is_game_over():
            return []
        return self._board.valid_columns()

    def _other_player(self, player: Hashable) -> Hashable:
        return self._players[1] if player == self._players[0] else self._players[0]

    # --- Commands ---

    def drop(self, column: int) -> MoveOutcome:
        """
        Drop the current player's piece into a column.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            MoveOutcome with the landing cell and the resulting status

        Raises:
            GameAlreadyOver: If the game has been won or drawn
            InvalidColumn: If the column is outside the board
            ColumnFull: If the column has no empty cell
        """
        if self._status.is_game_over():
            raise GameAlreadyOver(f"Game is already over ({self._status})")
        if not (0 <= column < self.width):
            raise InvalidColumn(column, self.width)

        row = self._board.lowest_empty_row(column)
        if row is None:
            raise ColumnFull(column)

        player = self._current_player
        debug.debug(f"{player!r} drops into column {column}", "engine")
        self._board.place(row, column, player)
        self._move_count += 1
        self._last_move = (row, column)

        # Only the mover can have completed a line; win beats a full board
        debug.start_timer("win_check")
        if has_four_in_a_row(self._board.grid, player):
            self._status = GameStatus.won(player)
            debug.debug(f"Player {player!r} wins after move at {self._last_move}", "engine")
        elif self._board.is_full():
            self._status = GameStatus.draw()
            debug.debug("Game ends in a draw", "engine")
        debug.end_timer("win_check", "engine")

        if not self._status.is_game_over():
            self._current_player = self._other_player(player)
            debug.trace(f"Switching to player {self._current_player!r}", "engine")

        return MoveOutcome(row, column, player, self._status)

    def reset(self, player1: Optional[Hashable] = None,
              player2: Optional[Hashable] = None) -> None:
        """
        Start a new game on an empty board of the same size.

        Args:
            player1: New first-seated player (keeps the current one if None)
            player2: New second-seated player (keeps the current one if None)

        Raises:
            InvalidPlayers: If the resulting players are equal
        """
        player1 = self._players[0] if player1 is None else player1
        player2 = self._players[1] if player2 is None else player2
        _check_players(player1, player2)

        debug.debug(f"Resetting game for {player1!r} vs {player2!r}", "engine")
        self._board = Board(self.height, self.width)
        self._players = (player1, player2)
        self._current_player = player1
        self._status = GameStatus.in_progress()
        self._move_count = 0
        self._last_move = None

    # --- Presentation helpers ---

    def symbols(self) -> Dict[Any, str]:
        return default_symbols(self._players)

    def render(self, symbols: Optional[Dict[Any, str]] = None) -> str:
        """Render the board, drawing the seated players as X and O by default."""
        return self._board.render(symbols or self.symbols())

    def __str__(self) -> str:
        return self.render()


def new_game(height: int = DEFAULT_ROWS, width: int = DEFAULT_COLS,
             player1: Hashable = DEFAULT_PLAYERS[0],
             player2: Hashable = DEFAULT_PLAYERS[1]) -> GameEngine:
    """Create a GameEngine with an empty board and player1 to move."""
    return GameEngine(height, width, player1, player2)
