"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board representation, the game engine that
manages turns and outcomes, and the Gymnasium environment wrapping it.
"""

from connect_four.game.board import Board
from connect_four.game.rules import GameEngine, GameStatus, MoveOutcome, new_game
from connect_four.game.env import ConnectFourEnv

__all__ = ['Board', 'GameEngine', 'GameStatus', 'MoveOutcome', 'new_game', 'ConnectFourEnv']
