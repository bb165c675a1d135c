"""
env.py - Gymnasium environment for Connect Four

This module wraps one GameEngine in the Gymnasium Env interface so that
scripts and agents can drive a game with integer actions and numeric
observations. The engine stays the single owner of the game state.
"""

from typing import Any, Dict, Hashable, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect_four.debug import debug
from connect_four.errors import ColumnFull, InvalidColumn
from connect_four.game.rules import GameEngine
from connect_four.utils import DEFAULT_COLS, DEFAULT_PLAYERS, DEFAULT_ROWS, EMPTY, GameResult


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Observations encode empty cells as 0, the first-seated player as 1 and
    the second-seated player as 2. Rewards are given to the player who
    made the move.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    reward_win = 1.0
    reward_draw = 0.1
    reward_invalid_move = -0.5
    reward_step = -0.01

    def __init__(self, height: int = DEFAULT_ROWS, width: int = DEFAULT_COLS,
                 players: Tuple[Hashable, Hashable] = DEFAULT_PLAYERS,
                 render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            height: Number of rows
            width: Number of columns
            players: The two seated players, first mover first
            render_mode: One of metadata['render_modes'] or None
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        debug.debug("Initializing ConnectFourEnv", "env")
        self.engine = GameEngine(height, width, *players)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(height, width), dtype=np.int8
        )

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict[str, Any]] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to an empty board.

        Args:
            seed: Random seed for reproducibility
            options: May contain 'players', a pair of new player identifiers

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        players = (options or {}).get('players', (None, None))
        self.engine.reset(*players)

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop the current player's piece into the column given by action.

        An out-of-range or full column leaves the game unchanged and is
        reported as a truncated step. Stepping a finished game raises
        GameAlreadyOver.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        try:
            outcome = self.engine.drop(int(action))
        except (InvalidColumn, ColumnFull) as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = outcome.status.is_game_over()
        if outcome.status.result == GameResult.WON:
            reward = self.reward_win
        elif outcome.status.result == GameResult.DRAW:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
        return None

    def seat_of(self, player: Hashable) -> int:
        """Observation value for a cell occupant."""
        if player is EMPTY:
            return 0
        return self.engine.players.index(player) + 1

    def _get_observation(self) -> np.ndarray:
        grid = self.engine.board.grid
        observation = np.zeros(grid.shape, dtype=np.int8)
        for (row, col), cell in np.ndenumerate(grid):
            if cell is not EMPTY:
                observation[row, col] = self.seat_of(cell)
        return observation

    def _get_info(self) -> Dict[str, Any]:
        return {
            'valid_moves': self.engine.valid_columns(),
            'current_player': self.engine.current_player,
            'game_result': self.engine.status.result.name,
            'winner': self.engine.winner,
            'moves_made': self.engine.move_count,
            'last_move': self.engine.last_move,
        }

    def close(self):
        pass
