"""
env.py - Gymnasium environment adapter for fourplay

This module wraps a GameEngine in the Gymnasium Env interface so the game
can be driven step by step by any Gymnasium-compatible caller. The
environment only translates between actions/observations and the engine's
method surface; all rules stay in the engine.
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, Optional, Tuple, Union

from fourplay.config import GameConfig, parse_color
from fourplay.debug import debug
from fourplay.errors import MoveError
from fourplay.game.engine import GameEngine
from fourplay.utils import GameStatus, Player

CELL_SIZE = 50
BACKGROUND_RGB = (0, 0, 128)
EMPTY_RGB = (0, 0, 0)


class FourPlayEnv(gym.Env):
    """
    Gymnasium environment for a fourplay game.

    Rewards are given from Player ONE's point of view. Illegal actions do
    not raise: they return the unchanged observation with a penalty,
    truncated=True and info['invalid_move'] set.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, config: Optional[GameConfig] = None):
        """
        Initialize the environment.

        Args:
            render_mode: One of metadata['render_modes'], or None
            config: Board and player configuration (defaults if None)
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.engine = GameEngine.from_config(config)
        self.render_mode = render_mode
        debug.debug(f"Initializing FourPlayEnv {self.engine.rows}x{self.engine.cols}", "env")

        self.action_space = spaces.Discrete(self.engine.cols)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.engine.rows, self.engine.cols), dtype=np.int8
        )

        # Resolve colours up front so a bad colour fails at construction
        self._palette = np.array([
            EMPTY_RGB,
            parse_color(self.engine.color(Player.ONE)),
            parse_color(self.engine.color(Player.TWO)),
        ], dtype=np.uint8)

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new round.

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        self.engine.reset_game()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the current player's piece in the column given by action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        try:
            result = self.engine.apply_move(action)
        except MoveError as e:
            debug.warning(f"Invalid action {action!r}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            info['error'] = type(e).__name__
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = result.is_game_over
        if result.status == GameStatus.WON:
            reward = self.reward_win if result.winner == Player.ONE else self.reward_lose
        elif result.status == GameStatus.DRAWN:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """Render the board according to render_mode."""
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.engine.render()

        if self.render_mode == "human":
            print(self.engine.render())
            return None

        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        rows, cols = self.engine.rows, self.engine.cols
        frame = np.empty((rows * CELL_SIZE, cols * CELL_SIZE, 3), dtype=np.uint8)
        frame[:, :] = BACKGROUND_RGB

        # One disc mask per cell, painted with the occupant's colour
        yy, xx = np.mgrid[0:CELL_SIZE, 0:CELL_SIZE]
        centre = CELL_SIZE // 2
        disc = (yy - centre) ** 2 + (xx - centre) ** 2 <= (CELL_SIZE * 2 // 5) ** 2

        grid = self.engine.board
        for row in range(rows):
            for col in range(cols):
                tile = frame[row * CELL_SIZE:(row + 1) * CELL_SIZE, col * CELL_SIZE:(col + 1) * CELL_SIZE]
                tile[disc] = self._palette[grid[row, col]]

        return frame

    def _get_observation(self) -> np.ndarray:
        return self.engine.board.astype(np.int8)

    def _get_info(self) -> Dict:
        winner = self.engine.winner
        scores = self.engine.scores
        return {
            'valid_moves': self.engine.valid_moves(),
            'current_player': self.engine.current_player.value,
            'status': self.engine.status.name,
            'winner': winner.value if winner is not None else None,
            'moves_made': len(self.engine.history),
            'winning_line': self.engine.get_winning_line(),
            'last_move': self.engine.last_move,
            'scores': {player.value: score for player, score in scores.items()},
        }

    def close(self):
        pass
