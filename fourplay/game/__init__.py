"""
fourplay.game - Core game mechanics

This package contains the board representation and the GameEngine state
machine, plus the Gymnasium environment adapter built on top of them.
The environment is registered with Gymnasium as "FourPlay-v0".
"""

import gymnasium as gym

from fourplay.game.board import Board
from fourplay.game.engine import GameEngine, Move, MoveResult
from fourplay.game.env import FourPlayEnv

ENV_ID = "FourPlay-v0"

if ENV_ID not in gym.registry:
    gym.register(id=ENV_ID, entry_point="fourplay.game.env:FourPlayEnv")

__all__ = ['Board', 'GameEngine', 'Move', 'MoveResult', 'FourPlayEnv', 'ENV_ID']
