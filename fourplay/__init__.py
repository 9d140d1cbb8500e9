"""
fourplay - Rules engine for a two-player drop-four board game

This package provides the game-state machine (board, turns, win and draw
detection, undo and scoring) for Connect-Four-style play on boards of any
size, plus thin adapters for the terminal and for Gymnasium.
"""

# Version number
__version__ = '0.1.0'
