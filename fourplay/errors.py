"""
errors.py - Exceptions raised by the fourplay engine

ConfigError is fatal to construction. Every MoveError is recoverable and
is raised before any state is touched.
"""


class GameError(Exception):
    """Base class for all engine errors."""
    pass


class ConfigError(GameError):
    """Raised when a game configuration is invalid."""
    pass


class MoveError(GameError):
    """Raised when an operation is rejected; the engine state is unchanged."""
    pass


class InvalidInputError(MoveError):
    """Raised when a column is not an integer inside the board."""
    pass


class ColumnFullError(MoveError):
    """Raised when the chosen column has no empty cell."""
    pass


class GameOverError(MoveError):
    """Raised when a move is attempted after the round has ended."""
    pass


class NoHistoryError(MoveError):
    """Raised when undo is requested with no moves played."""
    pass
