"""Helpers for driving an engine through a scripted game."""


def play(engine, columns):
    """Apply a sequence of column moves and return the last MoveResult."""
    result = None
    for col in columns:
        result = engine.apply_move(col)
    return result


def snapshot(engine):
    """Everything observable about an engine, in comparable form."""
    return (engine.board.tolist(), engine.history, engine.current_player,
            engine.status, engine.winner, engine.scores)


# Column sequences on a 6x7 board; the last move of each wins for Player ONE
VERTICAL_WIN = [0, 6, 0, 6, 0, 6, 0]
HORIZONTAL_WIN = [0, 0, 1, 1, 2, 2, 3]
RISING_DIAGONAL_WIN = [0, 1, 1, 2, 2, 3, 2, 3, 3, 5, 3]
FALLING_DIAGONAL_WIN = [6, 5, 5, 4, 4, 3, 4, 3, 3, 1, 3]
