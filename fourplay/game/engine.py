"""
engine.py - Turn-based game state machine for fourplay

This module provides the GameEngine class, which owns the board, the
current player, the move history and the per-player scores. Adapters
drive it through apply_move, undo_last_move, reset_game and reconfigure,
and read its state back through the accessors after every call.

Every rejected operation raises a MoveError subclass before touching any
state. The engine is not thread-safe; a multi-threaded host should hold a
single lock around each public call.
"""

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from fourplay.config import GameConfig
from fourplay.debug import debug
from fourplay.errors import (ColumnFullError, GameOverError, InvalidInputError,
                             NoHistoryError)
from fourplay.game.board import Board
from fourplay.utils import GameStatus, Player


class Move(NamedTuple):
    """A landing cell resolved from a column choice."""
    row: int
    col: int


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a successful apply_move call."""
    row: int
    col: int
    player: Player
    status: GameStatus
    winner: Optional[Player] = None

    @property
    def move(self) -> Move:
        return Move(self.row, self.col)

    @property
    def is_game_over(self) -> bool:
        return self.status.is_game_over()


def _as_column(col) -> Optional[int]:
    """Coerce a column argument to int, or None if it is not an integer."""
    if isinstance(col, (bool, np.bool_)):
        return None
    if isinstance(col, (int, np.integer)):
        return int(col)
    return None


class GameEngine:
    """
    Rules engine and state holder for one game session.

    A session is a sequence of rounds on the same configuration. Scores
    accumulate across rounds (reset_game) and start at zero for every new
    engine, which is what reconfigure hands back.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self._config = config if config is not None else GameConfig()
        debug.debug(f"Initializing GameEngine {self._config.rows}x{self._config.cols}", "engine")
        self._board = Board(self._config.rows, self._config.cols)
        self._scores: Dict[Player, int] = {Player.ONE: 0, Player.TWO: 0}
        self._start_round()

    @classmethod
    def create(cls, rows: int = None, cols: int = None,
               player1_color: str = None, player2_color: str = None,
               player1_label: str = None, player2_label: str = None,
               locale: str = None) -> 'GameEngine':
        """
        Build an engine from flat configuration values.

        Omitted values take the defaults from fourplay.config.

        Raises:
            ConfigError: if the configuration is invalid; no engine is created
        """
        values = {
            "rows": rows, "cols": cols,
            "player1_color": player1_color, "player2_color": player2_color,
            "player1_label": player1_label, "player2_label": player2_label,
            "locale": locale,
        }
        return cls(GameConfig.build(**{k: v for k, v in values.items() if v is not None}))

    @classmethod
    def from_config(cls, config: Optional[GameConfig]) -> 'GameEngine':
        """Build an engine from a ready-made configuration (defaults if None)."""
        return cls(config)

    def _start_round(self):
        self._board.reset()
        self._history: List[Move] = []
        self._current_player = Player.ONE
        self._status = GameStatus.IN_PROGRESS
        self._winner: Optional[Player] = None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def apply_move(self, col) -> MoveResult:
        """
        Drop the current player's piece into a column.

        Args:
            col: Column index in [0, cols)

        Returns:
            MoveResult with the landing cell and the resulting status

        Raises:
            InvalidInputError: if col is not an integer inside the board
            GameOverError: if the round is already won or drawn
            ColumnFullError: if the column has no empty cell
        """
        column = _as_column(col)
        if column is None or not (0 <= column < self.cols):
            debug.debug(f"Rejected move: invalid column {col!r}", "engine")
            raise InvalidInputError(f"column must be an integer in 0..{self.cols - 1}, got {col!r}")

        if self._status.is_game_over():
            debug.debug(f"Rejected move in column {column}: game is over ({self._status.name})", "engine")
            raise GameOverError("the round is over; undo or reset to continue")

        if self._board.is_column_full(column):
            debug.debug(f"Rejected move: column {column} is full", "engine")
            raise ColumnFullError(f"column {column} is full")

        player = self._current_player
        row = self._board.drop(column, player)
        self._history.append(Move(row, column))
        debug.debug(f"{player.name} played ({row}, {column})", "engine")

        debug.start_timer("win_check")
        won = self.check_win(row, column)
        debug.end_timer("win_check", "engine")

        if won:
            self._status = GameStatus.WON
            self._winner = player
            self._scores[player] += 1
            debug.info(f"{player.name} wins after move at ({row}, {column})", "engine")
        elif self.check_draw():
            self._status = GameStatus.DRAWN
            debug.info("Game ends in a draw", "engine")
        else:
            self._current_player = player.other()

        return MoveResult(row, column, player, self._status, self._winner)

    def check_win(self, row: int, col: int) -> bool:
        """True if the piece at (row, col) is part of a line of four or more."""
        return self._board.check_win_at(row, col)

    def check_draw(self) -> bool:
        """True if every cell is occupied."""
        return self._board.is_full()

    def undo_last_move(self) -> Move:
        """
        Take back the most recent move.

        The cell is emptied, the turn goes back to the player who made the
        move and the round is in progress again. If the undone move won the
        round, the point it earned is taken back as well.

        Returns:
            The Move that was undone

        Raises:
            NoHistoryError: if no move has been played this round
        """
        if not self._history:
            debug.debug("No moves to undo", "engine")
            raise NoHistoryError("no moves to undo")

        move = self._history.pop()
        player = self._board.lift(move.row, move.col)

        if self._status == GameStatus.WON:
            self._scores[self._winner] -= 1
            debug.info(f"Undid winning move; {self._winner.name} score back to {self._scores[self._winner]}", "engine")

        self._current_player = player
        self._status = GameStatus.IN_PROGRESS
        self._winner = None
        debug.debug(f"Undid {player.name} move at ({move.row}, {move.col})", "engine")
        return move

    def reset_game(self) -> None:
        """Start a new round on the same configuration, keeping scores."""
        debug.debug("Resetting round", "engine")
        self._start_round()

    def reconfigure(self, **overrides) -> 'GameEngine':
        """
        Produce a fresh engine for a new configuration.

        Keyword arguments are the names accepted by GameConfig.build and
        override this engine's values. Nothing else is carried over: the
        new engine has an empty board, no history and zero scores. The
        caller is expected to replace its reference with the result.

        Raises:
            ConfigError: if the new configuration is invalid
        """
        config = self._config.replace(**overrides)
        debug.info(f"Reconfiguring to {config.rows}x{config.cols}", "engine")
        return type(self)(config)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def rows(self) -> int:
        return self._config.rows

    @property
    def cols(self) -> int:
        return self._config.cols

    @property
    def board(self) -> np.ndarray:
        """Copy of the grid; 0 is empty, 1 and 2 are the players."""
        return self._board.get_state()

    def cell(self, row: int, col: int) -> Player:
        return self._board.cell(row, col)

    @property
    def current_player(self) -> Player:
        return self._current_player

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def is_game_over(self) -> bool:
        return self._status.is_game_over()

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    @property
    def last_move(self) -> Optional[Move]:
        return self._history[-1] if self._history else None

    @property
    def scores(self) -> Dict[Player, int]:
        return dict(self._scores)

    def score(self, player: Player) -> int:
        return self._scores[player]

    def label(self, player: Player) -> str:
        return self._config.profile(player).label

    def color(self, player: Player) -> str:
        return self._config.profile(player).color

    def valid_moves(self) -> List[int]:
        """Columns that would accept a piece right now."""
        if self.is_game_over:
            return []
        return self._board.valid_columns()

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """Positions of the winning line, or [] if the round is not won."""
        if self._status != GameStatus.WON:
            return []
        move = self._history[-1]
        return self._board.winning_line(move.row, move.col)

    def render(self) -> str:
        return self._board.render()

    def __str__(self) -> str:
        return self.render()
