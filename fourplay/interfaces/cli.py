"""
cli.py - Command-line interface for playing fourplay

This module provides a terminal adapter around GameEngine. It reads the
configuration from command-line arguments, filters raw input so that only
valid column numbers reach the engine, and prints the board, turn, result
and score after every call.
"""

import argparse
import sys
from enum import Enum
from typing import Callable, List, Optional, Union

from fourplay.config import (DEFAULT_LABELS, DEFAULT_LOCALE, DEFAULT_PLAYER1_COLOR,
                             DEFAULT_PLAYER2_COLOR, GameConfig)
from fourplay.debug import debug, DebugLevel
from fourplay.errors import (ColumnFullError, ConfigError, GameOverError,
                             NoHistoryError)
from fourplay.game.engine import GameEngine
from fourplay.utils import ROWS, COLS, GameStatus, Player


MESSAGES = {
    "en": {
        "turn": "Player {label}, your move!",
        "win": "Player {label} wins!",
        "draw": "It's a draw!",
        "score": "Score - {label1}: {score1}, {label2}: {score2}",
        "prompt": "Column (0-{max_col}), u=undo, r=restart, c=reconfigure, q=quit: ",
        "invalid": "Invalid input. Enter a column between 0 and {max_col} or a command.",
        "column_full": "Column {col} is full.",
        "game_over": "The round is over. Undo, restart or reconfigure.",
        "no_history": "No moves to undo.",
        "restarted": "New round started.",
        "config_prompt": "{field} [{current}]: ",
        "config_error": "Invalid configuration: {error}",
        "bye": "Goodbye!",
    },
    "fr": {
        "turn": "Joueur {label}, à vous de jouer !",
        "win": "Victoire du joueur {label} !",
        "draw": "Partie Nulle !",
        "score": "Score - {label1}: {score1}, {label2}: {score2}",
        "prompt": "Colonne (0-{max_col}), u=annuler, r=rejouer, c=reconfigurer, q=quitter : ",
        "invalid": "Saisie invalide. Entrez une colonne entre 0 et {max_col} ou une commande.",
        "column_full": "La colonne {col} est pleine.",
        "game_over": "La partie est terminée. Annulez, rejouez ou reconfigurez.",
        "no_history": "Aucun coup à annuler.",
        "restarted": "Nouvelle partie.",
        "config_prompt": "{field} [{current}] : ",
        "config_error": "Configuration invalide : {error}",
        "bye": "Au revoir !",
    },
}

# Fields asked for on reconfigure, in order; integers are parsed before use
CONFIG_FIELDS = [
    ("rows", int),
    ("cols", int),
    ("player1_color", str),
    ("player2_color", str),
]


class Command(Enum):
    """Non-move commands a player can type."""
    QUIT = "q"
    UNDO = "u"
    RESTART = "r"
    RECONFIGURE = "c"


def parse_input(text: str, cols: int) -> Union[int, Command, None]:
    """
    Translate a line of user input into a column or a command.

    Returns:
        A column index in [0, cols), a Command, or None for anything else
    """
    value = text.strip().lower()
    for command in Command:
        if value == command.value:
            return command

    try:
        column = int(value)
    except ValueError:
        return None

    if 0 <= column < cols:
        return column
    return None


class GameSession:
    """
    Hosts exactly one GameEngine and swaps it out on reconfiguration.

    Output goes through the given callable so the session can be driven
    from tests as well as from a terminal.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 output: Callable[[str], None] = print,
                 input_fn: Callable[[str], str] = input):
        self.engine = GameEngine.from_config(config)
        self.output = output
        self.input_fn = input_fn

    def message(self, key: str, **kwargs) -> str:
        return MESSAGES[self.engine.config.locale][key].format(**kwargs)

    def turn_line(self) -> str:
        return self.message("turn", label=self.engine.label(self.engine.current_player))

    def score_line(self) -> str:
        return self.message(
            "score",
            label1=self.engine.label(Player.ONE), score1=self.engine.score(Player.ONE),
            label2=self.engine.label(Player.TWO), score2=self.engine.score(Player.TWO),
        )

    def show(self) -> None:
        """Print the board followed by the result or whose turn it is."""
        self.output(self.engine.render())
        if self.engine.status == GameStatus.WON:
            self.output(self.message("win", label=self.engine.label(self.engine.winner)))
            self.output(self.score_line())
        elif self.engine.status == GameStatus.DRAWN:
            self.output(self.message("draw"))
            self.output(self.score_line())
        else:
            self.output(self.turn_line())

    def handle(self, text: str) -> bool:
        """
        Process one line of input.

        Returns:
            False if the player asked to quit, True otherwise
        """
        action = parse_input(text, self.engine.cols)

        if action is None:
            debug.debug(f"Ignoring input {text!r}", "cli")
            self.output(self.message("invalid", max_col=self.engine.cols - 1))
        elif action is Command.QUIT:
            self.output(self.message("bye"))
            return False
        elif action is Command.UNDO:
            self.undo()
        elif action is Command.RESTART:
            self.restart()
        elif action is Command.RECONFIGURE:
            self.reconfigure_interactive()
        else:
            self.play(action)
        return True

    def play(self, column: int) -> None:
        try:
            self.engine.apply_move(column)
        except ColumnFullError:
            self.output(self.message("column_full", col=column))
            return
        except GameOverError:
            self.output(self.message("game_over"))
            return
        self.show()

    def undo(self) -> None:
        try:
            self.engine.undo_last_move()
        except NoHistoryError:
            self.output(self.message("no_history"))
            return
        self.show()

    def restart(self) -> None:
        self.engine.reset_game()
        self.output(self.message("restarted"))
        self.show()

    def reconfigure(self, **overrides) -> bool:
        """
        Replace the hosted engine with one built from new values.

        The current engine is kept if the new configuration is rejected.
        """
        try:
            engine = self.engine.reconfigure(**overrides)
        except ConfigError as e:
            debug.warning(f"Reconfiguration rejected: {e}", "cli")
            self.output(self.message("config_error", error=e))
            return False

        self.engine = engine
        self.show()
        return True

    def reconfigure_interactive(self) -> bool:
        """Ask for each setting in turn; blank answers keep the current value."""
        current = self.engine.config.as_flat_dict()
        overrides = {}
        for field, kind in CONFIG_FIELDS:
            answer = self.input_fn(self.message("config_prompt", field=field, current=current[field])).strip()
            if not answer:
                continue
            if kind is int:
                try:
                    overrides[field] = int(answer)
                except ValueError:
                    self.output(self.message("config_error", error=f"{field} must be an integer"))
                    return False
            else:
                overrides[field] = answer
        return self.reconfigure(**overrides)

    def run(self) -> None:
        """Read and handle input until the player quits or input ends."""
        self.show()
        while True:
            try:
                text = self.input_fn(self.message("prompt", max_col=self.engine.cols - 1))
            except EOFError:
                self.output(self.message("bye"))
                return
            if not self.handle(text):
                return


class SimpleCLI:
    """Command-line entry point: parses arguments and runs a GameSession."""

    def __init__(self):
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Play a game of fourplay in the terminal')
        parser.add_argument('--rows', type=int, default=ROWS, help=f'Board rows (default: {ROWS})')
        parser.add_argument('--cols', type=int, default=COLS, help=f'Board columns (default: {COLS})')
        parser.add_argument('--player1-color', default=DEFAULT_PLAYER1_COLOR,
                            help=f'Colour of player one (default: {DEFAULT_PLAYER1_COLOR})')
        parser.add_argument('--player2-color', default=DEFAULT_PLAYER2_COLOR,
                            help=f'Colour of player two (default: {DEFAULT_PLAYER2_COLOR})')
        parser.add_argument('--player1-label', help='Display name of player one')
        parser.add_argument('--player2-label', help='Display name of player two')
        parser.add_argument('--locale', choices=sorted(DEFAULT_LABELS), default=DEFAULT_LOCALE,
                            help='Language for labels and messages')
        parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        parser.add_argument('--debug-level',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            default='warning', help='Set debug level (default: warning)')
        parser.add_argument('--log-file', help='Also write log output to this file')

        self.args = parser.parse_args(argv)
        self.parser = parser

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

        return self.args

    def build_config(self) -> GameConfig:
        """Turn parsed arguments into a GameConfig, exiting on invalid values."""
        try:
            return GameConfig.build(
                rows=self.args.rows,
                cols=self.args.cols,
                player1_color=self.args.player1_color,
                player2_color=self.args.player2_color,
                player1_label=self.args.player1_label,
                player2_label=self.args.player2_label,
                locale=self.args.locale,
            )
        except ConfigError as e:
            self.parser.error(str(e))

    def run(self, argv: Optional[List[str]] = None) -> None:
        if not self.args:
            self.parse_args(argv)
        GameSession(self.build_config()).run()


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.run(argv)


if __name__ == "__main__":
    main(sys.argv[1:])
