"""
config.py - Game configuration for fourplay

This module defines the validated configuration record a GameEngine is
built from: board dimensions plus a fixed pair of player profiles
(colour and display label).
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from fourplay.debug import debug
from fourplay.errors import ConfigError
from fourplay.utils import ROWS, COLS, Player

DEFAULT_PLAYER1_COLOR = "red"
DEFAULT_PLAYER2_COLOR = "yellow"
DEFAULT_LOCALE = "en"

# Display labels per locale, indexed (player one, player two)
DEFAULT_LABELS: Dict[str, Tuple[str, str]] = {
    "en": ("Red", "Yellow"),
    "fr": ("Rouge", "Jaune"),
}

NAMED_COLORS: Dict[str, Tuple[int, int, int]] = {
    "red": (255, 0, 0),
    "yellow": (255, 255, 0),
    "blue": (0, 0, 255),
    "green": (0, 128, 0),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "pink": (255, 192, 203),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "brown": (165, 42, 42),
}

_HEX_COLOR = re.compile(r"^#(?:[0-9a-f]{3}|[0-9a-f]{6})$")


def normalize_color(color: str) -> str:
    """Canonical form used to compare colours."""
    if not isinstance(color, str) or not color.strip():
        raise ConfigError(f"invalid color: {color!r}")
    return color.strip().lower()


def parse_color(color: str) -> Tuple[int, int, int]:
    """
    Convert a colour name or hex string into an RGB triple.

    Args:
        color: A name from NAMED_COLORS, '#rgb' or '#rrggbb'

    Returns:
        (red, green, blue) with each channel in 0-255
    """
    value = normalize_color(color)
    if value in NAMED_COLORS:
        return NAMED_COLORS[value]
    if not _HEX_COLOR.match(value):
        raise ConfigError(f"unknown color: {color!r}")

    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return tuple(int(digits[i:i + 2], 16) for i in range(0, 6, 2))


def _check_dimension(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return value


@dataclass(frozen=True)
class PlayerProfile:
    """Colour and display label for one player."""
    color: str
    label: str


@dataclass(frozen=True)
class GameConfig:
    """
    Immutable configuration for one game session.

    Instances validate themselves on creation, so holding a GameConfig
    means holding a usable configuration.
    """
    rows: int = ROWS
    cols: int = COLS
    player_one: PlayerProfile = PlayerProfile(DEFAULT_PLAYER1_COLOR, DEFAULT_LABELS[DEFAULT_LOCALE][0])
    player_two: PlayerProfile = PlayerProfile(DEFAULT_PLAYER2_COLOR, DEFAULT_LABELS[DEFAULT_LOCALE][1])
    locale: str = DEFAULT_LOCALE

    def __post_init__(self):
        _check_dimension("rows", self.rows)
        _check_dimension("cols", self.cols)

        if self.locale not in DEFAULT_LABELS:
            raise ConfigError(f"unsupported locale: {self.locale!r}")

        for profile in (self.player_one, self.player_two):
            if not isinstance(profile.label, str) or not profile.label.strip():
                raise ConfigError(f"invalid player label: {profile.label!r}")

        if normalize_color(self.player_one.color) == normalize_color(self.player_two.color):
            debug.warning(f"Rejected configuration with both players as {self.player_one.color}", "config")
            raise ConfigError("duplicate player colors")

    @classmethod
    def build(cls, rows: int = ROWS, cols: int = COLS,
              player1_color: str = DEFAULT_PLAYER1_COLOR,
              player2_color: str = DEFAULT_PLAYER2_COLOR,
              player1_label: Optional[str] = None,
              player2_label: Optional[str] = None,
              locale: str = DEFAULT_LOCALE) -> 'GameConfig':
        """
        Build a configuration from flat values, filling in default labels.

        Raises:
            ConfigError: if any value is invalid or the colours collide
        """
        if locale not in DEFAULT_LABELS:
            raise ConfigError(f"unsupported locale: {locale!r}")

        default_one, default_two = DEFAULT_LABELS[locale]
        return cls(
            rows=rows,
            cols=cols,
            player_one=PlayerProfile(normalize_color(player1_color),
                                     default_one if player1_label is None else player1_label),
            player_two=PlayerProfile(normalize_color(player2_color),
                                     default_two if player2_label is None else player2_label),
            locale=locale,
        )

    def replace(self, **overrides) -> 'GameConfig':
        """
        Return a new validated configuration with some values changed.

        Accepts the same keyword names as build(). Labels that were the
        locale defaults follow a locale change unless given explicitly.
        """
        values = self.as_flat_dict()
        locale = overrides.get("locale", self.locale)
        if locale != self.locale and locale in DEFAULT_LABELS:
            old_defaults = DEFAULT_LABELS[self.locale]
            for index, key in enumerate(("player1_label", "player2_label")):
                if values[key] == old_defaults[index]:
                    values[key] = None

        unknown = set(overrides) - set(values)
        if unknown:
            raise ConfigError(f"unknown configuration keys: {sorted(unknown)}")

        values.update(overrides)
        return GameConfig.build(**values)

    def profile(self, player: Player) -> PlayerProfile:
        if player == Player.ONE:
            return self.player_one
        if player == Player.TWO:
            return self.player_two
        raise ValueError(f"no profile for {player!r}")

    def as_flat_dict(self) -> Dict[str, object]:
        """Configuration as the flat keyword set accepted by build()."""
        return {
            "rows": self.rows,
            "cols": self.cols,
            "player1_color": self.player_one.color,
            "player2_color": self.player_two.color,
            "player1_label": self.player_one.label,
            "player2_label": self.player_two.label,
            "locale": self.locale,
        }
