"""
Session configuration.

Values come from keyword arguments or, through GameConfig.from_env(), from
SNAKE_* environment variables (a local .env file is honoured). A config is
validated once and never changes for the lifetime of a session.
"""

import logging
import math
import os
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from dotenv import load_dotenv

from .domain.board import Cell
from .domain.constants import DEFAULT_BOARD_SIZE, DEFAULT_TICK_RATE
from .domain.errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class GameConfig:
    rows: int = DEFAULT_BOARD_SIZE
    cols: int = DEFAULT_BOARD_SIZE
    start: Optional[Tuple[int, int]] = None  # None => board center
    tick_rate: float = DEFAULT_TICK_RATE  # ticks per second
    wrap: bool = False
    sound_dir: Optional[str] = None
    log_level: str = "INFO"

    @property
    def tick_interval(self) -> float:
        """Seconds between ticks."""
        return 1.0 / self.tick_rate

    @property
    def start_cell(self) -> Cell:
        if self.start is None:
            return Cell(self.cols // 2, self.rows // 2)
        return Cell(*self.start)

    def validate(self) -> "GameConfig":
        """Raise ConfigurationError if the config cannot describe a playable session."""
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(
                f"Board dimensions must be positive, got {self.cols}x{self.rows}."
            )
        if self.rows * self.cols < 2:
            # One cell for the snake, one for the first fruit. Tiny boards fill
            # up after a few fruits and the next placement never finds a free cell.
            raise ConfigurationError(
                f"A {self.cols}x{self.rows} board has no room for a fruit next to the snake."
            )
        if not math.isfinite(self.tick_rate) or self.tick_rate <= 0:
            raise ConfigurationError(
                f"Tick rate must be a positive finite number, got {self.tick_rate}."
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Unknown log level {self.log_level!r}.")
        x, y = self.start_cell
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            raise ConfigurationError(
                f"Start cell {(x, y)} is outside the {self.cols}x{self.rows} board."
            )
        return self

    def with_overrides(self, **changes) -> "GameConfig":
        """Return a copy with the non-None keyword values applied."""
        changes = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **changes)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "GameConfig":
        """
        Build a config from SNAKE_* environment variables.

        Recognised variables: SNAKE_ROWS, SNAKE_COLS, SNAKE_START_X,
        SNAKE_START_Y, SNAKE_TICK_RATE, SNAKE_WRAP, SNAKE_SOUND_DIR,
        SNAKE_LOG_LEVEL. Missing variables keep their defaults.
        """
        load_dotenv(dotenv_path)

        rows = _env_int("SNAKE_ROWS", DEFAULT_BOARD_SIZE)
        cols = _env_int("SNAKE_COLS", DEFAULT_BOARD_SIZE)
        start_x = os.getenv("SNAKE_START_X")
        start_y = os.getenv("SNAKE_START_Y")
        if (start_x is None) != (start_y is None):
            raise ConfigurationError("SNAKE_START_X and SNAKE_START_Y must be set together.")
        start = None
        if start_x is not None:
            start = (_env_int("SNAKE_START_X", 0), _env_int("SNAKE_START_Y", 0))

        return cls(
            rows=rows,
            cols=cols,
            start=start,
            tick_rate=_env_float("SNAKE_TICK_RATE", DEFAULT_TICK_RATE),
            wrap=_env_bool("SNAKE_WRAP", False),
            sound_dir=os.getenv("SNAKE_SOUND_DIR") or None,
            log_level=os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
        ).validate()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}.") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}.") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}.")
