"""
Game constants for the snake engine.
"""

from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Movement directions. Row 0 is the top of the board, so UP is y - 1."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def offset(self) -> Tuple[int, int]:
        """Unit (dx, dy) step for this direction."""
        return _OFFSETS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def is_opposite(self, other: "Direction") -> bool:
        return _OPPOSITES[self] is other


_OFFSETS = {
    Direction.UP:    (0, -1),
    Direction.DOWN:  (0, 1),
    Direction.LEFT:  (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Movement directions
UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}


class CellState(str, Enum):
    """Logical state of a board cell, as reported to render sinks."""

    EMPTY = "EMPTY"
    SNAKE = "SNAKE"
    FRUIT = "FRUIT"


class MoveOutcome(str, Enum):
    """Result of a single Snake.advance() call."""

    MOVED = "MOVED"
    ATE = "ATE"
    COLLIDED = "COLLIDED"
    NOT_STARTED = "NOT_STARTED"


class SessionStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    RUNNING = "RUNNING"
    OVER = "OVER"


class Sound(str, Enum):
    """Named audio cues the engine can trigger."""

    EAT = "eat"
    GAME_OVER = "game_over"
    GAME_START = "game_start"


# Game settings
DEFAULT_BOARD_SIZE = 40
DEFAULT_TICK_RATE = 12.0
DEFAULT_DIRECTION = LEFT
