"""
Domain entities for the snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (threads, audio devices, key codes, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES,
    Direction, CellState, MoveOutcome, SessionStatus, Sound,
    DEFAULT_BOARD_SIZE, DEFAULT_TICK_RATE,
)
from .errors import ConfigurationError, CellOutOfBoundsError
from .board import Board, Cell
from .arbiter import request_direction
from .snake import Snake
from .fruit import Fruit
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'Direction', 'CellState', 'MoveOutcome', 'SessionStatus', 'Sound',
    'DEFAULT_BOARD_SIZE', 'DEFAULT_TICK_RATE',
    'ConfigurationError', 'CellOutOfBoundsError',
    'Board', 'Cell',
    'request_direction',
    'Snake',
    'Fruit',
    'GameState',
]
