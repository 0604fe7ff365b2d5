"""
Input sources for the snake engine.

This module contains the player abstractions that decide which way the
snake should turn, plus the keyboard bindings used by interactive UIs.
"""

from .base import Player
from .random_player import RandomPlayer
from .keyboard import KEY_BINDINGS, KeyboardPlayer, direction_for_key

__all__ = [
    'Player',
    'RandomPlayer',
    'KEY_BINDINGS',
    'KeyboardPlayer',
    'direction_for_key',
]
