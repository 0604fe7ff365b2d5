"""
snakegame - a grid-based Snake game engine.

The engine owns the board, the snake and the fruit, and drives them from a
single background tick loop. Rendering, audio and input are plugged in as
collaborators.
"""

from .config import GameConfig
from .engine import GameEngine

__all__ = [
    'GameConfig',
    'GameEngine',
]

__version__ = "0.1.0"
