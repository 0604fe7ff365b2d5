"""
Base player interface for the game engine.
"""

from typing import Optional

from ..domain.constants import Direction
from ..domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    Each player looks at a snapshot of the game and returns the direction it
    wants the snake to take next, or None to leave the direction alone.
    """

    def get_move(self, game_state: GameState) -> Optional[Direction]:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of UP, DOWN, LEFT, RIGHT, or None for no change
        """
        raise NotImplementedError
