"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from ..domain.constants import VALID_MOVES, Direction
from ..domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids walls, its own body and
    reversals. Heads for the fruit when the fruit is one step away.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Direction:
        head_x, head_y = game_state.head
        body = set(game_state.body)

        valid_moves: List[Direction] = []
        for move in sorted(VALID_MOVES, key=lambda d: d.value):
            # Reversals are rejected by the engine anyway
            if move.is_opposite(game_state.direction):
                continue

            dx, dy = move.offset
            new_x, new_y = head_x + dx, head_y + dy
            if game_state.wrap_enabled:
                new_x %= game_state.width
                new_y %= game_state.height

            if game_state.fruit is not None and (new_x, new_y) == tuple(game_state.fruit):
                return move

            # Check wall collisions
            if (new_x < 0 or new_x >= game_state.width or
                new_y < 0 or new_y >= game_state.height):
                continue

            # The tail does not move out of the way in time, so the whole body counts
            if (new_x, new_y) in body:
                continue

            valid_moves.append(move)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return game_state.direction

        return self.rng.choice(valid_moves)
