"""
Fruit entity - the single cell the snake is trying to reach.
"""

import logging
from typing import AbstractSet, Optional

from .board import Board, Cell

logger = logging.getLogger(__name__)


class Fruit:
    """
    Tracks the current fruit cell and re-places it on request.

    position is None until place() is first called.
    """

    def __init__(self, board: Board):
        self.board = board
        self.position: Optional[Cell] = None

    def place(self, occupied: AbstractSet) -> Cell:
        """Move the fruit to a random cell outside `occupied` and return it."""
        self.position = self.board.random_free_cell(occupied)
        logger.debug(f"Fruit placed at {self.position}")
        return self.position

    def __repr__(self):
        return f"<Fruit position={self.position}>"
