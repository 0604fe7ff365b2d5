"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import List, Optional, Tuple

from .board import Cell
from .constants import CellState, Direction, SessionStatus
from .errors import CellOutOfBoundsError


class GameState:
    """
    A read-only snapshot of a session at a specific tick.

    Foreground code (UI, input players) works from snapshots and never from
    the live Snake or Fruit objects.

    Attributes:
        tick: number of ticks the session has advanced (0-based)
        body: list of Cells from head to tail
        fruit: current fruit Cell (None only before placement)
        score: fruits eaten so far
        direction: the snake's current direction
        status: session status at the time of the snapshot
        width, height: board dimensions
        wrap_enabled: board wrap policy
    """

    def __init__(
        self,
        tick: int,
        body: List[Cell],
        fruit: Optional[Cell],
        score: int,
        direction: Direction,
        status: SessionStatus,
        width: int,
        height: int,
        wrap_enabled: bool = False,
    ):
        self.tick = tick
        self.body: Tuple[Cell, ...] = tuple(body)
        self.fruit = fruit
        self.score = score
        self.direction = direction
        self.status = status
        self.width = width
        self.height = height
        self.wrap_enabled = wrap_enabled

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def is_over(self) -> bool:
        return self.status is SessionStatus.OVER

    def cell_state(self, cell) -> CellState:
        """
        Return the logical state of a cell.

        Raises:
            CellOutOfBoundsError: if the cell is outside the board
        """
        x, y = cell
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise CellOutOfBoundsError(cell, self.height, self.width)
        if (x, y) in self.body:
            return CellState.SNAKE
        if self.fruit is not None and (x, y) == tuple(self.fruit):
            return CellState.FRUIT
        return CellState.EMPTY

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = fruit
        S = snake body
        H = snake head
        Row 0 is printed first (top of the board), x-axis labels at the bottom.
        """
        # Create empty board
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.fruit is not None:
            fx, fy = self.fruit
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.body):
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = []
        for y in range(self.height):
            result.append(f"{y:2d} {' '.join(board[y])}")

        # Only the last digit fits in a single-character column
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, status={self.status.value}, "
            f"length={len(self.body)}, fruit={self.fruit}, score={self.score}>"
        )
