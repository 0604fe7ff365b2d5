"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Deque, FrozenSet, List, Optional, Set

from .arbiter import request_direction
from .board import Board, Cell
from .constants import DEFAULT_DIRECTION, Direction, MoveOutcome


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of Cells from head at index 0 to tail at the end
        direction: the direction the next advance() will move in
        started: False until the first accepted direction change; advance()
            does nothing before that
        last_head: the cell entered by the most recent MOVED/ATE advance
        last_vacated: the tail cell freed by the most recent MOVED advance
            (None after ATE or COLLIDED)

    The deque and the membership set always hold the same cells. Only
    _add() and _remove() touch them.
    """

    def __init__(self, start: Cell, direction: Direction = DEFAULT_DIRECTION):
        self.positions: Deque[Cell] = deque()
        self._occupied: Set[Cell] = set()
        self.direction = direction
        self.started = False
        self.last_head: Optional[Cell] = None
        self.last_vacated: Optional[Cell] = None
        self._add(Cell(*start))

    @property
    def head(self) -> Cell:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Cell:
        return self.positions[-1]

    @property
    def occupied(self) -> FrozenSet[Cell]:
        return frozenset(self._occupied)

    def body(self) -> List[Cell]:
        return list(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, cell) -> bool:
        return cell in self._occupied

    def _add(self, cell: Cell) -> None:
        self.positions.appendleft(cell)
        self._occupied.add(cell)

    def _remove(self) -> Cell:
        tail = self.positions.pop()
        self._occupied.discard(tail)
        return tail

    def set_direction(self, requested: Direction) -> bool:
        """
        Apply a direction request through the arbiter.

        The first accepted request also starts the snake. Returns whether the
        request was accepted.
        """
        accepted, new_direction = request_direction(self.direction, requested)
        if accepted:
            self.direction = new_direction
            self.started = True
        return accepted

    def advance(self, fruit: Optional[Cell], board: Board) -> MoveOutcome:
        """
        Move one cell in the current direction.

        1) Not started: nothing happens (NOT_STARTED)
        2) Head lands on the fruit: grow by keeping the tail (ATE)
        3) Head leaves the board or hits the body: no change (COLLIDED)
        4) Otherwise: push the head, drop the tail (MOVED)

        The body check runs before the tail is dropped, so moving into the
        cell the tail is about to leave counts as a collision.
        """
        if not self.started:
            return MoveOutcome.NOT_STARTED

        direction = self.direction
        dx, dy = direction.offset
        new_head = board.step(self.head, dx, dy)
        self.last_vacated = None

        if new_head == fruit:
            self._add(new_head)
            self.last_head = new_head
            return MoveOutcome.ATE

        if not board.in_bounds(new_head) or new_head in self._occupied:
            self.last_head = None
            return MoveOutcome.COLLIDED

        self._add(new_head)
        self.last_head = new_head
        self.last_vacated = self._remove()
        return MoveOutcome.MOVED

    def __repr__(self):
        return f"<Snake head={self.head} length={len(self)} direction={self.direction.value}>"
