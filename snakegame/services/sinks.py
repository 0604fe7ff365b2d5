"""
Render and score sinks.

The engine reports cell changes as (Cell, CellState) events and fruit
consumption as a single increment() call. Sinks must apply events in the
order they arrive; they are called from the tick thread.
"""

import logging
import threading
from typing import List, Tuple

from ..domain.board import Cell
from ..domain.constants import CellState
from ..domain.errors import CellOutOfBoundsError

logger = logging.getLogger(__name__)


class RenderSink:
    """Base class/interface for anything that draws the board."""

    def update_cell(self, cell: Cell, state: CellState) -> None:
        """
        Record that a cell changed state.

        Args:
            cell: the cell that changed
            state: one of EMPTY, SNAKE, FRUIT
        """
        raise NotImplementedError


class RecordingRenderSink(RenderSink):
    """Keeps every event in emission order. Useful for replays and tests."""

    def __init__(self):
        self.events: List[Tuple[Cell, CellState]] = []

    def update_cell(self, cell: Cell, state: CellState) -> None:
        self.events.append((cell, state))

    def clear(self) -> None:
        self.events.clear()


class BoardView(RenderSink):
    """
    A text view of the board rebuilt purely from render events.

    The grid starts EMPTY and only changes through update_cell(), so it shows
    exactly what a pixel-based UI would show after applying the same events.
    """

    _SYMBOLS = {
        CellState.EMPTY: '.',
        CellState.SNAKE: 'S',
        CellState.FRUIT: 'F',
    }

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self._grid = [[CellState.EMPTY for _ in range(cols)] for _ in range(rows)]
        self._lock = threading.Lock()

    def update_cell(self, cell: Cell, state: CellState) -> None:
        x, y = cell
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            raise CellOutOfBoundsError(cell, self.rows, self.cols)
        with self._lock:
            self._grid[y][x] = CellState(state)

    def state_at(self, cell) -> CellState:
        x, y = cell
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            raise CellOutOfBoundsError(cell, self.rows, self.cols)
        with self._lock:
            return self._grid[y][x]

    def render(self) -> str:
        with self._lock:
            lines = [
                ' '.join(self._SYMBOLS[state] for state in row)
                for row in self._grid
            ]
        return "\n".join(lines)


class ScoreSink:
    """Base class/interface for score displays."""

    def increment(self) -> None:
        raise NotImplementedError


class ScoreBoard(ScoreSink):
    """Counts fruits eaten."""

    def __init__(self, initial: int = 0):
        self.score = initial

    def increment(self) -> None:
        self.score += 1
        logger.debug(f"Score: {self.score}")

    def __str__(self):
        return f"Score: {self.score}"
