"""
Board geometry - dimensions, bounds checks, wrapping and free-cell draws.
"""

import random
from typing import AbstractSet, NamedTuple, Optional

from .errors import CellOutOfBoundsError, ConfigurationError


class Cell(NamedTuple):
    """A grid coordinate. x is the column, y is the row (row 0 at the top)."""

    x: int
    y: int


class Board:
    """
    A fixed rows x cols grid.

    Attributes:
        rows, cols: board dimensions, fixed at construction
        wrap_enabled: whether coordinates leaving one edge re-enter at the
            opposite edge instead of going out of bounds
    """

    def __init__(self, rows: int, cols: int, wrap_enabled: bool = False,
                 rng: Optional[random.Random] = None):
        if rows <= 0 or cols <= 0:
            raise ConfigurationError(f"Board dimensions must be positive, got {cols}x{rows}.")
        self._rows = rows
        self._cols = cols
        self._wrap_enabled = wrap_enabled
        self._rng = rng or random.Random()

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def wrap_enabled(self) -> bool:
        return self._wrap_enabled

    @property
    def size(self) -> int:
        return self._rows * self._cols

    @property
    def center(self) -> Cell:
        return Cell(self._cols // 2, self._rows // 2)

    def in_bounds(self, cell) -> bool:
        x, y = cell
        return 0 <= x < self._cols and 0 <= y < self._rows

    def require_in_bounds(self, cell) -> Cell:
        """Return the cell as a Cell, raising CellOutOfBoundsError if it is off the grid."""
        if not self.in_bounds(cell):
            raise CellOutOfBoundsError(cell, self._rows, self._cols)
        return Cell(*cell)

    def wrap(self, coord: int, axis_length: int) -> int:
        """
        Wrap a coordinate onto [0, axis_length) when wrapping is enabled.

        With wrapping disabled the coordinate is returned unchanged, so an
        out-of-range value stays out of range and shows up as a wall hit.
        """
        if self._wrap_enabled:
            return coord % axis_length
        return coord

    def step(self, cell: Cell, dx: int, dy: int) -> Cell:
        """Apply an offset to a cell, passing each axis through wrap()."""
        return Cell(self.wrap(cell.x + dx, self._cols), self.wrap(cell.y + dy, self._rows))

    def random_free_cell(self, occupied: AbstractSet) -> Cell:
        """
        Return a uniformly random cell that is not in `occupied`.

        Draws are repeated until a free cell comes up. The board is expected
        to have free cells; a completely full board is never passed in.
        """
        while True:
            cell = Cell(self._rng.randrange(self._cols), self._rng.randrange(self._rows))
            if cell not in occupied:
                return cell

    def __repr__(self):
        return f"<Board {self._cols}x{self._rows} wrap={self._wrap_enabled}>"
