"""
Exceptions raised by the snake engine.
"""


class ConfigurationError(ValueError):
    """Invalid session configuration; raised before a session can start."""


class CellOutOfBoundsError(ValueError):
    """A cell outside the configured grid was used to query game state."""

    def __init__(self, cell, rows: int, cols: int):
        self.cell = cell
        self.rows = rows
        self.cols = cols
        super().__init__(f"Cell {tuple(cell)} is outside the {cols}x{rows} board.")
