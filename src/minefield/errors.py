"""
Exception types raised by the minefield engine.

Commands issued after the game has ended are not errors; they are
silently ignored by the engine.
"""


class MinefieldError(Exception):
    """Base class for all minefield errors."""


class InvalidConfiguration(MinefieldError, ValueError):
    """Rows, columns or mine count outside the allowed ranges."""


class OutOfBoundsCoordinate(MinefieldError, IndexError):
    """A (row, col) pair that does not address a cell on the grid."""

    def __init__(self, row: int, col: int, rows: int, columns: int) -> None:
        super().__init__(
            f"Coordinate ({row}, {col}) is outside the {rows}x{columns} grid"
        )
        self.row = row
        self.col = col


class GameNotStarted(MinefieldError, RuntimeError):
    """A command was issued before any game was created."""
