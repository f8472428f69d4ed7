"""
Minefield game package.

Provides the minefield engine (grid, mine placement, reveal cascade,
flags, win/loss), its configuration and error types, a text renderer
and a gymnasium environment.
"""
from .cell import Category, Cell, CellDelta, CellState, Coordinate, FlagResult
from .config import MAX_SIZE, MIN_SIZE, GameConfig, WinRule
from .engine import (
    GameStatus,
    MinefieldEngine,
    coordinate_to_index,
    index_to_coordinate,
)
from .environment import MinefieldEnv
from .errors import (
    GameNotStarted,
    InvalidConfiguration,
    MinefieldError,
    OutOfBoundsCoordinate,
)
from .render import GameClock, format_elapsed, render_board

__all__ = [
    "Category",
    "Cell",
    "CellDelta",
    "CellState",
    "Coordinate",
    "FlagResult",
    "GameConfig",
    "WinRule",
    "MIN_SIZE",
    "MAX_SIZE",
    "GameStatus",
    "MinefieldEngine",
    "coordinate_to_index",
    "index_to_coordinate",
    "MinefieldEnv",
    "MinefieldError",
    "InvalidConfiguration",
    "OutOfBoundsCoordinate",
    "GameNotStarted",
    "GameClock",
    "format_elapsed",
    "render_board",
]
