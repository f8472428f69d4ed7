"""
Game configuration for the minefield.

Holds the validated grid dimensions, mine count and win rule. The engine
rejects invalid values; clamping user input into range is done with
GameConfig.clamped() before a game is created.
"""
from dataclasses import dataclass
from enum import Enum, auto

from .errors import InvalidConfiguration


# ============================================================================
# Constants
# ============================================================================

MIN_SIZE = 2
MAX_SIZE = 70
MIN_MINES = 1


class WinRule(Enum):
    """How the engine decides that a game has been won."""

    SAFE_CELLS_REVEALED = auto()
    ALL_CELLS_MARKED = auto()


# ============================================================================
# Game Configuration
# ============================================================================

@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a single minefield game.

    Attributes:
        rows: Number of rows (2-70).
        columns: Number of columns (2-70).
        mine_count: Mines to place (1 to rows * columns - 1).
        win_rule: Win condition, revealing every safe cell by default.
    """

    rows: int = 9
    columns: int = 9
    mine_count: int = 10
    win_rule: WinRule = WinRule.SAFE_CELLS_REVEALED

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name, value in (("rows", self.rows), ("columns", self.columns)):
            if not MIN_SIZE <= value <= MAX_SIZE:
                raise InvalidConfiguration(
                    f"{name} must be between {MIN_SIZE} and {MAX_SIZE}, "
                    f"got {value}"
                )
        max_mines = self.total_cells - 1
        if not MIN_MINES <= self.mine_count <= max_mines:
            raise InvalidConfiguration(
                f"mine_count must be between {MIN_MINES} and {max_mines}, "
                f"got {self.mine_count}"
            )

    @property
    def total_cells(self) -> int:
        """Number of cells on the grid."""
        return self.rows * self.columns

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.total_cells - self.mine_count

    @classmethod
    def clamped(
        cls,
        rows: int,
        columns: int,
        mine_count: int,
        win_rule: WinRule = WinRule.SAFE_CELLS_REVEALED,
    ) -> "GameConfig":
        """
        Build a configuration with out-of-range values pulled into range.

        Rows and columns are clamped to [2, 70] first, then the mine count
        to [1, rows * columns - 1].
        """
        rows = _clamp(rows, MIN_SIZE, MAX_SIZE)
        columns = _clamp(columns, MIN_SIZE, MAX_SIZE)
        mine_count = _clamp(mine_count, MIN_MINES, rows * columns - 1)
        return cls(rows, columns, mine_count, win_rule)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
