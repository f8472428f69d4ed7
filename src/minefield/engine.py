"""
Minefield engine.

Owns the grid, mine placement, reveal/flag state transitions and
end-of-game evaluation. Cells are addressed by 1-based (row, col)
coordinates; commands return the display deltas a renderer needs.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Iterator, List, Optional, Set, Union

import numpy as np

from .cell import Category, Cell, CellDelta, Coordinate, FlagResult
from .config import GameConfig, WinRule
from .errors import GameNotStarted, OutOfBoundsCoordinate

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    ACTIVE = auto()
    WON = auto()
    LOST = auto()


TERMINAL_STATUSES = (GameStatus.WON, GameStatus.LOST)

NEIGHBOR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, 1),
    (1, 1), (1, 0), (1, -1),
    (0, -1),
)


# ============================================================================
# Coordinate Utilities
# ============================================================================

def coordinate_to_index(coordinate: Coordinate, columns: int) -> int:
    """Convert a 1-based (row, col) pair to its 1-based flat index."""
    row, col = coordinate
    return (row - 1) * columns + col


def index_to_coordinate(index: int, columns: int) -> Coordinate:
    """Convert a 1-based flat index to its 1-based (row, col) pair."""
    row = -(-index // columns)
    col = index % columns or columns
    return row, col


# ============================================================================
# Engine
# ============================================================================

@dataclass
class MinefieldEngine:
    """
    Single-player minefield state machine.

    A game is created with new_game() and mutated in place by reveal()
    and toggle_flag() until it is won or lost. Once the game has ended,
    further commands are ignored and the grid stays queryable.

    Attributes:
        rng: Random source used for mine placement. Anything with a
            randint(a, b) method works, which lets tests script layouts.
            None selects a fresh random.Random.
    """

    rng: Any = field(default=None, repr=False)
    _config: Optional[GameConfig] = None
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _status: GameStatus = GameStatus.NOT_STARTED
    _revealed_count: int = 0
    _flagged_count: int = 0
    _detonated: Optional[Coordinate] = None

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random()

    # ========================================================================
    # Game Creation (Low-level)
    # ========================================================================

    def new_game(
        self,
        rows: Union[int, GameConfig],
        columns: Optional[int] = None,
        mine_count: Optional[int] = None,
        win_rule: WinRule = WinRule.SAFE_CELLS_REVEALED,
    ) -> None:
        """
        Discard any current game and start a new one.

        Either pass the three sizes or a single GameConfig.

        Args:
            rows: Number of rows (2-70), or a complete GameConfig.
            columns: Number of columns (2-70).
            mine_count: Mines to place (1 to rows * columns - 1).
            win_rule: Win condition for this game.

        Raises:
            InvalidConfiguration: If any value is out of range.
            TypeError: If sizes are mixed with a GameConfig or missing.
        """
        if isinstance(rows, GameConfig):
            if columns is not None or mine_count is not None:
                raise TypeError("Pass either a GameConfig or sizes, not both")
            self.start(rows)
            return
        if columns is None or mine_count is None:
            raise TypeError("new_game() needs rows, columns and mine_count")
        self.start(GameConfig(rows, columns, mine_count, win_rule))

    def start(self, config: GameConfig) -> None:
        """Start a new game from an already validated configuration."""
        mine_indexes = self._draw_mine_indexes(config)

        self._config = config
        self._grid = [
            [Cell() for _ in range(config.columns)]
            for _ in range(config.rows)
        ]
        for index in mine_indexes:
            row, col = index_to_coordinate(index, config.columns)
            self._cell(row, col).is_mine = True
        self._calculate_neighbor_mines()

        self._status = GameStatus.ACTIVE
        self._revealed_count = 0
        self._flagged_count = 0
        self._detonated = None

        logger.debug(
            "New %dx%d game with %d mines (%s)",
            config.rows, config.columns, config.mine_count,
            config.win_rule.name,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Mine indexes: %s", sorted(mine_indexes))

    def restart(self) -> None:
        """Start a new game with the current configuration."""
        self.start(self._require_config())

    def _draw_mine_indexes(self, config: GameConfig) -> Set[int]:
        """Pick distinct flat indexes uniformly by rejection sampling."""
        mine_indexes: Set[int] = set()
        while len(mine_indexes) < config.mine_count:
            mine_indexes.add(self.rng.randint(1, config.total_cells))
        return mine_indexes

    def _calculate_neighbor_mines(self) -> None:
        """Calculate neighbor mine counts for all cells."""
        for row, col in self.coordinates():
            self._cell(row, col).neighbor_mines = sum(
                1 for r, c in self._neighbors(row, col)
                if self._cell(r, c).is_mine
            )

    # ========================================================================
    # Grid Utilities (Low-level)
    # ========================================================================

    def _cell(self, row: int, col: int) -> Cell:
        return self._grid[row - 1][col - 1]

    def _in_bounds(self, row: int, col: int) -> bool:
        config = self._config
        return 1 <= row <= config.rows and 1 <= col <= config.columns

    def _check_bounds(self, row: int, col: int) -> None:
        config = self._require_config()
        if not self._in_bounds(row, col):
            raise OutOfBoundsCoordinate(row, col, config.rows, config.columns)

    def _require_config(self) -> GameConfig:
        if self._config is None:
            raise GameNotStarted("Call new_game() before issuing commands")
        return self._config

    def _neighbors(self, row: int, col: int) -> List[Coordinate]:
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self._in_bounds(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def coordinates(self) -> Iterator[Coordinate]:
        """Yield every coordinate in flat index order."""
        config = self._require_config()
        for row in range(1, config.rows + 1):
            for col in range(1, config.columns + 1):
                yield row, col

    def neighbors(self, row: int, col: int) -> List[Coordinate]:
        """
        Get the in-bounds Moore neighbors of a cell.

        Corner cells have 3 neighbors, edge cells 5 and interior cells 8.
        """
        self._check_bounds(row, col)
        return self._neighbors(row, col)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> List[CellDelta]:
        """
        Reveal a cell.

        Empty cells cascade into their neighbors, stopping at numbered
        cells and never revealing flagged ones. Revealing a mine loses
        the game; revealing the last safe cell wins it. In both cases the
        rest of the board is resolved and included in the result.

        Args:
            row: 1-based row.
            col: 1-based column.

        Returns:
            Deltas for every cell whose displayed category changed. Empty
            if the cell is revealed, flagged, or the game is over.

        Raises:
            OutOfBoundsCoordinate: If (row, col) is not on the grid.
            GameNotStarted: If no game has been created.
        """
        self._check_bounds(row, col)
        if self._status != GameStatus.ACTIVE:
            return []

        cell = self._cell(row, col)
        if not cell.is_hidden:
            return []

        if cell.is_mine:
            cell.reveal()
            self._revealed_count += 1
            self._detonated = (row, col)
            deltas = [CellDelta((row, col), Category.MINE)]
            self._finish(GameStatus.LOST, deltas)
            return deltas

        deltas = self._cascade(row, col)
        if self._is_won():
            self._finish(GameStatus.WON, deltas)
        return deltas

    def _cascade(self, row: int, col: int) -> List[CellDelta]:
        """Reveal a safe cell and flood outward through empty cells."""
        deltas = []
        frontier = [(row, col)]
        while frontier:
            r, c = frontier.pop()
            cell = self._cell(r, c)
            if not cell.reveal():
                continue
            self._revealed_count += 1
            deltas.append(cell.to_delta((r, c)))
            if cell.neighbor_mines == 0:
                frontier.extend(
                    (nr, nc) for nr, nc in self._neighbors(r, c)
                    if self._cell(nr, nc).is_hidden
                )
        return deltas

    def toggle_flag(self, row: int, col: int) -> FlagResult:
        """
        Toggle the flag on an unrevealed cell.

        Flagging never reveals a cell. Only under WinRule.ALL_CELLS_MARKED
        can placing a flag end the game; the resolved board is then
        returned in FlagResult.resolved.

        Raises:
            OutOfBoundsCoordinate: If (row, col) is not on the grid.
            GameNotStarted: If no game has been created.
        """
        self._check_bounds(row, col)
        cell = self._cell(row, col)
        if self._status != GameStatus.ACTIVE or not cell.toggle_flag():
            return FlagResult((row, col), cell.is_flagged)

        self._flagged_count += 1 if cell.is_flagged else -1

        resolved: List[CellDelta] = []
        if (
            cell.is_flagged
            and self._config.win_rule is WinRule.ALL_CELLS_MARKED
            and self._is_won()
        ):
            self._finish(GameStatus.WON, resolved)
        return FlagResult((row, col), cell.is_flagged, tuple(resolved))

    def _is_won(self) -> bool:
        config = self._config
        if config.win_rule is WinRule.ALL_CELLS_MARKED:
            marked = self._revealed_count + self._flagged_count
            return marked == config.total_cells
        return self._revealed_count == config.safe_cells

    def _finish(self, status: GameStatus, deltas: List[CellDelta]) -> None:
        """Enter a terminal status and append the resolved board."""
        self._status = status
        for row, col in self.coordinates():
            cell = self._cell(row, col)
            if not cell.is_revealed:
                deltas.append(cell.to_delta((row, col), game_over=True))

        if status is GameStatus.LOST:
            logger.info(
                "Game lost at %s after %d reveals",
                self._detonated, self._revealed_count,
            )
        else:
            logger.info(
                "Game won with %d reveals and %d flags",
                self._revealed_count, self._flagged_count,
            )

    # ========================================================================
    # Display Categories
    # ========================================================================

    def category_at(self, row: int, col: int) -> CellDelta:
        """Get the category a cell should currently be displayed as."""
        self._check_bounds(row, col)
        return self._cell(row, col).to_delta((row, col), self.is_over)

    def snapshot(self) -> List[CellDelta]:
        """Get the current category of every cell in flat index order."""
        return [self.category_at(row, col) for row, col in self.coordinates()]

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_over(self) -> bool:
        """Check if the game has been won or lost."""
        return self._status in TERMINAL_STATUSES

    @property
    def config(self) -> Optional[GameConfig]:
        """Configuration of the current game, None before the first game."""
        return self._config

    @property
    def rows(self) -> int:
        return self._require_config().rows

    @property
    def columns(self) -> int:
        return self._require_config().columns

    @property
    def mine_count(self) -> int:
        return self._require_config().mine_count

    @property
    def revealed_count(self) -> int:
        """Number of cells revealed so far."""
        return self._revealed_count

    @property
    def flagged_count(self) -> int:
        """Number of currently flagged cells."""
        return self._flagged_count

    @property
    def remaining_mines(self) -> int:
        """Mines minus flags; negative when the player over-flags."""
        return self.mine_count - self._flagged_count

    @property
    def detonated(self) -> Optional[Coordinate]:
        """The mine that lost the game, if any."""
        return self._detonated

    def cell(self, row: int, col: int) -> Cell:
        """Get the cell at a 1-based coordinate."""
        self._check_bounds(row, col)
        return self._cell(row, col)

    def mine_coordinates(self) -> List[Coordinate]:
        """Get every mine position in flat index order."""
        return [
            (row, col) for row, col in self.coordinates()
            if self._cell(row, col).is_mine
        ]

    def hidden_coordinates(self) -> List[Coordinate]:
        """Get positions that can still be revealed (hidden, unflagged)."""
        return [
            (row, col) for row, col in self.coordinates()
            if self._cell(row, col).is_hidden
        ]

    def observation(self) -> np.ndarray:
        """
        Get grid state as a numpy array.

        Returns:
            2D array of shape (rows, columns) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with neighbor count
                9 = revealed mine
        """
        config = self._require_config()
        obs = np.zeros((config.rows, config.columns), dtype=np.int8)
        for row, col in self.coordinates():
            obs[row - 1, col - 1] = self._cell(row, col).to_observation()
        return obs
