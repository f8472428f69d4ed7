"""
Cell module for the minefield.

Represents individual cells on the grid with their play state
(hidden/revealed/flagged) and content (mine/neighbor count), plus the
display categories and result records handed to renderers.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

Coordinate = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible play states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


class Category(Enum):
    """Display categories a renderer must draw distinctly."""

    HIDDEN = auto()
    FLAGGED = auto()
    EMPTY = auto()
    DANGER = auto()
    MINE = auto()
    MINE_EXPOSED = auto()
    FLAG_INCORRECT = auto()
    FLAG_CORRECT = auto()


# ============================================================================
# Result Records
# ============================================================================

@dataclass(frozen=True)
class CellDelta:
    """
    A cell whose displayed category changed.

    Attributes:
        coordinate: 1-based (row, col) of the cell.
        category: New display category.
        count: Neighbor mine count for DANGER cells, 0 otherwise.
    """

    coordinate: Coordinate
    category: Category
    count: int = 0


@dataclass(frozen=True)
class FlagResult:
    """Outcome of a flag toggle."""

    coordinate: Coordinate
    flagged: bool
    resolved: Tuple[CellDelta, ...] = ()


# ============================================================================
# Cell Data Class
# ============================================================================

_FLAG_TOGGLE = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.HIDDEN,
}

_OBSERVATION_CODES = {
    Category.HIDDEN: -1,
    Category.FLAGGED: -2,
    Category.MINE: 9,
}


@dataclass
class Cell:
    """
    One square of the grid: its content and what the player did to it.

    Attributes:
        is_mine: Whether this cell holds a mine.
        neighbor_mines: Mines among the neighboring cells (0-8).
        state: Hidden, revealed or flagged.
    """

    is_mine: bool = False
    neighbor_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """Uncover a hidden cell. Flagged or uncovered cells return False."""
        if not self.is_hidden:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """Swap between hidden and flagged. Uncovered cells return False."""
        if self.state not in _FLAG_TOGGLE:
            return False
        self.state = _FLAG_TOGGLE[self.state]
        return True

    @property
    def is_hidden(self) -> bool:
        """Hidden and unflagged."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    # ========================================================================
    # Display
    # ========================================================================

    def content_category(self) -> Category:
        """What the cell holds, regardless of whether it is covered."""
        if self.is_mine:
            return Category.MINE
        if self.neighbor_mines:
            return Category.DANGER
        return Category.EMPTY

    def category(self, game_over: bool = False) -> Category:
        """
        Get the category this cell is drawn as.

        While the game runs a covered cell shows only HIDDEN or FLAGGED.
        Once it is over, covered cells resolve: flags are marked correct
        or incorrect, unflagged mines become MINE_EXPOSED and safe cells
        show their content. An uncovered cell always shows its content.

        Args:
            game_over: Whether the game has been won or lost.
        """
        if self.is_revealed:
            return self.content_category()
        if not game_over:
            return Category.FLAGGED if self.is_flagged else Category.HIDDEN
        if self.is_flagged:
            if self.is_mine:
                return Category.FLAG_CORRECT
            return Category.FLAG_INCORRECT
        if self.is_mine:
            return Category.MINE_EXPOSED
        return self.content_category()

    def to_delta(
        self, coordinate: Coordinate, game_over: bool = False
    ) -> CellDelta:
        """Describe this cell at coordinate; DANGER carries the count."""
        category = self.category(game_over)
        if category is Category.DANGER:
            return CellDelta(coordinate, category, self.neighbor_mines)
        return CellDelta(coordinate, category)

    def to_observation(self) -> int:
        """
        Convert cell to a numeric observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with neighbor mine count
            9: Revealed mine
        """
        return _OBSERVATION_CODES.get(self.category(), self.neighbor_mines)
