"""
Text rendering and elapsed-time tracking for terminal front ends.

The engine knows nothing about time; GameClock is started and stopped
by watching the engine's status.
"""
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .cell import Category, CellDelta
from .engine import GameStatus, MinefieldEngine


# ============================================================================
# Constants
# ============================================================================

SYMBOLS: Dict[Category, str] = {
    Category.HIDDEN: ".",
    Category.FLAGGED: "F",
    Category.EMPTY: " ",
    Category.MINE: "*",
    Category.MINE_EXPOSED: "x",
    Category.FLAG_INCORRECT: "!",
    Category.FLAG_CORRECT: "+",
}

LOSS_MESSAGE = "You have tapped a mine, the Game is Over."
WIN_MESSAGE = (
    "You've revealed all cells without tapping a single mine in {time}! "
    "Congratulations!"
)


# ============================================================================
# Board Rendering
# ============================================================================

def symbol_for(delta: CellDelta) -> str:
    """Get the single character drawn for a cell."""
    if delta.category is Category.DANGER:
        return str(delta.count)
    return SYMBOLS[delta.category]


def render_board(engine: MinefieldEngine, with_headers: bool = False) -> str:
    """
    Render the board as a block of text, one line per row.

    Args:
        engine: Engine with a started game.
        with_headers: Prefix rows and columns with their 1-based numbers.

    Returns:
        Multi-line string.
    """
    lines: List[str] = []
    width = len(str(max(engine.rows, engine.columns)))

    if with_headers:
        header = " ".join(
            str(col).rjust(width) for col in range(1, engine.columns + 1)
        )
        lines.append(" " * (width + 1) + header)

    for row in range(1, engine.rows + 1):
        cells = " ".join(
            symbol_for(engine.category_at(row, col)).rjust(width)
            for col in range(1, engine.columns + 1)
        )
        if with_headers:
            cells = str(row).rjust(width) + " " + cells
        lines.append(cells)

    return "\n".join(lines)


def end_message(engine: MinefieldEngine, clock: "GameClock") -> Optional[str]:
    """Get the message shown when a game ends, or None while playing."""
    if engine.status is GameStatus.LOST:
        return LOSS_MESSAGE
    if engine.status is GameStatus.WON:
        return WIN_MESSAGE.format(time=format_elapsed(clock.elapsed))
    return None


# ============================================================================
# Clock
# ============================================================================

def format_elapsed(seconds: float) -> str:
    """Format seconds as MM:SS with zero padding."""
    minutes, seconds = divmod(int(seconds), 60)
    return f"{minutes:02d}:{seconds:02d}"


@dataclass
class GameClock:
    """
    Elapsed-time clock that runs while a game is active.

    Attributes:
        time_source: Returns the current time in seconds.
    """

    time_source: Callable[[], float] = field(default=time.monotonic, repr=False)
    _started_at: Optional[float] = None
    _stopped_at: Optional[float] = None

    def start(self) -> None:
        """Start (or restart) the clock from zero."""
        self._started_at = self.time_source()
        self._stopped_at = None

    def stop(self) -> None:
        """Freeze the clock at its current reading."""
        if self.running:
            self._stopped_at = self.time_source()

    def sync(self, status: GameStatus) -> None:
        """Stop the clock once the game has left the active state."""
        if status is not GameStatus.ACTIVE:
            self.stop()

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    @property
    def elapsed(self) -> float:
        """Seconds between start and stop (or now, while running)."""
        if self._started_at is None:
            return 0.0
        end = self._stopped_at
        if end is None:
            end = self.time_source()
        return end - self._started_at
