"""
Pytest configuration and shared fixtures.
"""
import pytest
import random
import sys
from pathlib import Path
from typing import Callable, Iterable

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Cell, GameConfig, MinefieldEngine, WinRule


# ============================================================================
# Scripted Randomness
# ============================================================================

class ScriptedRng:
    """Stand-in random source that returns a fixed sequence of indexes."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = iter(values)
        self.calls = 0

    def randint(self, low: int, high: int) -> int:
        value = next(self._values)
        assert low <= value <= high
        self.calls += 1
        return value


# Mines filling column 3 of a 5x5 grid: (1,3), (2,3), ..., (5,3)
WALL_MINES = (3, 8, 13, 18, 23)


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def make_engine() -> Callable[..., MinefieldEngine]:
    """Factory for engines with a known mine layout."""
    def factory(
        rows: int,
        columns: int,
        mine_indexes: Iterable[int],
        win_rule: WinRule = WinRule.SAFE_CELLS_REVEALED,
    ) -> MinefieldEngine:
        mine_indexes = list(mine_indexes)
        engine = MinefieldEngine(rng=ScriptedRng(mine_indexes))
        engine.new_game(rows, columns, len(set(mine_indexes)), win_rule)
        return engine
    return factory


@pytest.fixture
def wall_engine(make_engine) -> MinefieldEngine:
    """5x5 engine whose middle column is all mines."""
    return make_engine(5, 5, WALL_MINES)


@pytest.fixture
def corner_engine(make_engine) -> MinefieldEngine:
    """2x2 engine with a single mine at (1, 1)."""
    return make_engine(2, 2, [1])


@pytest.fixture
def random_engine() -> MinefieldEngine:
    """Seeded 5x5 engine with 7 mines."""
    engine = MinefieldEngine(rng=random.Random(1234))
    engine.new_game(5, 5, 7)
    return engine


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> GameConfig:
    """Create a valid game configuration."""
    return GameConfig(9, 9, 10)


@pytest.fixture
def wall_config() -> GameConfig:
    """Configuration matching the wall layout."""
    return GameConfig(5, 5, len(WALL_MINES))


@pytest.fixture
def scripted_rng() -> Callable[[Iterable[int]], ScriptedRng]:
    """Factory for scripted random sources."""
    return ScriptedRng


@pytest.fixture
def wall_mines() -> tuple:
    """Flat indexes of the wall layout's mines."""
    return WALL_MINES
