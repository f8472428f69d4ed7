"""
Gymnasium environment wrapper for the minefield engine.

Provides a standard RL interface over MinefieldEngine. Actions are
0-based flat indexes; action a addresses the cell at 1-based flat
index a + 1.
"""
import random
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import GameConfig
from .engine import (
    GameStatus,
    MinefieldEngine,
    coordinate_to_index,
    index_to_coordinate,
)
from .render import render_board


# ============================================================================
# Rewards
# ============================================================================

REWARD_SAFE = 1.0
REWARD_WIN = 10.0
REWARD_MINE = -10.0
REWARD_INVALID = -0.1


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for the minefield.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with neighbor mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size rows * columns.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Game configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.engine = MinefieldEngine()
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.columns),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.engine.rng = random.Random(seed)
        self.engine.start(self.config)
        self._steps = 0

        return self.engine.observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal the cell addressed by an action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self.action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)

        observation = self.engine.observation()
        terminated = self.engine.is_over
        info = self._get_info()

        return observation, reward, terminated, False, info

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert a 0-based action to a 1-based (row, col) position."""
        return index_to_coordinate(int(action) + 1, self.config.columns)

    def position_to_action(self, row: int, col: int) -> int:
        """Convert a 1-based (row, col) position to a 0-based action."""
        return coordinate_to_index((row, col), self.config.columns) - 1

    def _calculate_reward(self, row: int, col: int) -> float:
        """Perform the reveal and score its outcome."""
        if not self.engine.cell(row, col).is_hidden:
            return REWARD_INVALID

        self.engine.reveal(row, col)

        if self.engine.status is GameStatus.WON:
            return REWARD_WIN
        if self.engine.status is GameStatus.LOST:
            return REWARD_MINE
        return REWARD_SAFE

    def _get_info(self) -> Dict[str, Any]:
        return {
            "steps": self._steps,
            "revealed": self.engine.revealed_count,
            "total_safe": self.config.safe_cells,
            "game_state": self.engine.status.name,
            "valid_actions": len(self.engine.hidden_coordinates()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.engine)
        if self.render_mode == "human":
            print(render_board(self.engine))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.engine.hidden_coordinates():
            mask[self.position_to_action(row, col)] = True
        return mask
