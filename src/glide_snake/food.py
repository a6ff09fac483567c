"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from glide_snake.occupancy import OccupancyIndex
    from glide_snake.snake import Cell

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places the food item on a random unoccupied cell.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Placement is rejection sampling over the whole board; with the grid
    growth policy keeping the board under 40% full the expected number of
    draws stays small. ``max_attempts`` bounds the sampling loop, after
    which a free cell is picked exhaustively from the occupancy mask.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        clock: Callable[[], float] | None = None,
        max_attempts: int | None = None,
    ) -> None:
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock
        self.max_attempts = max_attempts
        self.spawned_at: float | None = None

    def spawn(self, grid_size: int, occupied: OccupancyIndex) -> Cell | None:
        """Return a free cell on a ``grid_size`` board.

        Returns ``None`` only when every cell is occupied.
        """
        if len(occupied) >= grid_size * grid_size:
            logger.warning("No empty cells available for food spawning.")
            return None

        attempts = 0
        while self.max_attempts is None or attempts < self.max_attempts:
            attempts += 1
            x, y = self.rng.integers(0, grid_size, size=2).tolist()
            if (x, y) not in occupied:
                return self._placed((x, y))

        free_y, free_x = np.nonzero(~occupied.to_mask(grid_size))
        if free_x.size == 0:
            logger.warning("No empty cells available for food spawning.")
            return None
        idx = int(self.rng.integers(free_x.size))
        return self._placed((int(free_x[idx]), int(free_y[idx])))

    def _placed(self, cell: Cell) -> Cell:
        if self.clock is not None:
            self.spawned_at = self.clock()
        return cell
