"""Gameplay configuration for the snake simulation."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board, timing and effect constants for a run.

    Supports JSON serialization so a tuned setup can be reproduced.
    """

    # Board
    initial_grid_size: int = 8
    welcome_grid_size: int = 10
    base_grid_size: int = 15
    max_grid_size: int = 36
    grid_growth_step: int = 2
    growth_density: float = 0.4

    # Timing
    base_tick_ms: float = 150.0
    queue_capacity: int = 2

    # Starting snake
    initial_body: tuple[tuple[int, int], ...] = ((3, 3), (2, 3), (1, 3))
    initial_direction: tuple[int, int] = (1, 0)

    # Effects (milliseconds, world units)
    tile_size: int = 30
    food_fx_ms: float = 500.0
    eat_fx_ms: float = 360.0
    shake_ms: float = 150.0

    highscore_limit: int = 5
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.initial_grid_size < 4 or self.welcome_grid_size < 4:
            raise ValueError("Grid sizes must be at least 4.")
        if self.max_grid_size < max(self.initial_grid_size, self.welcome_grid_size):
            raise ValueError("max_grid_size must not be below the starting sizes.")
        if self.grid_growth_step <= 0 or self.grid_growth_step % 2:
            raise ValueError("grid_growth_step must be a positive even number.")
        for size in (self.initial_grid_size, self.welcome_grid_size):
            if (self.max_grid_size - size) % self.grid_growth_step:
                raise ValueError(
                    "max_grid_size must be reachable from the starting sizes "
                    "in whole grid_growth_step increments.",
                )
        if not 0.0 < self.growth_density <= 1.0:
            raise ValueError("growth_density must be in (0, 1].")
        if self.base_tick_ms <= 0 or self.base_grid_size <= 0:
            raise ValueError("base_tick_ms and base_grid_size must be positive.")
        if self.queue_capacity < 1:
            raise ValueError("queue_capacity must be at least 1.")
        if self.initial_direction not in {(1, 0), (-1, 0), (0, 1), (0, -1)}:
            raise ValueError("initial_direction must be a unit vector.")
        if self.highscore_limit < 1:
            raise ValueError("highscore_limit must be at least 1.")

        body = self.initial_body
        if len(body) < 3:
            raise ValueError("initial_body must have at least 3 cells.")
        if len(set(body)) != len(body):
            raise ValueError("initial_body cells must be distinct.")
        smallest = min(self.initial_grid_size, self.welcome_grid_size)
        for x, y in body:
            if not (0 <= x < smallest and 0 <= y < smallest):
                raise ValueError(
                    f"initial_body cell {(x, y)} does not fit a "
                    f"{smallest}x{smallest} grid.",
                )

    def tick_ms_for(self, grid_size: int) -> float:
        """Tick duration that keeps on-screen speed constant at *grid_size*."""
        return self.base_tick_ms * (self.base_grid_size / grid_size)

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if "initial_body" in raw:
            raw["initial_body"] = tuple(tuple(cell) for cell in raw["initial_body"])
        if "initial_direction" in raw:
            raw["initial_direction"] = tuple(raw["initial_direction"])
        return cls(**raw)
