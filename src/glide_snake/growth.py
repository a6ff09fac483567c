"""Board expansion policy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from glide_snake.config import GameConfig
    from glide_snake.state import RunState

logger = logging.getLogger(__name__)


class GridGrowthController:
    """Grows the board once the snake covers too much of it.

    Cells keep a fixed on-screen size while the logical board gets bigger,
    so the tick duration shrinks in proportion to keep the snake crossing
    the board at the same visual speed.
    """

    def __init__(self, config: GameConfig) -> None:
        self.config = config

    def should_grow(self, length: int, grid_size: int) -> bool:
        cfg = self.config
        if grid_size >= cfg.max_grid_size:
            return False
        return length >= cfg.growth_density * grid_size ** 2

    def maybe_grow(self, state: RunState) -> bool:
        """Grow *state*'s board by one step if warranted. Returns True if it grew."""
        if not self.should_grow(len(state.snake), state.grid_size):
            return False

        cfg = self.config
        offset = cfg.grid_growth_step // 2
        state.grid_size += cfg.grid_growth_step
        state.tick_ms = cfg.tick_ms_for(state.grid_size)
        state.snake.shift(offset, offset)
        state.occupancy.rebuild(state.snake.body)
        logger.info(
            "Grid grew to %dx%d (length=%d, tick=%.1fms).",
            state.grid_size, state.grid_size, len(state.snake), state.tick_ms,
        )
        return True
