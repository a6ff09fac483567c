"""Step-based game engine composing snake, input queue, food and board growth."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import numpy as np

from glide_snake.config import GameConfig
from glide_snake.direction_queue import DirectionQueue
from glide_snake.food import FoodSpawner
from glide_snake.growth import GridGrowthController
from glide_snake.occupancy import OccupancyIndex
from glide_snake.snake import Cell, Direction, Snake
from glide_snake.state import EatEffect, Phase, PhaseEvent, RunState, next_phase

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    """Default engine clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


class GameEngine:
    """Single-snake, step-based game engine.

    The engine owns the :class:`RunState` of the current run. Each call to
    :meth:`step` advances the game by one tick and returns the updated
    state dictionary. Ticks only happen while the run is PLAYING; the
    scheduler decides when.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
        clock: Callable[[], float] | None = None,
        on_eat: Callable[[EatEffect], None] | None = None,
        on_collision: Callable[[RunState], None] | None = None,
        food_max_attempts: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.rng = np.random.default_rng(seed if seed is not None else self.config.seed)
        self.clock = clock if clock is not None else monotonic_ms
        self.on_eat = on_eat
        self.on_collision = on_collision
        self.food_spawner = FoodSpawner(
            rng=self.rng, clock=self.clock, max_attempts=food_max_attempts,
        )
        self.growth = GridGrowthController(self.config)
        self.state = self.new_run(Phase.WELCOME)

    # --- convenience accessors -------------------------------------------

    @property
    def snake(self) -> Snake:
        return self.state.snake

    @property
    def occupancy(self) -> OccupancyIndex:
        return self.state.occupancy

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def grid_size(self) -> int:
        return self.state.grid_size

    @property
    def food(self) -> Cell | None:
        return self.state.food

    @property
    def game_over(self) -> bool:
        return self.state.phase is Phase.GAME_OVER

    # --- lifecycle --------------------------------------------------------

    def new_run(self, phase: Phase = Phase.PLAYING) -> RunState:
        """Discard the current run and build a fresh one in *phase*.

        The idle welcome board uses ``welcome_grid_size``; real runs start
        at ``initial_grid_size``.
        """
        cfg = self.config
        grid_size = (
            cfg.welcome_grid_size if phase is Phase.WELCOME else cfg.initial_grid_size
        )
        snake = Snake(cfg.initial_body)
        state = RunState(
            snake=snake,
            directions=DirectionQueue(
                Direction(cfg.initial_direction), capacity=cfg.queue_capacity,
            ),
            occupancy=OccupancyIndex(snake.body),
            grid_size=grid_size,
            tick_ms=cfg.tick_ms_for(grid_size),
            phase=phase,
            run_started_at=self.clock(),
        )
        state.food = self.food_spawner.spawn(grid_size, state.occupancy)
        # No spawn flourish on the idle board.
        if phase is not Phase.WELCOME and state.food is not None:
            state.food_spawned_at = self.food_spawner.spawned_at
        self.state = state
        logger.info("New run in phase %s on a %dx%d grid.", phase.value, grid_size, grid_size)
        return state

    def queue_direction(self, direction: object) -> bool:
        """Buffer a player turn. Unknown or illegal input is ignored."""
        return self.state.directions.queue(Direction.parse(direction))

    # --- simulation -------------------------------------------------------

    def is_wall_collision(self, cell: Cell) -> bool:
        x, y = cell
        size = self.state.grid_size
        return x < 0 or y < 0 or x >= size or y >= size

    def is_self_collision(self, cell: Cell, will_eat: bool) -> bool:
        """Check *cell* against the body.

        Moving onto the current tail is legal unless the snake is eating,
        since the tail only vacates on a non-eating tick.
        """
        if not will_eat and cell == self.state.snake.tail:
            return False
        return cell in self.state.occupancy

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict.
        """
        state = self.state
        if state.phase is not Phase.PLAYING:
            return self.get_state()

        state.ate_last_tick = False
        direction = state.directions.consume()
        next_head = state.snake.next_head(direction)
        will_eat = next_head == state.food

        if self.is_wall_collision(next_head) or self.is_self_collision(next_head, will_eat):
            self._end_run()
            return self.get_state()

        state.snake.push_head(next_head)
        state.occupancy.add(next_head)

        if will_eat:
            state.score += 1
            self.growth.maybe_grow(state)
            self._emit_eat_effect(state.snake.head)
            state.food = self.food_spawner.spawn(state.grid_size, state.occupancy)
            if state.food is not None:
                state.food_spawned_at = self.food_spawner.spawned_at
            state.ate_last_tick = True
        else:
            vacated = state.snake.pop_tail()
            # The head may have just moved into the vacated tail cell.
            if vacated != next_head:
                state.occupancy.discard(vacated)

        state.ticks += 1
        return self.get_state()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        state = self.state
        return {
            "tick": state.ticks,
            "phase": state.phase.value,
            "score": state.score,
            "game_over": state.phase is Phase.GAME_OVER,
            "grid_size": state.grid_size,
            "tick_ms": state.tick_ms,
            "snake": state.snake.to_dict(),
            "direction": list(state.directions.current.value),
            "food": list(state.food) if state.food is not None else None,
            "ate_last_tick": state.ate_last_tick,
        }

    def _emit_eat_effect(self, cell: Cell) -> None:
        """Record the eat effect at *cell*.

        Called with the head after any growth shift, so the effect lands on
        the eaten food in the coordinates the board is now drawn in. The
        pre-growth food cell would sit one growth offset off the snake.
        """
        tile = self.config.tile_size
        effect = EatEffect(
            cell=cell,
            world_x=cell[0] * tile + tile / 2,
            world_y=cell[1] * tile + tile / 2,
            started_at=self.clock(),
        )
        self.state.eat_effect = effect
        if self.on_eat is not None:
            self.on_eat(effect)

    def _end_run(self) -> None:
        """Freeze the snake and move the run to GAME_OVER."""
        state = self.state
        state.phase = next_phase(state.phase, PhaseEvent.COLLISION)
        state.ended_at = self.clock()
        state.shake_until = state.ended_at + self.config.shake_ms
        logger.info(
            "Snake died after %d ticks with score %d (%.0fms).",
            state.ticks, state.score, state.duration_ms,
        )
        if self.on_collision is not None:
            self.on_collision(state)
