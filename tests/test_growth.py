"""Tests for the GridGrowthController."""

from glide_snake.config import GameConfig
from glide_snake.direction_queue import DirectionQueue
from glide_snake.growth import GridGrowthController
from glide_snake.occupancy import OccupancyIndex
from glide_snake.snake import Snake
from glide_snake.state import Phase, RunState


def _state(cells, grid_size):
    snake = Snake(cells)
    return RunState(
        snake=snake,
        directions=DirectionQueue(),
        occupancy=OccupancyIndex(snake.body),
        grid_size=grid_size,
        tick_ms=GameConfig().tick_ms_for(grid_size),
        phase=Phase.PLAYING,
    )


def _row_cells(count, size):
    return [(i % size, i // size) for i in range(count)]


class TestShouldGrow:
    def test_density_threshold(self):
        ctrl = GridGrowthController(GameConfig())
        # 0.4 * 8 * 8 = 25.6
        assert not ctrl.should_grow(25, 8)
        assert ctrl.should_grow(26, 8)

    def test_ceiling(self):
        ctrl = GridGrowthController(GameConfig())
        assert not ctrl.should_grow(10_000, 36)


class TestMaybeGrow:
    def test_no_growth_below_threshold(self):
        ctrl = GridGrowthController(GameConfig())
        state = _state([(3, 3), (2, 3), (1, 3)], 8)
        assert not ctrl.maybe_grow(state)
        assert state.grid_size == 8

    def test_growth_shifts_and_retimes(self):
        ctrl = GridGrowthController(GameConfig())
        cells = _row_cells(26, 8)
        state = _state(cells, 8)
        assert ctrl.maybe_grow(state)
        assert state.grid_size == 10
        assert list(state.snake.body) == [(x + 1, y + 1) for x, y in cells]
        assert state.occupancy == set(state.snake.body)
        assert state.tick_ms == 150.0 * 15 / 10

    def test_growth_stops_at_ceiling(self):
        cfg = GameConfig(initial_grid_size=8, welcome_grid_size=8, max_grid_size=10)
        ctrl = GridGrowthController(cfg)
        state = _state(_row_cells(26, 8), 8)
        assert ctrl.maybe_grow(state)
        assert state.grid_size == 10
        state.snake = Snake(_row_cells(60, 10))
        state.occupancy.rebuild(state.snake.body)
        assert not ctrl.maybe_grow(state)
        assert state.grid_size == 10
