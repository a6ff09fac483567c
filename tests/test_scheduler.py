"""Tests for the StepScheduler fixed-timestep driver."""

import pytest

from glide_snake.engine import GameEngine
from glide_snake.scheduler import StepScheduler
from glide_snake.simulation import FrameClock
from glide_snake.snake import Direction, Snake
from glide_snake.state import Phase

TICK_MS = 150.0 * 15 / 8


def _scheduler(seed=0):
    clock = FrameClock()
    engine = GameEngine(seed=seed, clock=clock)
    return StepScheduler(engine), engine, clock


def _started(seed=0):
    scheduler, engine, clock = _scheduler(seed)
    scheduler.request_start()
    # Keep food out of the snake's path.
    engine.state.food = (0, 7)
    return scheduler, engine, clock


def _at_right_wall(engine):
    engine.state.snake = Snake([(7, 3), (6, 3), (5, 3)])
    engine.state.occupancy.rebuild(engine.state.snake.body)


class TestSchedulerPhases:
    def test_starts_in_welcome(self):
        scheduler, engine, _ = _scheduler()
        assert scheduler.phase is Phase.WELCOME

    def test_welcome_never_ticks(self):
        scheduler, engine, _ = _scheduler()
        scheduler.advance(0.0)
        frame = scheduler.advance(10_000.0)
        assert not frame.ticked
        assert frame.progress == 1.0
        assert frame.phase is Phase.WELCOME

    def test_start_from_welcome(self):
        scheduler, engine, _ = _scheduler()
        assert scheduler.request_start()
        assert engine.phase is Phase.PLAYING
        assert engine.grid_size == 8

    def test_start_ignored_while_playing(self):
        scheduler, engine, _ = _started()
        engine.step()
        assert not scheduler.request_start()
        assert engine.state.ticks == 1

    def test_restart_after_game_over_resets_run(self):
        scheduler, engine, clock = _started()
        scheduler.advance(clock.tick(10))
        engine.state.score = 7
        _at_right_wall(engine)
        scheduler.advance(clock.tick(TICK_MS))
        assert engine.phase is Phase.GAME_OVER

        assert scheduler.request_start()
        assert engine.phase is Phase.PLAYING
        assert engine.score == 0
        assert engine.grid_size == 8
        assert engine.occupancy == set(engine.snake.body)
        assert list(engine.snake.body) == [(3, 3), (2, 3), (1, 3)]
        assert scheduler.last_tick_at is None


class TestSchedulerTiming:
    def test_first_frame_only_records_timestamp(self):
        scheduler, engine, _ = _started()
        frame = scheduler.advance(1000.0)
        assert not frame.ticked
        assert scheduler.last_tick_at == 1000.0
        assert frame.progress == 0.0

    def test_ticks_once_tick_duration_elapsed(self):
        scheduler, engine, _ = _started()
        scheduler.advance(1000.0)
        frame = scheduler.advance(1000.0 + TICK_MS - 1)
        assert not frame.ticked
        assert frame.progress == pytest.approx((TICK_MS - 1) / TICK_MS)
        frame = scheduler.advance(1000.0 + TICK_MS)
        assert frame.ticked
        assert frame.progress == 0.0
        assert engine.snake.head == (4, 3)

    def test_late_frame_runs_a_single_tick(self):
        scheduler, engine, _ = _started()
        scheduler.advance(0.0)
        frame = scheduler.advance(TICK_MS * 3.5)
        assert frame.ticked
        assert engine.state.ticks == 1
        assert scheduler.last_tick_at == TICK_MS * 3.5

    def test_progress_is_clamped(self):
        scheduler, engine, _ = _started()
        scheduler.advance(0.0)
        assert scheduler.progress(TICK_MS * 10) == 1.0
        assert scheduler.progress(-50.0) == 0.0

    def test_game_over_progress_is_one(self):
        scheduler, engine, clock = _started()
        scheduler.advance(clock.tick(10))
        _at_right_wall(engine)
        frame = scheduler.advance(clock.tick(TICK_MS))
        assert frame.phase is Phase.GAME_OVER
        assert frame.progress == 1.0
        frame = scheduler.advance(clock.tick(TICK_MS))
        assert not frame.ticked

    def test_queued_input_waits_for_tick(self):
        scheduler, engine, _ = _started()
        scheduler.advance(0.0)
        assert scheduler.queue_direction(Direction.DOWN)
        scheduler.advance(10.0)
        assert engine.snake.head == (3, 3)
        scheduler.advance(TICK_MS)
        assert engine.snake.head == (3, 4)


class TestSchedulerRunCompletion:
    def test_callback_fires_once_per_run(self):
        completed = []
        scheduler, engine, clock = _started()
        scheduler.on_run_complete = completed.append
        scheduler.advance(clock.tick(10))
        _at_right_wall(engine)
        scheduler.advance(clock.tick(TICK_MS))
        scheduler.advance(clock.tick(TICK_MS))
        assert len(completed) == 1
        assert completed[0].phase is Phase.GAME_OVER

    def test_last_frame_tracked(self):
        scheduler, _, _ = _started()
        assert scheduler.last_frame is None
        frame = scheduler.advance(5.0)
        assert scheduler.last_frame is frame
        idle = scheduler.idle_frame(6.0)
        assert not idle.ticked
        assert scheduler.last_frame is frame
