"""Headless runs driven by a synthetic frame clock."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from glide_snake.config import GameConfig
from glide_snake.engine import GameEngine
from glide_snake.highscores import HighScoreTable
from glide_snake.scheduler import StepScheduler
from glide_snake.snake import Direction
from glide_snake.state import Phase

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


class FrameClock:
    """Manually advanced millisecond clock standing in for a display."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def tick(self, ms: float) -> float:
        self.now += ms
        return self.now


@dataclass
class SimulationResult:
    """Aggregate results of a batch of headless runs."""

    games: int
    total_frames: int
    total_ticks: int
    best_score: int
    mean_score: float
    max_grid_size: int
    wall_time_seconds: float

    def summary(self) -> str:
        return (
            f"Simulation: {self.games} games, {self.total_ticks} ticks over "
            f"{self.total_frames} frames in {self.wall_time_seconds:.2f}s | "
            f"best score {self.best_score}, mean {self.mean_score:.2f}, "
            f"largest grid {self.max_grid_size}"
        )


def simulate(
    *,
    games: int = 10,
    seed: int = 0,
    frame_ms: float = 1000.0 / 60.0,
    max_frames: int = 20_000,
    turn_chance: float = 0.1,
    config: GameConfig | None = None,
    highscores: HighScoreTable | None = None,
) -> SimulationResult:
    """Play *games* runs with random input at a fixed frame rate.

    Each run is started from the welcome board, fed a random turn on
    roughly ``turn_chance`` of frames, and stops on game over or after
    ``max_frames`` frames.
    """
    if games < 1:
        raise ValueError("games must be at least 1.")
    if frame_ms <= 0:
        raise ValueError("frame_ms must be positive.")
    if not 0.0 <= turn_chance <= 1.0:
        raise ValueError("turn_chance must be in [0, 1].")

    config = config if config is not None else GameConfig()
    rng = np.random.default_rng(seed)
    scores: list[int] = []
    total_frames = 0
    total_ticks = 0
    max_grid = 0
    start = time.perf_counter()

    for _ in range(games):
        clock = FrameClock()
        engine = GameEngine(config, seed=int(rng.integers(2**31)), clock=clock)
        scheduler = StepScheduler(engine)
        if highscores is not None:
            scheduler.on_run_complete = (
                lambda state: highscores.add(state.score, state.duration_ms or 0.0)
            )
        scheduler.request_start()

        for _ in range(max_frames):
            if rng.random() < turn_chance:
                scheduler.queue_direction(_DIRECTIONS[int(rng.integers(4))])
            frame = scheduler.advance(clock.tick(frame_ms))
            total_frames += 1
            total_ticks += frame.ticked
            max_grid = max(max_grid, engine.grid_size)
            if frame.phase is Phase.GAME_OVER:
                break
        scores.append(engine.score)

    elapsed = time.perf_counter() - start
    result = SimulationResult(
        games=games,
        total_frames=total_frames,
        total_ticks=total_ticks,
        best_score=max(scores),
        mean_score=float(np.mean(scores)),
        max_grid_size=max_grid,
        wall_time_seconds=elapsed,
    )
    logger.info(result.summary())
    return result
