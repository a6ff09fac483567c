"""Glide Snake — fixed-step snake simulation with interpolated rendering."""

from glide_snake.config import GameConfig
from glide_snake.direction_queue import DirectionQueue
from glide_snake.engine import GameEngine
from glide_snake.food import FoodSpawner
from glide_snake.growth import GridGrowthController
from glide_snake.highscores import HighScoreEntry, HighScoreTable
from glide_snake.occupancy import OccupancyIndex
from glide_snake.scheduler import Frame, StepScheduler
from glide_snake.snake import Direction, Snake
from glide_snake.state import Phase, PhaseEvent, RunState

__all__ = [
    "Direction",
    "DirectionQueue",
    "FoodSpawner",
    "Frame",
    "GameConfig",
    "GameEngine",
    "GridGrowthController",
    "HighScoreEntry",
    "HighScoreTable",
    "OccupancyIndex",
    "Phase",
    "PhaseEvent",
    "RunState",
    "Snake",
    "StepScheduler",
]
