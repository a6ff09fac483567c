"""Run state container and the phase state machine."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from glide_snake.direction_queue import DirectionQueue
from glide_snake.occupancy import OccupancyIndex
from glide_snake.snake import Cell, Snake


class Phase(str, enum.Enum):
    """Lifecycle of a run."""

    WELCOME = "welcome"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class PhaseEvent(str, enum.Enum):
    START = "start"
    COLLISION = "collision"
    RESTART = "restart"


_TRANSITIONS: dict[tuple[Phase, PhaseEvent], Phase] = {
    (Phase.WELCOME, PhaseEvent.START): Phase.PLAYING,
    (Phase.PLAYING, PhaseEvent.COLLISION): Phase.GAME_OVER,
    (Phase.GAME_OVER, PhaseEvent.RESTART): Phase.PLAYING,
}


def next_phase(phase: Phase, event: PhaseEvent) -> Phase:
    """Return the phase reached from *phase* on *event*.

    Events with no transition from the current phase leave it unchanged.
    """
    return _TRANSITIONS.get((phase, event), phase)


def start_event(phase: Phase) -> PhaseEvent | None:
    """The event a player start request maps to in *phase*, if any."""
    if phase is Phase.WELCOME:
        return PhaseEvent.START
    if phase is Phase.GAME_OVER:
        return PhaseEvent.RESTART
    return None


@dataclass(frozen=True)
class EatEffect:
    """Notification emitted when food is eaten."""

    cell: Cell
    world_x: float
    world_y: float
    started_at: float

    def to_dict(self) -> dict:
        return {
            "cell": list(self.cell),
            "x": self.world_x,
            "y": self.world_y,
            "started_at": self.started_at,
        }


@dataclass
class RunState:
    """All mutable state of one run.

    Replaced wholesale whenever a new run starts.
    """

    snake: Snake
    directions: DirectionQueue
    occupancy: OccupancyIndex
    grid_size: int
    tick_ms: float
    phase: Phase = Phase.WELCOME
    food: Cell | None = None
    score: int = 0
    ticks: int = 0
    ate_last_tick: bool = False
    run_started_at: float = 0.0
    ended_at: float | None = None
    food_spawned_at: float | None = None
    eat_effect: EatEffect | None = None
    shake_until: float | None = None

    @property
    def duration_ms(self) -> float | None:
        """Run duration, available once the run has ended."""
        if self.ended_at is None:
            return None
        return self.ended_at - self.run_started_at
