"""Fixed-timestep driver between the frame clock and the step engine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from glide_snake.engine import GameEngine
from glide_snake.interpolation import clamp01
from glide_snake.state import Phase, RunState, next_phase, start_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """What one :meth:`StepScheduler.advance` call decided."""

    timestamp: float
    ticked: bool
    progress: float
    phase: Phase

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "ticked": self.ticked,
            "progress": self.progress,
            "phase": self.phase.value,
        }


class StepScheduler:
    """Decides, per rendered frame, whether the engine ticks.

    An external clock (an animation callback, an asyncio loop, a synthetic
    test clock) calls :meth:`advance` once per frame. At most one tick runs
    per frame: if a frame arrives late the simulation simply runs slower
    rather than catching up.
    """

    def __init__(
        self,
        engine: GameEngine,
        on_run_complete: Callable[[RunState], None] | None = None,
    ) -> None:
        self.engine = engine
        self.on_run_complete = on_run_complete
        self.last_tick_at: float | None = None
        self.last_frame: Frame | None = None
        self.frames = 0

    @property
    def phase(self) -> Phase:
        return self.engine.phase

    def request_start(self) -> bool:
        """Handle a start/restart request from the player.

        Starts a fresh run from WELCOME or GAME_OVER; ignored while PLAYING.
        """
        event = start_event(self.engine.phase)
        if event is None:
            return False
        phase = next_phase(self.engine.phase, event)
        self.engine.new_run(phase)
        self.last_tick_at = None
        self.last_frame = None
        logger.info("Run started (%s).", event.value)
        return True

    def queue_direction(self, direction: object) -> bool:
        return self.engine.queue_direction(direction)

    def progress(self, ts: float) -> float:
        """Fraction of the current tick elapsed at *ts*; 1 outside PLAYING."""
        state = self.engine.state
        if state.phase is not Phase.PLAYING or self.last_tick_at is None:
            return 1.0
        return clamp01((ts - self.last_tick_at) / state.tick_ms)

    def advance(self, ts: float) -> Frame:
        """Process one frame at timestamp *ts* (milliseconds)."""
        self.frames += 1
        ticked = False
        if self.last_tick_at is None:
            self.last_tick_at = ts
        elif (
            self.engine.phase is Phase.PLAYING
            and ts - self.last_tick_at >= self.engine.state.tick_ms
        ):
            self.last_tick_at = ts
            self.engine.step()
            ticked = True
            if self.engine.phase is Phase.GAME_OVER and self.on_run_complete is not None:
                self.on_run_complete(self.engine.state)
        self.last_frame = Frame(
            timestamp=ts,
            ticked=ticked,
            progress=self.progress(ts),
            phase=self.engine.phase,
        )
        return self.last_frame

    def idle_frame(self, ts: float) -> Frame:
        """A frame at *ts* that does not advance the simulation."""
        return Frame(
            timestamp=ts, ticked=False, progress=self.progress(ts), phase=self.engine.phase,
        )
