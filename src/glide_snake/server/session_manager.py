"""In-memory session registry and per-session async frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from glide_snake.config import GameConfig
from glide_snake.engine import GameEngine
from glide_snake.highscores import HighScoreTable
from glide_snake.interpolation import snapshot
from glide_snake.scheduler import StepScheduler
from glide_snake.server.models import SessionSummary
from glide_snake.snake import Direction
from glide_snake.state import RunState

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100
_DEFAULT_FRAME_RATE = 60


@dataclass
class Session:
    """All state for one player's game."""

    session_id: str
    engine: GameEngine
    scheduler: StepScheduler
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    runs_completed: int = 0
    pending_runs: list[tuple[int, float]] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            phase=self.engine.phase,
            score=self.engine.score,
            grid_size=self.engine.grid_size,
            runs_completed=self.runs_completed,
        )

    def frame_payload(self) -> str:
        """Snapshot of the latest frame as compact JSON."""
        now = self.engine.clock()
        frame = self.scheduler.last_frame
        if frame is None:
            frame = self.scheduler.idle_frame(now)
        return json.dumps(snapshot(self.engine, frame, now), separators=(",", ":"))


class SessionManager:
    """Central registry managing all single-player sessions.

    Each session runs its own frame loop task that drives
    :meth:`StepScheduler.advance` at ``frame_rate`` and pushes one frame
    snapshot per iteration to every connected socket.
    """

    def __init__(
        self,
        highscores: HighScoreTable | None = None,
        config: GameConfig | None = None,
        frame_rate: int = _DEFAULT_FRAME_RATE,
        max_sessions: int = _MAX_SESSIONS,
    ) -> None:
        if frame_rate < 1:
            raise ValueError("frame_rate must be at least 1.")
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.config = config if config is not None else GameConfig()
        self.highscores = (
            highscores if highscores is not None
            else HighScoreTable(limit=self.config.highscore_limit)
        )
        self.frame_interval = 1.0 / frame_rate
        self.max_sessions = max_sessions
        self._sessions: dict[str, Session] = {}
        self._highscore_lock = asyncio.Lock()

    def create_session(self, seed: int | None = None) -> Session:
        """Create a session on its welcome board and start its frame loop."""
        if len(self._sessions) >= self.max_sessions:
            raise ValueError("Session limit reached. Try again later.")

        session_id = uuid.uuid4().hex[:12]
        engine = GameEngine(self.config, seed=seed)
        session = Session(
            session_id=session_id,
            engine=engine,
            scheduler=StepScheduler(engine),
        )
        session.scheduler.on_run_complete = (
            lambda state: self._record_run(session, state)
        )
        self._sessions[session_id] = session
        session._task = asyncio.create_task(self._frame_loop(session))
        logger.info("Session %s created.", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    def _require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    async def start_run(self, session_id: str) -> Session:
        """Start or restart the session's run."""
        session = self._require(session_id)
        async with session.lock:
            if not session.scheduler.request_start():
                raise ValueError("A run is already in progress.")
        return session

    async def queue_direction(self, session_id: str, name: str) -> bool:
        """Buffer a turn for the session. Returns whether the queue took it."""
        session = self._require(session_id)
        direction = Direction.parse(name)
        if direction is None:
            raise ValueError(f"Unknown direction '{name}'.")
        async with session.lock:
            return session.scheduler.queue_direction(direction)

    async def remove_session(self, session_id: str) -> None:
        session = self._require(session_id)
        self._sessions.pop(session_id, None)
        await self._stop(session)
        logger.info("Session %s removed.", session_id)

    def _record_run(self, session: Session, state: RunState) -> None:
        # Runs inside advance(); the file write happens later in _save_runs.
        session.runs_completed += 1
        session.pending_runs.append((state.score, state.duration_ms or 0.0))

    async def _save_runs(self, runs: list[tuple[int, float]]) -> None:
        """Write finished runs to the high-score table off the event loop."""
        async with self._highscore_lock:
            for score, time_ms in runs:
                try:
                    await asyncio.to_thread(self.highscores.add, score, time_ms)
                except OSError:
                    logger.exception("Failed to save high score %d.", score)

    async def _frame_loop(self, session: Session) -> None:
        """Advance the scheduler once per frame and broadcast the result."""
        try:
            while True:
                await asyncio.sleep(self.frame_interval)
                async with session.lock:
                    session.scheduler.advance(session.engine.clock())
                    payload = session.frame_payload()
                    finished = session.pending_runs
                    session.pending_runs = []
                if finished:
                    await self._save_runs(finished)
                await self._broadcast(session, payload)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)

    async def _broadcast(self, session: Session, payload: str) -> None:
        """Send a frame to every connected socket, dropping dead ones."""
        dead: list[WebSocket] = []
        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def _stop(self, session: Session) -> None:
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def cleanup(self) -> None:
        """Stop every frame loop and forget all sessions."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await self._stop(session)
        logger.info("SessionManager cleanup complete.")
