"""REST API route handlers for session lifecycle, input and high scores."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from glide_snake.highscores import format_time
from glide_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    HighScoreItem,
    SessionSummary,
)
from glide_snake.server.session_manager import SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])
highscore_router = APIRouter(tags=["highscores"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    request: Request, body: CreateSessionRequest | None = None,
) -> SessionSummary:
    """Create a new session showing the welcome board."""
    manager = _get_manager(request)
    seed = body.seed if body is not None else None
    try:
        session = manager.create_session(seed=seed)
    except ValueError as exc:
        raise HTTPException(status_code=429, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List live sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the full engine state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return {
        **session.summary().model_dump(mode="json"),
        "state": session.engine.get_state(),
    }


@router.post("/{session_id}/start")
async def start_run(session_id: str, request: Request) -> SessionSummary:
    """Start the first run, or restart after game over."""
    manager = _get_manager(request)
    try:
        session = await manager.start_run(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return session.summary()


@router.post("/{session_id}/direction")
async def queue_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Buffer a turn; rejected turns report ``accepted: false``."""
    manager = _get_manager(request)
    try:
        accepted = await manager.queue_direction(session_id, body.direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return DirectionResponse(accepted=accepted)


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    """Stop a session's frame loop and drop it."""
    try:
        await _get_manager(request).remove_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)


@highscore_router.get("/highscores")
async def list_highscores(request: Request) -> list[HighScoreItem]:
    """Ranked high-score table shared by all sessions."""
    table = _get_manager(request).highscores
    return [
        HighScoreItem(
            rank=rank,
            score=entry.score,
            time_ms=entry.time_ms,
            formatted_time=format_time(entry.time_ms),
            date=entry.date,
            is_last=table.is_last(entry),
        )
        for rank, entry in enumerate(table.entries(), start=1)
    ]
