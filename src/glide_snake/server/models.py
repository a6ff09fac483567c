"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from glide_snake.state import Phase


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    seed: int | None = Field(default=None, ge=0)


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str = Field(min_length=1, max_length=16)


class DirectionResponse(BaseModel):
    accepted: bool


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    phase: Phase
    score: int
    grid_size: int
    runs_completed: int


class HighScoreItem(BaseModel):
    """One ranked row of the high-score table."""

    rank: int
    score: int
    time_ms: float
    formatted_time: str
    date: str
    is_last: bool


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
