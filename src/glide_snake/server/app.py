"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from glide_snake.config import GameConfig
from glide_snake.highscores import HighScoreTable
from glide_snake.server.routes import highscore_router, router
from glide_snake.server.session_manager import SessionManager
from glide_snake.server.websocket import ws_router


def create_app(
    config: GameConfig | None = None,
    highscore_path: str | Path | None = None,
    frame_rate: int = 60,
) -> FastAPI:
    """Build and return the FastAPI application."""
    config = config if config is not None else GameConfig()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Glide Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.state.session_manager = SessionManager(
        highscores=HighScoreTable(highscore_path, limit=config.highscore_limit),
        config=config,
        frame_rate=frame_rate,
    )
    app.include_router(router)
    app.include_router(highscore_router)
    app.include_router(ws_router)
    return app
