"""Sub-tick interpolation and effect timing for renderers.

Everything here is a pure function of simulation outputs and a timestamp;
nothing mutates engine state.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from glide_snake.state import Phase

if TYPE_CHECKING:
    from glide_snake.engine import GameEngine
    from glide_snake.scheduler import Frame
    from glide_snake.snake import Cell

Point = tuple[float, float]

# Board zoom applied behind the game-over menu.
_GAME_OVER_ZOOM = 0.9


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def interpolate_body(
    body: Sequence[Cell], progress: float, ate_last_tick: bool,
) -> list[Point]:
    """Cell-space positions of each segment at *progress* through a tick.

    The head slides from the second segment toward its new cell and the tail
    slides toward the segment ahead of it. On a tick where the snake ate, the
    tail was not removed, so it stays put.
    """
    points: list[Point] = [(float(x), float(y)) for x, y in body]
    if len(points) < 2:
        return points

    moved = clamp01(progress)
    (hx, hy), (nx, ny) = body[0], body[1]
    points[0] = (nx + (hx - nx) * moved, ny + (hy - ny) * moved)

    tail_factor = 0.0 if ate_last_tick else 1 - moved
    (tx, ty), (px, py) = body[-1], body[-2]
    points[-1] = (px + (tx - px) * tail_factor, py + (ty - py) * tail_factor)
    return points


def effect_progress(started_at: float | None, now: float, duration_ms: float) -> float:
    """Eased completion of a timed effect; 1.0 when none is running."""
    if started_at is None or duration_ms <= 0:
        return 1.0
    return ease_out_cubic(clamp01((now - started_at) / duration_ms))


def shake_amplitude(
    now: float, shake_until: float | None, shake_ms: float, max_px: float = 4.0,
) -> float:
    """Screen-shake amplitude in pixels, fading linearly to zero."""
    if shake_until is None or shake_ms <= 0 or now >= shake_until:
        return 0.0
    return max_px * clamp01((shake_until - now) / shake_ms)


def board_scale(base_grid_size: int, grid_size: int, phase: Phase) -> float:
    """Zoom factor that keeps cells a constant size as the board grows."""
    if phase is Phase.WELCOME:
        return 0.0
    scale = base_grid_size / grid_size
    if phase is Phase.GAME_OVER:
        return scale * _GAME_OVER_ZOOM
    return scale


def snapshot(engine: GameEngine, frame: Frame, now: float) -> dict:
    """Everything a renderer needs for one frame, JSON-serializable."""
    state = engine.state
    cfg = engine.config
    body = list(state.snake.body)
    eat = state.eat_effect
    eat_duration = cfg.eat_fx_ms * 1.15
    eat_active = eat is not None and now - eat.started_at < eat_duration
    return {
        **engine.get_state(),
        "frame": frame.to_dict(),
        "points": [
            [x, y] for x, y in interpolate_body(body, frame.progress, state.ate_last_tick)
        ],
        "scale": board_scale(cfg.base_grid_size, state.grid_size, state.phase),
        "food_fx": effect_progress(state.food_spawned_at, now, cfg.food_fx_ms),
        "eat_fx": (
            {**eat.to_dict(), "progress": effect_progress(eat.started_at, now, eat_duration)}
            if eat_active else None
        ),
        "shake": shake_amplitude(now, state.shake_until, cfg.shake_ms),
    }
