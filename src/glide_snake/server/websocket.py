"""WebSocket handler streaming frames and accepting player input."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from glide_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send one snapshot per frame; receive directions and start requests.

    Client messages are JSON objects: ``{"direction": "up"}`` queues a turn
    and ``{"action": "start"}`` starts or restarts a run. Anything else is
    ignored.
    """
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Client connected to session %s.", session_id)

    # Initial snapshot so the client can draw before the next frame.
    async with session.lock:
        payload = session.frame_payload()
    await websocket.send_text(payload)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            async with session.lock:
                if msg.get("action") == "start":
                    session.scheduler.request_start()
                elif "direction" in msg:
                    session.scheduler.queue_direction(msg["direction"])
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
