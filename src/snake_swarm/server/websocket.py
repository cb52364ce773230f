"""WebSocket handler streaming snapshots out and direction intents in."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from snake_swarm.commands import SetDirectionCommand
from snake_swarm.controller import SimulationController
from snake_swarm.input import direction_for_key

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_controller(ws: WebSocket) -> SimulationController:
    return ws.app.state.controller


def _encode(payload: dict) -> str:
    return json.dumps(payload, separators=(",", ":"))


@ws_router.websocket("/simulation/ws")
async def play(websocket: WebSocket) -> None:
    """Send the snapshot each tick; accept ``{"direction": key}`` messages."""
    controller = _get_controller(websocket)
    await websocket.accept()

    async def forward(event: dict) -> None:
        if websocket.client_state == WebSocketState.CONNECTED:
            await websocket.send_text(_encode(event))

    # Send an initial snapshot so the client can draw immediately.
    await websocket.send_text(
        _encode({"type": "state", "state": controller.snapshot()}),
    )
    controller.subscribe(forward)
    logger.info("Viewer connected.")

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            key = msg.get("direction")
            if not isinstance(key, str):
                continue

            direction = direction_for_key(key)
            if direction is None:
                continue

            await controller.submit(SetDirectionCommand(direction=direction))
    except WebSocketDisconnect:
        logger.info("Viewer disconnected.")
    finally:
        controller.unsubscribe(forward)
