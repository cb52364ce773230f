"""WebSocket integration tests for the viewer stream."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient

from snake_swarm.config import SimulationConfig
from snake_swarm.server.app import create_app


@pytest.fixture()
def tc():
    """Starlette sync TestClient sharing one event loop across REST calls,
    WebSocket connections, and the tick loop."""
    config = SimulationConfig(
        board_width=200, board_height=200, tick_rate_ms=10, seed=0,
    )
    with TestClient(create_app(config)) as client:
        yield client


def _receive_until(ws, predicate, limit=100):
    for _ in range(limit):
        event = json.loads(ws.receive_text())
        if predicate(event):
            return event
    raise AssertionError("expected event never arrived")


class TestViewerWebSocket:
    def test_initial_snapshot(self, tc):
        with tc.websocket_connect("/simulation/ws") as ws:
            event = json.loads(ws.receive_text())
            assert event["type"] == "state"
            assert event["state"]["status"] == "not_started"

    def test_streams_ticks_after_start(self, tc):
        with tc.websocket_connect("/simulation/ws") as ws:
            ws.receive_text()
            resp = tc.post("/simulation/start", json={"snake_count": 3})
            assert resp.status_code == 200
            event = _receive_until(
                ws, lambda e: e["type"] == "state" and e["state"]["tick"] >= 2,
            )
            assert len(event["state"]["snakes"]) == 3

    def test_direction_message_steers_human(self, tc):
        with tc.websocket_connect("/simulation/ws") as ws:
            ws.receive_text()
            tc.post(
                "/simulation/start",
                json={"snake_count": 1, "human_control": True},
            )
            ws.send_text("not json")
            ws.send_text(json.dumps(["up"]))
            ws.send_text(json.dumps({"direction": 5}))
            ws.send_text(json.dumps({"direction": "q"}))
            ws.send_text(json.dumps({"direction": "ArrowDown"}))
            event = _receive_until(
                ws,
                lambda e: e["type"] == "state"
                and e["state"]["snakes"][0]["direction"] == [0, 1],
            )
            assert event["state"]["human_snake_id"] == 0
