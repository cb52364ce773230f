"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from snake_swarm.config import SimulationConfig
from snake_swarm.controller import SimulationController
from snake_swarm.server.app import create_app

BASE = "http://test"


@pytest.fixture()
async def controller():
    ctrl = SimulationController(
        SimulationConfig(board_width=200, board_height=200, tick_rate_ms=1000, seed=0),
    )
    yield ctrl
    await ctrl.cleanup()


@pytest.fixture()
def app(controller):
    application = create_app()
    application.state.controller = controller
    return application


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c


class TestGetSimulation:
    @pytest.mark.asyncio
    async def test_before_start(self, client):
        resp = await client.get("/simulation")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "not_started"
        assert data["snakes"] == []
        assert data["food"] is None


class TestStart:
    @pytest.mark.asyncio
    async def test_start(self, client, controller):
        resp = await client.post("/simulation/start", json={"snake_count": 3})
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "running"
        assert len(data["snakes"]) == 3
        assert data["grid"]["width"] == 10
        assert controller.running

    @pytest.mark.asyncio
    async def test_start_defaults_to_one_snake(self, client):
        resp = await client.post("/simulation/start", json={})
        assert len(resp.json()["snakes"]) == 1

    @pytest.mark.asyncio
    async def test_non_positive_count_becomes_one(self, client):
        resp = await client.post("/simulation/start", json={"snake_count": -3})
        assert resp.status_code == 200
        assert len(resp.json()["snakes"]) == 1

    @pytest.mark.asyncio
    async def test_start_with_human(self, client):
        resp = await client.post(
            "/simulation/start", json={"snake_count": 2, "human_control": True},
        )
        assert resp.json()["human_snake_id"] == 0

    @pytest.mark.asyncio
    async def test_invalid_count_type(self, client):
        resp = await client.post("/simulation/start", json={"snake_count": "many"})
        assert resp.status_code == 422


class TestHumanControl:
    @pytest.mark.asyncio
    async def test_toggle(self, client):
        await client.post("/simulation/start", json={"snake_count": 2})
        resp = await client.post("/simulation/human-control", json={"enabled": True})
        assert resp.status_code == 200
        assert resp.json()["human_snake_id"] == 0

        resp = await client.post("/simulation/human-control", json={"enabled": False})
        assert resp.json()["human_snake_id"] is None


class TestDirection:
    @pytest.mark.asyncio
    async def test_accepted_for_human(self, client):
        await client.post(
            "/simulation/start", json={"snake_count": 1, "human_control": True},
        )
        resp = await client.post("/simulation/direction", json={"direction": "ArrowUp"})
        assert resp.status_code == 200
        assert resp.json() == {"accepted": True}

    @pytest.mark.asyncio
    async def test_refused_without_human(self, client):
        await client.post("/simulation/start", json={"snake_count": 1})
        resp = await client.post("/simulation/direction", json={"direction": "up"})
        assert resp.json() == {"accepted": False}

    @pytest.mark.asyncio
    async def test_unknown_direction(self, client):
        resp = await client.post("/simulation/direction", json={"direction": "north"})
        assert resp.status_code == 422
