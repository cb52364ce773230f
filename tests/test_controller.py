"""Tests for the tick-owning SimulationController."""

from __future__ import annotations

import asyncio

import pytest

from snake_swarm.commands import (
    SetDirectionCommand,
    StartCommand,
    ToggleHumanControlCommand,
)
from snake_swarm.config import SimulationConfig
from snake_swarm.controller import SimulationController
from snake_swarm.snake import Direction


def _config(width=10, height=10, tick_rate_ms=5, seed=0):
    return SimulationConfig(
        board_width=width * 20,
        board_height=height * 20,
        tick_rate_ms=tick_rate_ms,
        seed=seed,
    )


async def _wait_for(predicate, attempts=200, delay=0.01):
    for _ in range(attempts):
        if predicate():
            return True
        await asyncio.sleep(delay)
    return predicate()


def _live_tick_loops() -> list[asyncio.Task]:
    return [
        task for task in asyncio.all_tasks()
        if not task.done()
        and task.get_coro().__qualname__ == "SimulationController._tick_loop"
    ]


class TestControllerLifecycle:
    @pytest.mark.asyncio
    async def test_not_running_before_start(self):
        controller = SimulationController(_config())
        assert not controller.running
        assert controller.snapshot()["status"] == "not_started"

    @pytest.mark.asyncio
    async def test_start_begins_ticking(self):
        controller = SimulationController(_config())
        await controller.submit(StartCommand(snake_count=3))
        assert controller.running
        assert await _wait_for(lambda: controller.engine.state.tick >= 3)
        await controller.cleanup()
        assert not controller.running

    @pytest.mark.asyncio
    async def test_restart_replaces_tick_loop(self):
        controller = SimulationController(_config(tick_rate_ms=1000))
        await controller.submit(StartCommand(snake_count=2))
        first_task = controller._task
        await controller.submit(StartCommand(snake_count=4))
        assert first_task.done()
        assert controller._task is not first_task
        assert controller.running
        assert len(controller.engine.snakes) == 4
        await controller.cleanup()

    @pytest.mark.asyncio
    async def test_concurrent_starts_leave_one_loop(self):
        controller = SimulationController(_config(tick_rate_ms=1000))
        await controller.submit(StartCommand(snake_count=2))
        await asyncio.gather(
            controller.submit(StartCommand(snake_count=3)),
            controller.submit(StartCommand(snake_count=4)),
        )
        assert len(_live_tick_loops()) == 1
        assert controller._task in _live_tick_loops()
        await controller.cleanup()
        assert _live_tick_loops() == []

    @pytest.mark.asyncio
    async def test_loop_stops_on_game_over(self):
        # A 2-cell board fills up on the first meal.
        controller = SimulationController(_config(width=2, height=1))
        events: list[dict] = []

        async def listener(event: dict) -> None:
            events.append(event)

        controller.subscribe(listener)
        await controller.submit(StartCommand(snake_count=1))
        assert await _wait_for(lambda: not controller.running)
        assert [e["type"] for e in events] == ["state", "game_over"]
        assert events[-1]["reason"] == "board_full"
        await controller.cleanup()


class TestControllerCommands:
    @pytest.mark.asyncio
    async def test_direction_refused_without_human(self):
        controller = SimulationController(_config(tick_rate_ms=1000))
        await controller.submit(StartCommand(snake_count=2))
        assert not await controller.submit(SetDirectionCommand(Direction.UP))
        await controller.cleanup()

    @pytest.mark.asyncio
    async def test_direction_applied_to_human(self):
        controller = SimulationController(_config(tick_rate_ms=1000))
        await controller.submit(StartCommand(snake_count=1, human_control=True))
        assert await controller.submit(SetDirectionCommand(Direction.UP))
        assert controller.engine.human_snake.direction == Direction.UP
        await controller.cleanup()

    @pytest.mark.asyncio
    async def test_toggle_human_control(self):
        controller = SimulationController(_config(tick_rate_ms=1000))
        await controller.submit(StartCommand(snake_count=2))
        await controller.submit(ToggleHumanControlCommand(enabled=True))
        assert controller.snapshot()["human_snake_id"] == 0
        await controller.cleanup()


class TestControllerListeners:
    @pytest.mark.asyncio
    async def test_failing_listener_dropped(self):
        controller = SimulationController(_config())
        received: list[dict] = []

        async def broken(event: dict) -> None:
            raise RuntimeError("socket gone")

        async def healthy(event: dict) -> None:
            received.append(event)

        controller.subscribe(broken)
        controller.subscribe(healthy)
        await controller.submit(StartCommand(snake_count=2))
        assert await _wait_for(lambda: len(received) >= 2)
        assert broken not in controller._listeners
        await controller.cleanup()

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        controller = SimulationController(_config())
        received: list[dict] = []

        async def listener(event: dict) -> None:
            received.append(event)

        controller.subscribe(listener)
        controller.unsubscribe(listener)
        await controller.submit(StartCommand(snake_count=2))
        await asyncio.sleep(0.05)
        assert received == []
        await controller.cleanup()
