"""Tick-owning controller: runs the periodic loop and applies commands."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from snake_swarm.commands import Command, StartCommand, apply_command
from snake_swarm.config import SimulationConfig
from snake_swarm.engine import SimulationEngine, SimulationStatus

logger = logging.getLogger(__name__)

Listener = Callable[[dict], Awaitable[None]]


class SimulationController:
    """Owns one engine and at most one running tick loop.

    Commands are applied between ticks under :attr:`lock`. A start
    command cancels the previous loop before the new run begins, so two
    tick streams never overlap.
    """

    def __init__(self, config: SimulationConfig | None = None) -> None:
        self.config = config or SimulationConfig()
        self.engine = SimulationEngine(self.config)
        self.lock = asyncio.Lock()
        self._lifecycle_lock = asyncio.Lock()
        self._listeners: list[Listener] = []
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self) -> dict:
        return self.engine.get_state()

    async def submit(self, command: Command) -> bool:
        """Apply a command; returns whether it took effect."""
        if isinstance(command, StartCommand):
            # Held from cancel through spawn so concurrent starts leave one loop.
            async with self._lifecycle_lock:
                await self._cancel_loop()
                async with self.lock:
                    apply_command(self.engine, command)
                self._task = asyncio.create_task(self._tick_loop())
            return True
        async with self.lock:
            return apply_command(self.engine, command)

    async def stop(self) -> None:
        """Cancel the running tick loop, if any, and wait for it."""
        async with self._lifecycle_lock:
            await self._cancel_loop()

    async def _cancel_loop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    async def _tick_loop(self) -> None:
        """Tick at the configured period until the run ends."""
        interval = self.config.tick_rate_ms / 1000.0
        try:
            while self.engine.status == SimulationStatus.RUNNING:
                await asyncio.sleep(interval)
                async with self.lock:
                    state = self.engine.tick()
                await self._publish({"type": "state", "state": state})
                if state["game_over"]:
                    await self._publish({
                        "type": "game_over",
                        "reason": state["end_reason"],
                        "state": state,
                    })
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled at tick %d.", self.engine.state.tick)
        except Exception:
            logger.exception("Tick loop error at tick %d.", self.engine.state.tick)

    async def _publish(self, event: dict) -> None:
        """Send an event to every listener, dropping the ones that fail."""
        # Iterate over a snapshot so listeners may unsubscribe mid-send.
        for listener in list(self._listeners):
            try:
                await listener(event)
            except Exception:
                logger.warning("Dropping listener %r after a send failure.", listener)
                self.unsubscribe(listener)

    async def cleanup(self) -> None:
        """Stop ticking and forget every listener."""
        await self.stop()
        self._listeners.clear()
        logger.info("SimulationController cleanup complete.")
