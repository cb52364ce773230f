"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_swarm.config import SimulationConfig
from snake_swarm.controller import SimulationController
from snake_swarm.server.routes import router
from snake_swarm.server.websocket import ws_router


def create_app(config: SimulationConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.controller = SimulationController(config)
        yield
        await app.state.controller.cleanup()

    app = FastAPI(
        title="Snake Swarm", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
