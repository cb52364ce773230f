"""REST route handlers for starting and steering the simulation."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from snake_swarm.commands import (
    SetDirectionCommand,
    StartCommand,
    ToggleHumanControlCommand,
)
from snake_swarm.controller import SimulationController
from snake_swarm.input import direction_for_key
from snake_swarm.server.models import (
    DirectionRequest,
    DirectionResponse,
    HumanControlRequest,
    StartRequest,
)

router = APIRouter(prefix="/simulation", tags=["simulation"])


def _get_controller(request: Request) -> SimulationController:
    return request.app.state.controller


@router.get("")
async def get_simulation(request: Request) -> dict:
    """Return the current snapshot."""
    return _get_controller(request).snapshot()


@router.post("/start")
async def start_simulation(body: StartRequest, request: Request) -> dict:
    """(Re)start the simulation and begin ticking."""
    controller = _get_controller(request)
    await controller.submit(
        StartCommand(snake_count=body.snake_count, human_control=body.human_control),
    )
    return controller.snapshot()


@router.post("/human-control")
async def set_human_control(body: HumanControlRequest, request: Request) -> dict:
    """Toggle human control without resetting the run."""
    controller = _get_controller(request)
    await controller.submit(ToggleHumanControlCommand(enabled=body.enabled))
    return controller.snapshot()


@router.post("/direction")
async def set_direction(
    body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Steer the human snake."""
    direction = direction_for_key(body.direction)
    if direction is None:
        raise HTTPException(
            status_code=422, detail=f"Unknown direction {body.direction!r}.",
        )
    accepted = await _get_controller(request).submit(
        SetDirectionCommand(direction=direction),
    )
    return DirectionResponse(accepted=accepted)
