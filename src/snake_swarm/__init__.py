"""Snake Swarm: greedy multi-snake simulation engine."""

from snake_swarm.commands import (
    SetDirectionCommand,
    StartCommand,
    ToggleHumanControlCommand,
)
from snake_swarm.config import SimulationConfig
from snake_swarm.controller import SimulationController
from snake_swarm.engine import (
    EndReason,
    SimulationEngine,
    SimulationState,
    SimulationStatus,
)
from snake_swarm.food import Food, FoodAllocator
from snake_swarm.grid import Grid
from snake_swarm.snake import Direction, Snake

__all__ = [
    "Direction",
    "EndReason",
    "Food",
    "FoodAllocator",
    "Grid",
    "SetDirectionCommand",
    "SimulationConfig",
    "SimulationController",
    "SimulationEngine",
    "SimulationState",
    "SimulationStatus",
    "Snake",
    "StartCommand",
    "ToggleHumanControlCommand",
]
