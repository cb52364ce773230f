"""Command objects consumed by the simulation controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from snake_swarm.snake import Direction

if TYPE_CHECKING:
    from snake_swarm.engine import SimulationEngine


@dataclass(frozen=True)
class StartCommand:
    """(Re)start the simulation."""

    snake_count: int = 1
    human_control: bool = False


@dataclass(frozen=True)
class SetDirectionCommand:
    """Steer the human-controlled snake."""

    direction: Direction


@dataclass(frozen=True)
class ToggleHumanControlCommand:
    """Hand the designated snake to, or take it from, the human player."""

    enabled: bool


Command = Union[StartCommand, SetDirectionCommand, ToggleHumanControlCommand]


def apply_command(engine: SimulationEngine, command: Command) -> bool:
    """Apply *command* to *engine*.

    Returns whether the command took effect; only a direction change can
    be refused.
    """
    if isinstance(command, StartCommand):
        engine.start(command.snake_count, command.human_control)
        return True
    if isinstance(command, SetDirectionCommand):
        return engine.set_direction(command.direction)
    if isinstance(command, ToggleHumanControlCommand):
        engine.set_human_control(command.enabled)
        return True
    raise TypeError(f"Unsupported command: {command!r}")
