"""Tick engine: advances every snake once per tick and detects game over."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

import numpy as np

from snake_swarm.config import SimulationConfig
from snake_swarm.errors import BoardFullError
from snake_swarm.food import Food, FoodAllocator
from snake_swarm.grid import Grid
from snake_swarm.occupancy import is_free
from snake_swarm.planner import legal_moves, plan_move
from snake_swarm.registry import create_snakes
from snake_swarm.snake import Cell, Direction, Snake

logger = logging.getLogger(__name__)


class SimulationStatus(str, enum.Enum):
    """Lifecycle states for a simulation run."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    ENDED = "ended"


class EndReason(str, enum.Enum):
    """Why a run reached :attr:`SimulationStatus.ENDED`."""

    ALL_BLOCKED = "all_blocked"
    HUMAN_BLOCKED = "human_blocked"
    BOARD_FULL = "board_full"


@dataclass
class SimulationState:
    """Everything that changes during a run."""

    snakes: list[Snake] = field(default_factory=list)
    food: Food | None = None
    designated_human_id: int | None = None
    blocked_ticks: int = 0
    status: SimulationStatus = SimulationStatus.NOT_STARTED
    tick: int = 0
    end_reason: EndReason | None = None

    @property
    def human_snake(self) -> Snake | None:
        """The snake currently holding the human flag, if any."""
        for snake in self.snakes:
            if snake.human_controlled:
                return snake
        return None

    @property
    def human_snake_id(self) -> int | None:
        human = self.human_snake
        return human.snake_id if human is not None else None

    def find(self, snake_id: int | None) -> Snake | None:
        for snake in self.snakes:
            if snake.snake_id == snake_id:
                return snake
        return None


class SimulationEngine:
    """Step-based engine for any number of snakes sharing one food item.

    Call :meth:`start` to (re)initialize a run, then :meth:`tick` once
    per period. Each tick moves every snake at most once, in registry
    order, and returns the full snapshot dictionary.
    """

    def __init__(self, config: SimulationConfig | None = None) -> None:
        cfg = config or SimulationConfig()
        self.config = cfg
        self.rng = np.random.default_rng(cfg.seed)
        self.grid = Grid(width=cfg.grid_width, height=cfg.grid_height)
        self.food_allocator = FoodAllocator(
            self.grid, rng=self.rng, max_attempts=cfg.max_placement_attempts,
        )
        self.state = SimulationState()

    @property
    def status(self) -> SimulationStatus:
        return self.state.status

    @property
    def game_over(self) -> bool:
        return self.state.status == SimulationStatus.ENDED

    @property
    def snakes(self) -> list[Snake]:
        return self.state.snakes

    @property
    def food(self) -> Food | None:
        return self.state.food

    @property
    def human_snake(self) -> Snake | None:
        return self.state.human_snake

    def start(self, snake_count: int = 1, human_control: bool = False) -> dict:
        """Discard any previous run and begin a new one."""
        snakes = create_snakes(
            self.grid,
            snake_count,
            human_control=human_control,
            rng=self.rng,
            max_attempts=self.config.max_placement_attempts,
        )
        self.state = SimulationState(
            snakes=snakes,
            designated_human_id=0 if human_control else None,
            status=SimulationStatus.RUNNING,
        )
        self.state.food = self.food_allocator.place(snakes, self._snake_colors())
        self.grid.paint(snakes, self.state.food)
        logger.info(
            "Simulation started with %d snakes on a %dx%d grid (human %s).",
            len(snakes),
            self.grid.width,
            self.grid.height,
            "on" if human_control else "off",
        )
        return self.get_state()

    def set_direction(self, direction: Direction) -> bool:
        """Overwrite the human snake's pending direction.

        Returns False when there is no running human snake or the
        direction would reverse a snake longer than one segment.
        """
        human = self.state.human_snake
        if human is None or self.state.status != SimulationStatus.RUNNING:
            return False
        return human.set_direction(direction)

    def set_human_control(self, enabled: bool) -> None:
        """Toggle the human flag on the designated snake without a reset."""
        state = self.state
        designated = state.find(state.designated_human_id)
        if enabled:
            if designated is None and state.snakes:
                designated = state.snakes[0]
                state.designated_human_id = designated.snake_id
            if designated is not None:
                designated.human_controlled = True
        elif designated is not None:
            designated.human_controlled = False
        logger.info(
            "Human control %s (snake %s).",
            "enabled" if enabled else "disabled",
            state.designated_human_id,
        )

    def tick(self) -> dict:
        """Advance the run by one tick and apply the stopping rule."""
        state = self.state
        if state.status != SimulationStatus.RUNNING:
            return self.get_state()

        any_moved = False
        try:
            for snake in state.snakes:
                if self._move(snake):
                    any_moved = True
        except BoardFullError:
            logger.warning("No free cell left for food at tick %d.", state.tick + 1)
            state.food = None
            state.tick += 1
            self._end(EndReason.BOARD_FULL)
            self.grid.paint(state.snakes, state.food)
            return self.get_state()

        state.tick += 1
        human = state.human_snake
        if human is not None:
            if legal_moves(human, state.snakes, self.grid):
                state.blocked_ticks = 0
            else:
                state.blocked_ticks += 1
                logger.debug(
                    "Human snake %d boxed in (%d/%d).",
                    human.snake_id,
                    state.blocked_ticks,
                    self.config.blocked_threshold,
                )
                if state.blocked_ticks >= self.config.blocked_threshold:
                    self._end(EndReason.HUMAN_BLOCKED)
        elif not any_moved:
            self._end(EndReason.ALL_BLOCKED)

        self.grid.paint(state.snakes, state.food)
        return self.get_state()

    def _move(self, snake: Snake) -> bool:
        """Try to move one snake against the current layout."""
        if snake.human_controlled:
            direction = snake.direction
            if not is_free(
                self.grid, self.state.snakes, snake.next_head(direction),
                snake.snake_id,
            ):
                return False
        else:
            assert self.state.food is not None  # noqa: S101
            direction = plan_move(
                snake, self.state.food, self.state.snakes, self.grid,
            )
            if direction is None:
                return False
            snake.direction = direction
        self._commit(snake, snake.next_head(direction))
        return True

    def _commit(self, snake: Snake, new_head: Cell) -> None:
        food = self.state.food
        grow = food is not None and new_head == food.cell
        snake.advance(new_head, grow=grow)
        if grow:
            logger.debug(
                "Snake %d ate at %s, length %d.",
                snake.snake_id, new_head, len(snake.body),
            )
            self.state.food = self.food_allocator.place(
                self.state.snakes, self._snake_colors(),
            )

    def _snake_colors(self) -> set[str]:
        return {s.color for s in self.state.snakes}

    def _end(self, reason: EndReason) -> None:
        self.state.status = SimulationStatus.ENDED
        self.state.end_reason = reason
        logger.info(
            "Simulation ended at tick %d (%s).", self.state.tick, reason.value,
        )

    def get_state(self) -> dict:
        """Return the full, serializable simulation snapshot."""
        state = self.state
        return {
            "status": state.status.value,
            "tick": state.tick,
            "game_over": state.status == SimulationStatus.ENDED,
            "end_reason": state.end_reason.value if state.end_reason else None,
            "human_snake_id": state.human_snake_id,
            "blocked_ticks": state.blocked_ticks,
            "grid": self.grid.to_dict(),
            "snakes": [s.to_dict() for s in state.snakes],
            "food": state.food.to_dict() if state.food else None,
        }
