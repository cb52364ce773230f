"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from snake_swarm.colors import choose_food_color
from snake_swarm.occupancy import occupied_cells

if TYPE_CHECKING:
    from snake_swarm.grid import Grid
    from snake_swarm.snake import Cell, Snake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Food:
    """The single food item on the board."""

    cell: Cell
    color: str

    def to_dict(self) -> dict:
        return {"cell": list(self.cell), "color": self.color}


class FoodAllocator:
    """Places food on unoccupied cells.

    Uses a NumPy RNG so seeded runs place food reproducibly.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
        max_attempts: int = 1_000,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def place(
        self,
        snakes: Sequence[Snake],
        excluded_colors: Collection[str] | None = None,
    ) -> Food:
        """Return food on a random cell no snake occupies.

        Raises :class:`~snake_swarm.errors.BoardFullError` if every cell
        is taken.
        """
        cell = self.grid.sample_free_cell(
            occupied_cells(snakes), self.rng, self.max_attempts,
        )
        if excluded_colors is None:
            excluded_colors = {s.color for s in snakes}
        food = Food(cell=cell, color=choose_food_color(excluded_colors))
        logger.debug("Food placed at %s (%s).", food.cell, food.color)
        return food
