"""Grid representation for the simulation board."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from snake_swarm.errors import BoardFullError

if TYPE_CHECKING:
    from snake_swarm.food import Food
    from snake_swarm.snake import Cell, Snake

logger = logging.getLogger(__name__)


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """NumPy-backed board with fixed dimensions.

    Coordinates are ``(x, y)`` cells; the backing array is indexed
    ``cells[y, x]``. The array is a painted view of the entities and is
    rebuilt with :meth:`paint`; the snake bodies stay the source of truth.
    """

    def __init__(self, width: int = 30, height: int = 30) -> None:
        if width < 1 or height < 1 or width * height < 2:
            raise ValueError("Grid must hold at least 2 cells.")
        self.width = width
        self.height = height
        self.cells = np.zeros((height, width), dtype=np.int8)

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def random_cell(self, rng: np.random.Generator) -> Cell:
        """Sample a cell uniformly at random."""
        return int(rng.integers(self.width)), int(rng.integers(self.height))

    def sample_free_cell(
        self,
        occupied: set[Cell],
        rng: np.random.Generator,
        max_attempts: int = 1_000,
    ) -> Cell:
        """Rejection-sample a uniformly random cell outside *occupied*.

        After *max_attempts* rejected draws, picks uniformly among the
        enumerated empty cells instead. Raises :class:`BoardFullError`
        when no cell is free.
        """
        for _ in range(max_attempts):
            cell = self.random_cell(rng)
            if cell not in occupied:
                return cell

        empty = self.empty_cells(occupied)
        if not empty:
            raise BoardFullError("No empty cells left on the board.")
        logger.debug(
            "Rejection sampling gave up after %d draws; %d cells free.",
            max_attempts,
            len(empty),
        )
        return empty[int(rng.integers(len(empty)))]

    def paint(self, snakes: Iterable[Snake], food: Food | None = None) -> None:
        """Rebuild the cell array from snake bodies and the food cell."""
        self.clear()
        for snake in snakes:
            for x, y in snake.body:
                self.cells[y, x] = CellType.SNAKE
        if food is not None:
            fx, fy = food.cell
            self.cells[fy, fx] = CellType.FOOD

    def empty_cells(self, occupied: set[Cell]) -> list[Cell]:
        """Return every cell not in *occupied*, in row-major order."""
        mask = np.ones((self.height, self.width), dtype=bool)
        for x, y in occupied:
            mask[y, x] = False
        ys, xs = np.nonzero(mask)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "cells": self.cells.tolist(),
        }
