"""Cell occupancy queries over the snake collection."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snake_swarm.grid import Grid
    from snake_swarm.snake import Cell, Snake


def is_occupied(
    snakes: Iterable[Snake],
    cell: Cell,
    excluding_tail_of: int | None = None,
) -> bool:
    """Return True if any snake segment sits on *cell*.

    When *excluding_tail_of* names a snake id, that snake's last segment
    is skipped: a non-growing move vacates it as the head arrives.
    """
    for snake in snakes:
        body = snake.body
        last = len(body) - 1
        for i, segment in enumerate(body):
            if i == last and snake.snake_id == excluding_tail_of:
                continue
            if segment == cell:
                return True
    return False


def occupied_cells(snakes: Iterable[Snake]) -> set[Cell]:
    """Return the set of every body cell."""
    cells: set[Cell] = set()
    for snake in snakes:
        cells.update(snake.body)
    return cells


def is_free(
    grid: Grid,
    snakes: Sequence[Snake],
    cell: Cell,
    excluding_tail_of: int | None = None,
) -> bool:
    """Whether a head may move onto *cell*: in bounds and unoccupied."""
    x, y = cell
    if not grid.in_bounds(x, y):
        return False
    return not is_occupied(snakes, cell, excluding_tail_of)
