"""Greedy move planning for autonomous snakes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from snake_swarm.occupancy import is_free
from snake_swarm.snake import Cell, Direction, Snake

if TYPE_CHECKING:
    from snake_swarm.food import Food
    from snake_swarm.grid import Grid


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def candidate_directions(snake: Snake) -> list[Direction]:
    """Directions in candidate order, without the reversal for long snakes."""
    return [d for d in Direction if not snake.is_reversal(d)]


def legal_moves(
    snake: Snake, snakes: Sequence[Snake], grid: Grid,
) -> list[Direction]:
    """Every direction whose next head cell is free.

    No reversal filter: this answers whether the snake is boxed in.
    """
    return [
        d for d in Direction
        if is_free(grid, snakes, snake.next_head(d), snake.snake_id)
    ]


def plan_move(
    snake: Snake,
    food: Food,
    snakes: Sequence[Snake],
    grid: Grid,
) -> Direction | None:
    """Pick the safe move that lands closest to the food.

    Ties go to the earliest direction in candidate order. Returns
    ``None`` when every candidate is out of bounds or occupied.
    """
    best: Direction | None = None
    best_distance = 0
    for direction in candidate_directions(snake):
        target = snake.next_head(direction)
        if not is_free(grid, snakes, target, snake.snake_id):
            continue
        distance = manhattan(target, food.cell)
        if best is None or distance < best_distance:
            best = direction
            best_distance = distance
    return best
