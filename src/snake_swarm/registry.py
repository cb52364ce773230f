"""Snake creation and initial placement."""

from __future__ import annotations

import logging

import numpy as np

from snake_swarm.colors import assign_snake_colors
from snake_swarm.grid import Grid
from snake_swarm.snake import Cell, Direction, Snake

logger = logging.getLogger(__name__)

_DIRECTIONS: tuple[Direction, ...] = tuple(Direction)


def clamp_snake_count(count: int | str | None, total_cells: int) -> int:
    """Clamp *count* to ``[1, total_cells - 1]``.

    Values that do not parse as an integer count as 1. At least one cell
    always stays free for food.
    """
    try:
        requested = int(count)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("Snake count %r is not a number; using 1.", count)
        requested = 1
    clamped = max(1, requested)
    clamped = min(clamped, total_cells - 1)
    if clamped != requested:
        logger.warning(
            "Snake count %d clamped to %d for a %d-cell board.",
            requested, clamped, total_cells,
        )
    return clamped


def create_snakes(
    grid: Grid,
    count: int,
    human_control: bool = False,
    rng: np.random.Generator | None = None,
    max_attempts: int = 1_000,
) -> list[Snake]:
    """Create *count* single-segment snakes at random free cells.

    Snakes are placed one by one, each avoiding every cell taken by the
    snakes before it. Snake 0 is human-controlled when *human_control*
    is set.
    """
    rng = rng if rng is not None else np.random.default_rng()
    count = clamp_snake_count(count, grid.total_cells)
    colors = assign_snake_colors(count, rng, max_attempts)

    snakes: list[Snake] = []
    occupied: set[Cell] = set()
    for snake_id, color in enumerate(colors):
        start = grid.sample_free_cell(occupied, rng, max_attempts)
        direction = _DIRECTIONS[int(rng.integers(len(_DIRECTIONS)))]
        snake = Snake(
            snake_id,
            color,
            start,
            direction,
            human_controlled=human_control and snake_id == 0,
        )
        occupied.add(start)
        snakes.append(snake)

    logger.debug(
        "Created %d snakes (human control %s).",
        len(snakes), "on" if human_control else "off",
    )
    return snakes
