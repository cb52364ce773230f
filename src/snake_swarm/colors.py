"""Snake and food color selection."""

from __future__ import annotations

import logging
from collections.abc import Collection

import numpy as np

from snake_swarm.errors import PlacementError

logger = logging.getLogger(__name__)

SNAKE_PALETTE: tuple[str, ...] = (
    "red",
    "blue",
    "green",
    "orange",
    "purple",
    "cyan",
    "magenta",
    "brown",
    "pink",
    "lime",
    "teal",
    "navy",
    "maroon",
    "olive",
    "coral",
    "turquoise",
    "violet",
)

FOOD_CANDIDATES: tuple[str, ...] = (
    "yellow",
    "black",
    "white",
    "gray",
    "silver",
    "gold",
    "teal",
    "navy",
)

DEFAULT_FOOD_COLOR = "yellow"

_COLOR_SPACE = 0xFFFFFF + 1


def random_color(rng: np.random.Generator) -> str:
    """Draw a ``#rrggbb`` color uniformly over the 24-bit space."""
    return f"#{int(rng.integers(_COLOR_SPACE)):06x}"


def assign_snake_colors(
    count: int,
    rng: np.random.Generator,
    max_attempts: int = 1_000,
) -> list[str]:
    """Return *count* distinct colors, presets first.

    Colors beyond the palette are rejection-sampled against the ones
    already assigned; each draw gets at most *max_attempts* tries.
    """
    colors = list(SNAKE_PALETTE[:count])
    taken = set(colors)
    while len(colors) < count:
        for _ in range(max_attempts):
            color = random_color(rng)
            if color not in taken:
                break
        else:
            raise PlacementError(
                f"No unused color found after {max_attempts} draws."
            )
        colors.append(color)
        taken.add(color)
    if count > len(SNAKE_PALETTE):
        logger.debug(
            "Generated %d random colors beyond the preset palette.",
            count - len(SNAKE_PALETTE),
        )
    return colors


def choose_food_color(excluded_colors: Collection[str]) -> str:
    """Pick the first food candidate not used by a snake.

    Falls back to :data:`DEFAULT_FOOD_COLOR` even when it collides.
    """
    for color in FOOD_CANDIDATES:
        if color not in excluded_colors:
            return color
    return DEFAULT_FOOD_COLOR
