"""Maps raw key names to directions for the human-controlled snake."""

from __future__ import annotations

from snake_swarm.snake import Direction

_KEY_MAP: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "w": Direction.UP,
    "W": Direction.UP,
    "up": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "s": Direction.DOWN,
    "S": Direction.DOWN,
    "down": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "a": Direction.LEFT,
    "A": Direction.LEFT,
    "left": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "d": Direction.RIGHT,
    "D": Direction.RIGHT,
    "right": Direction.RIGHT,
}


def direction_for_key(key: str) -> Direction | None:
    """Return the direction bound to *key*, or None for unbound keys."""
    return _KEY_MAP.get(key)
