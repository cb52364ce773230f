"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque

Cell = tuple[int, int]


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    Declaration order is the planner's candidate order.
    """

    RIGHT = (1, 0)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    UP = (0, -1)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))

    def step(self, cell: Cell) -> Cell:
        """Return the cell one step from *cell* in this direction."""
        dx, dy = self.value
        return cell[0] + dx, cell[1] + dy


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        snake_id: int,
        color: str,
        start: Cell,
        direction: Direction = Direction.RIGHT,
        human_controlled: bool = False,
    ) -> None:
        self.snake_id = snake_id
        self.color = color
        self.body: deque[Cell] = deque([start])
        self.direction = direction
        self.human_controlled = human_controlled

    def __len__(self) -> int:
        return len(self.body)

    def __repr__(self) -> str:
        return (
            f"Snake(id={self.snake_id}, color={self.color!r}, "
            f"head={self.head}, length={len(self.body)})"
        )

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Cell:
        """Return the tail coordinate."""
        return self.body[-1]

    def is_reversal(self, direction: Direction) -> bool:
        """Whether *direction* would turn the snake back onto its neck."""
        return len(self.body) > 1 and direction == self.direction.opposite

    def set_direction(self, new_direction: Direction) -> bool:
        """Change direction, ignoring 180° reversals. Returns True if applied."""
        if self.is_reversal(new_direction):
            return False
        self.direction = new_direction
        return True

    def next_head(self, direction: Direction | None = None) -> Cell:
        """Compute the next head position without moving."""
        return (direction or self.direction).step(self.head)

    def advance(self, new_head: Cell, grow: bool = False) -> Cell | None:
        """Move the head to *new_head*.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        if grow:
            return None
        return self.body.pop()

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "id": self.snake_id,
            "color": self.color,
            "body": [list(seg) for seg in self.body],
            "direction": list(self.direction.value),
            "human_controlled": self.human_controlled,
            "length": len(self.body),
        }
