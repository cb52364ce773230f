"""Simulation configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    """Board geometry, timing, and placement limits for a simulation.

    The grid size is derived from the board's pixel dimensions and the
    fixed cell size. Supports JSON serialization for reproducible runs.
    """

    board_width: int = 600
    board_height: int = 600
    cell_size: int = 20
    tick_rate_ms: int = 100
    blocked_threshold: int = 3
    max_placement_attempts: int = 1_000
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        if self.board_width < self.cell_size or self.board_height < self.cell_size:
            raise ValueError("board must be at least one cell wide and tall.")
        if self.total_cells < 2:
            raise ValueError("board must hold at least 2 cells.")
        if self.tick_rate_ms < 1:
            raise ValueError("tick_rate_ms must be at least 1.")
        if self.blocked_threshold < 1:
            raise ValueError("blocked_threshold must be at least 1.")
        if self.max_placement_attempts < 1:
            raise ValueError("max_placement_attempts must be at least 1.")

    @property
    def grid_width(self) -> int:
        return self.board_width // self.cell_size

    @property
    def grid_height(self) -> int:
        return self.board_height // self.cell_size

    @property
    def total_cells(self) -> int:
        return self.grid_width * self.grid_height

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> SimulationConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
