"""Exceptions raised by the simulation core."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for simulation failures."""


class PlacementError(SimulationError):
    """Random placement could not find a valid value."""


class BoardFullError(PlacementError):
    """No unoccupied cell is left on the board."""
