"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class StartRequest(BaseModel):
    """Request body for POST /simulation/start."""

    snake_count: int = 1
    human_control: bool = False

    @field_validator("snake_count")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return max(1, value)


class HumanControlRequest(BaseModel):
    """Request body for POST /simulation/human-control."""

    enabled: bool


class DirectionRequest(BaseModel):
    """Request body for POST /simulation/direction."""

    direction: str = Field(min_length=1, max_length=16)


class DirectionResponse(BaseModel):
    """Whether a direction change was applied."""

    accepted: bool
