"""
Common data types and base models for rift-replay.
All models use Pydantic V2.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TeamId(int, Enum):
    """Team identifiers used by the telemetry feed."""

    BLUE = 100
    RED = 200


class Position(BaseModel):
    """2D world position on the map (the feed calls the vertical axis ``z``)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: float = Field(..., description="X coordinate on the map")
    z: float = Field(..., description="Z coordinate on the map")


class NormalizedPoint(BaseModel):
    """Point in minimap space, both axes in [0, 1], y pointing down."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class BaseContract(BaseModel):
    """Base model for all data contracts with common configuration."""

    model_config = ConfigDict(
        # Validate data on assignment
        validate_assignment=True,
        # Use enum values in JSON
        use_enum_values=True,
        # Forbid extra fields to ensure data integrity
        extra="forbid",
    )


class FrozenContract(BaseModel):
    """Immutable contract: once built, a value can be shared between frames."""

    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
        extra="forbid",
    )
