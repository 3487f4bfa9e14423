"""
Map dominance and invasion geometry contracts.
"""

from enum import Enum

from pydantic import Field

from .common import FrozenContract, NormalizedPoint


class InfluenceCell(FrozenContract):
    """Per-team influence sampled at one point of the normalized map."""

    x: float = Field(..., ge=0, le=1)
    y: float = Field(..., ge=0, le=1)
    blue: float = Field(0, ge=0)
    red: float = Field(0, ge=0)


class DominanceField(FrozenContract):
    """Sampled territory field of one frame.

    Cells are stored column by column: ``cells[i * resolution + j]`` is the
    sample at ``x = i / (resolution - 1)``, ``y = j / (resolution - 1)``.
    """

    timestamp_sec: int = Field(..., ge=0)
    resolution: int = Field(0, ge=0)
    cells: tuple[InfluenceCell, ...] = ()

    def cell_at(self, i: int, j: int) -> InfluenceCell:
        return self.cells[i * self.resolution + j]

    @property
    def is_empty(self) -> bool:
        return not self.cells


class Dominance(str, Enum):
    """Which team controls a zone."""

    BLUE = "blue"
    RED = "red"
    NEUTRAL = "neutral"


class ZoneCell(FrozenContract):
    """Coarse summary of the field over one zone of the map."""

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    dominance: Dominance
    strength: float = Field(..., ge=0, le=1, description="How strongly the zone is held")


class InvasionPolygon(FrozenContract):
    """Directional shape of one group of units invading enemy territory."""

    team_id: int = Field(..., description="Team of the invading units")
    participant_ids: tuple[int, ...] = ()
    points: tuple[NormalizedPoint, ...] = Field(..., min_length=3)
