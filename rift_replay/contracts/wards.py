"""Ward contracts."""

import math
from enum import Enum

from pydantic import Field

from .common import FrozenContract, Position


class WardType(str, Enum):
    """Types of wards that can be placed."""

    YELLOW_TRINKET = "YELLOW_TRINKET"
    CONTROL_WARD = "CONTROL_WARD"
    SIGHT_WARD = "SIGHT_WARD"
    BLUE_TRINKET = "BLUE_TRINKET"


# Seconds a ward lives when nobody kills it; inf means only a kill ends it.
WARD_DURATIONS: dict[WardType, float] = {
    WardType.YELLOW_TRINKET: 120,
    WardType.SIGHT_WARD: 7,
    WardType.CONTROL_WARD: math.inf,
    WardType.BLUE_TRINKET: math.inf,
}


class Ward(FrozenContract):
    """A resolved ward with its visibility interval ``[placed_at, expires_at)``."""

    ward_id: str
    team_id: int
    placer_id: int = Field(0)
    position: Position | None = None
    placed_at: int = Field(..., ge=0, description="Second the ward was placed")
    expires_at: float = Field(..., description="Second the ward stops existing, may be inf")
    ward_type: WardType

    def is_active_at(self, second: int) -> bool:
        return self.placed_at <= second < self.expires_at
