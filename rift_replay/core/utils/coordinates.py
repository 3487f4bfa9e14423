"""World <-> normalized map coordinate helpers.

Two framings are in use: the dominance field samples the map inside a small
padding ring, while invasion geometry uses the minimap's wider, clamped
bounds. Both flip the vertical axis so that y grows downward.
"""

from __future__ import annotations

from typing import Final, NamedTuple

from rift_replay.contracts.common import NormalizedPoint, Position


class MapBounds(NamedTuple):
    min_x: float
    max_x: float
    min_z: float
    max_z: float


MAP_BOUNDS: Final[MapBounds] = MapBounds(min_x=0, max_x=14820, min_z=0, max_z=14881)
MINIMAP_BOUNDS: Final[MapBounds] = MapBounds(min_x=-170, max_x=16220, min_z=-1850, max_z=14980)
MINIMAP_PADDING: Final[float] = 0.03


def normalize_position(position: Position) -> NormalizedPoint:
    """Map a world position into the padded [0, 1] square used by the dominance field."""
    raw_x = (position.x - MAP_BOUNDS.min_x) / (MAP_BOUNDS.max_x - MAP_BOUNDS.min_x)
    raw_y = 1 - (position.z - MAP_BOUNDS.min_z) / (MAP_BOUNDS.max_z - MAP_BOUNDS.min_z)

    playable = 1 - 2 * MINIMAP_PADDING
    return NormalizedPoint(x=MINIMAP_PADDING + raw_x * playable, y=MINIMAP_PADDING + raw_y * playable)


def normalize_minimap_position(position: Position) -> NormalizedPoint:
    """Map a world position onto the minimap, clamped to [0, 1]."""
    range_x = MINIMAP_BOUNDS.max_x - MINIMAP_BOUNDS.min_x
    range_z = MINIMAP_BOUNDS.max_z - MINIMAP_BOUNDS.min_z
    x = max(0.0, min(1.0, (position.x - MINIMAP_BOUNDS.min_x) / range_x))
    y = 1 - max(0.0, min(1.0, (position.z - MINIMAP_BOUNDS.min_z) / range_z))
    return NormalizedPoint(x=x, y=y)
