"""
Map dominance calculation.

Turns one frame into a per-team influence field over the normalized map:
a static territorial bias along the river diagonal plus a quadratic-falloff
aura around every positioned champion and active ward.
"""

from __future__ import annotations

import logging
import math
from typing import Literal, NamedTuple

from rift_replay.config import Settings, get_settings
from rift_replay.contracts.common import TeamId
from rift_replay.contracts.dominance import Dominance, DominanceField, InfluenceCell, ZoneCell
from rift_replay.contracts.timeline import Frame
from rift_replay.core.observability import trace_performance
from rift_replay.core.ports import DominanceStrategyPort
from rift_replay.core.utils.coordinates import normalize_position

logger = logging.getLogger(__name__)

CHAMPION_AURA_WEIGHT = 1.5
WARD_AURA_WEIGHT = 1.2
WARD_TEAM_FACTOR = 0.8
DYNAMIC_WEIGHT = 2.0
STATIC_BIAS_WEIGHT = 0.3

# Zones whose margin is below this share of their total influence are contested
NEUTRAL_MARGIN = 0.1
MIN_ZONE_INFLUENCE = 1e-6


class _AuraSource(NamedTuple):
    x: float
    y: float
    radius: float
    weight: float
    is_blue: bool


def static_bias(x: float, y: float, team_id: int) -> float:
    """Territorial prior: strongest deep in a team's own half of the diagonal."""
    distance_from_diagonal = y - x if team_id == TeamId.BLUE.value else x - y
    return max(0.0, min(1.0, distance_from_diagonal * 2 + 0.5)) * STATIC_BIAS_WEIGHT


def aura_strength(distance: float, radius: float) -> float:
    """Quadratic falloff, zero beyond ``radius``."""
    if distance > radius:
        return 0.0
    return (1 - distance / radius) ** 2


class ProximityDominanceStrategy(DominanceStrategyPort):
    """Dominance from champion and ward proximity."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.resolution = settings.dominance_resolution
        self.champion_radius = settings.champion_vision_range / settings.map_span
        self.ward_radius = settings.ward_vision_range / settings.map_span

    @trace_performance
    def calculate(self, frame: Frame) -> DominanceField:
        if frame.snapshot is None:
            return DominanceField(timestamp_sec=frame.timestamp_sec)

        sources = self._aura_sources(frame)
        steps = self.resolution - 1
        cells = []
        for i in range(self.resolution):
            x = i / steps
            for j in range(self.resolution):
                y = j / steps
                blue, red = self._influence_at(x, y, sources)
                cells.append(
                    InfluenceCell(
                        x=x,
                        y=y,
                        blue=static_bias(x, y, TeamId.BLUE.value) + DYNAMIC_WEIGHT * blue,
                        red=static_bias(x, y, TeamId.RED.value) + DYNAMIC_WEIGHT * red,
                    )
                )

        return DominanceField(
            timestamp_sec=frame.timestamp_sec, resolution=self.resolution, cells=cells
        )

    def _aura_sources(self, frame: Frame) -> list[_AuraSource]:
        sources = []
        for participant in frame.participants:
            if participant.position is None:
                continue
            point = normalize_position(participant.position)
            sources.append(
                _AuraSource(
                    point.x,
                    point.y,
                    self.champion_radius,
                    CHAMPION_AURA_WEIGHT,
                    participant.team_id == TeamId.BLUE.value,
                )
            )
        for ward in frame.active_wards:
            if ward.position is None:
                continue
            point = normalize_position(ward.position)
            sources.append(
                _AuraSource(
                    point.x,
                    point.y,
                    self.ward_radius,
                    WARD_AURA_WEIGHT * WARD_TEAM_FACTOR,
                    ward.team_id == TeamId.BLUE.value,
                )
            )
        return sources

    @staticmethod
    def _influence_at(x: float, y: float, sources: list[_AuraSource]) -> tuple[float, float]:
        blue = red = 0.0
        for source in sources:
            distance = math.hypot(source.x - x, source.y - y)
            influence = aura_strength(distance, source.radius) * source.weight
            if source.is_blue:
                blue += influence
            else:
                red += influence
        return blue, red


def create_dominance_calculator(
    strategy: Literal["proximity"] = "proximity", settings: Settings | None = None
) -> DominanceStrategyPort:
    """Factory for dominance strategies. Unknown names fall back to proximity."""
    if strategy != "proximity":
        logger.warning("Unknown dominance strategy %r, using proximity", strategy)
    return ProximityDominanceStrategy(settings)


def summarize_zones(field: DominanceField, grid_size: int = 3) -> list[ZoneCell]:
    """Collapse a field into a ``grid_size`` x ``grid_size`` board of zones.

    Rows follow ``y`` and columns follow ``x``. An empty field summarizes to
    an empty list.
    """
    if field.is_empty or grid_size <= 0:
        return []

    totals = [[[0.0, 0.0, 0] for _ in range(grid_size)] for _ in range(grid_size)]
    for cell in field.cells:
        row = min(int(cell.y * grid_size), grid_size - 1)
        col = min(int(cell.x * grid_size), grid_size - 1)
        bucket = totals[row][col]
        bucket[0] += cell.blue
        bucket[1] += cell.red
        bucket[2] += 1

    zones = []
    for row in range(grid_size):
        for col in range(grid_size):
            blue, red, count = totals[row][col]
            if count:
                blue, red = blue / count, red / count
            total = blue + red
            if total < MIN_ZONE_INFLUENCE:
                zones.append(ZoneCell(row=row, col=col, dominance=Dominance.NEUTRAL, strength=0))
                continue

            strength = min(1.0, abs(blue - red) / total)
            if strength < NEUTRAL_MARGIN:
                dominance = Dominance.NEUTRAL
            else:
                dominance = Dominance.BLUE if blue > red else Dominance.RED
            zones.append(ZoneCell(row=row, col=col, dominance=dominance, strength=strength))
    return zones
