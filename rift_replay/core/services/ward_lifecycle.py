"""Ward lifecycle resolution.

Placements and kills arrive as two unrelated streams: a kill does not say
which ward died. Each kill is matched to the nearest ward that is alive at
that second, which shortens that ward's lifetime exactly once.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from rift_replay.contracts.common import Position, TeamId
from rift_replay.contracts.events import RawEvent
from rift_replay.contracts.match import Participant
from rift_replay.contracts.wards import WARD_DURATIONS, Ward, WardType
from rift_replay.core.utils.payload import as_int, parse_position

logger = logging.getLogger(__name__)

DEFAULT_WARD_TEAM = TeamId.RED.value


def normalize_ward_type(raw_type: str | None) -> WardType:
    """Map the feed's free-text ward type onto :class:`WardType`."""
    value = (raw_type or "").lower()
    if "control" in value or "pink" in value or "jammer" in value:
        return WardType.CONTROL_WARD
    if "bluetrinket" in value or "blue_trinket" in value or "farsight" in value:
        return WardType.BLUE_TRINKET
    if "sight" in value:
        return WardType.SIGHT_WARD
    return WardType.YELLOW_TRINKET


def default_expiry(placed_at: int, ward_type: WardType) -> float:
    duration = WARD_DURATIONS.get(ward_type, math.inf)
    return placed_at + duration if duration != math.inf else math.inf


@dataclass
class _WardTrack:
    """Mutable ward while destructions are being matched."""

    ward_id: str
    team_id: int
    placer_id: int
    position: Position | None
    placed_at: int
    expires_at: float
    ward_type: WardType
    resolved: bool = False

    def freeze(self) -> Ward:
        return Ward(
            ward_id=self.ward_id,
            team_id=self.team_id,
            placer_id=self.placer_id,
            position=self.position,
            placed_at=self.placed_at,
            expires_at=self.expires_at,
            ward_type=self.ward_type,
        )


def _track_from_placement(event: RawEvent, roster: Mapping[int, Participant]) -> _WardTrack:
    payload = event.payload
    placer_id = as_int(payload.get("placer"))
    placer = roster.get(placer_id)
    placed_at = event.second
    raw_type = payload.get("wardType")
    ward_type = normalize_ward_type(raw_type if isinstance(raw_type, str) else None)
    return _WardTrack(
        ward_id=f"ward-{event.game_time_ms}-{placer_id}",
        team_id=placer.team_id if placer else DEFAULT_WARD_TEAM,
        placer_id=placer_id,
        position=parse_position(payload.get("position")),
        placed_at=placed_at,
        expires_at=default_expiry(placed_at, ward_type),
        ward_type=ward_type,
    )


def _distance_sq(a: Position, b: Position) -> float:
    dx = a.x - b.x
    dz = a.z - b.z
    return dx * dx + dz * dz


def resolve_ward_lifecycles(
    placements: Iterable[RawEvent],
    destructions: Iterable[RawEvent],
    roster: Mapping[int, Participant],
) -> list[Ward]:
    """Pair ward placements with ward kills.

    Args:
        placements: ``ward_placed`` events, any order
        destructions: ``ward_killed`` events, any order
        roster: Participants by ID, used to attribute a ward to a team

    Returns:
        Resolved wards ordered by placement time
    """
    tracks = [
        _track_from_placement(event, roster)
        for event in sorted(placements, key=lambda e: e.game_time_ms)
    ]

    unmatched = 0
    for destruction in sorted(destructions, key=lambda e: e.game_time_ms):
        position = parse_position(destruction.payload.get("position"))
        if position is None:
            continue

        destroyed_at = destruction.second
        closest: _WardTrack | None = None
        min_distance_sq = math.inf
        for track in tracks:
            if track.resolved or track.position is None:
                continue
            if not (track.placed_at <= destroyed_at < track.expires_at):
                continue
            distance_sq = _distance_sq(position, track.position)
            if distance_sq < min_distance_sq:
                min_distance_sq = distance_sq
                closest = track

        if closest is None:
            unmatched += 1
            continue
        closest.expires_at = destroyed_at
        closest.resolved = True

    if unmatched:
        logger.debug("Discarded %d ward kills with no live ward to match", unmatched)

    return [track.freeze() for track in tracks]


def active_wards_at(wards: Iterable[Ward], second: int) -> list[Ward]:
    """Wards visible at ``second``: placed at or before it and not yet expired."""
    return [ward for ward in wards if ward.is_active_at(second)]
