"""
Invasion geometry.

Finds units deep in enemy territory, groups the ones standing close to each
other, and turns every group into a polygon pointing back toward its own
base: a narrow wedge for a lone unit, a quadrilateral spanned by the group's
widest front for several.

All coordinates are minimap-normalized, with y growing downward: the blue
base sits at (0, 1) and the red base at (1, 0).
"""

from __future__ import annotations

from collections.abc import Sequence

from rift_replay.config import Settings, get_settings
from rift_replay.contracts.common import NormalizedPoint, TeamId
from rift_replay.contracts.dominance import InvasionPolygon
from rift_replay.contracts.match import ParticipantFrameState
from rift_replay.contracts.timeline import Frame
from rift_replay.core.utils.coordinates import normalize_minimap_position

BASE_POSITIONS: dict[int, NormalizedPoint] = {
    TeamId.BLUE.value: NormalizedPoint(x=0.0, y=1.0),
    TeamId.RED.value: NormalizedPoint(x=1.0, y=0.0),
}

WEDGE_REACH = 0.4
WEDGE_HALF_WIDTH = 0.35
FRONT_PROJECTION = 0.8

Invader = tuple[int, NormalizedPoint]


def _cross(o: NormalizedPoint, a: NormalizedPoint, b: NormalizedPoint) -> float:
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def _distance_sq(a: NormalizedPoint, b: NormalizedPoint) -> float:
    return (a.x - b.x) ** 2 + (a.y - b.y) ** 2


def invasion_depth(point: NormalizedPoint, team_id: int) -> float:
    """How far past its own base corner a unit has pushed.

    Zero at the team's base, 2 at the enemy base, 1 on the river diagonal.
    """
    if team_id == TeamId.BLUE.value:
        return point.x + (1 - point.y)
    return (1 - point.x) + point.y


def find_invaders(
    participants: Sequence[ParticipantFrameState], team_id: int, threshold: float = 1.0
) -> list[Invader]:
    """Positioned members of ``team_id`` whose invasion depth exceeds ``threshold``."""
    invaders = []
    for participant in participants:
        if participant.team_id != team_id or participant.position is None:
            continue
        point = normalize_minimap_position(participant.position)
        if invasion_depth(point, team_id) > threshold:
            invaders.append((participant.participant_id, point))
    return invaders


def cluster_points(points: Sequence[NormalizedPoint], join_distance: float) -> list[list[int]]:
    """Group indices of ``points`` into connected components.

    Two points are linked when they are strictly closer than ``join_distance``.
    Components, and the indices inside them, come out in discovery order.
    """
    join_sq = join_distance**2
    neighbours: list[list[int]] = [[] for _ in points]
    for i in range(len(points)):
        for j in range(i + 1, len(points)):
            if _distance_sq(points[i], points[j]) < join_sq:
                neighbours[i].append(j)
                neighbours[j].append(i)

    visited: set[int] = set()
    groups = []
    for start in range(len(points)):
        if start in visited:
            continue
        group = []
        stack = [start]
        while stack:
            index = stack.pop()
            if index in visited:
                continue
            visited.add(index)
            group.append(index)
            # Reverse so neighbours are visited in the order a recursive walk would use
            stack.extend(n for n in reversed(neighbours[index]) if n not in visited)
        groups.append(group)
    return groups


def convex_hull(points: Sequence[NormalizedPoint]) -> list[NormalizedPoint]:
    """Andrew's monotone chain. Collinear points are dropped."""
    if len(points) <= 2:
        return list(points)

    ordered = sorted(points, key=lambda p: (p.x, p.y))
    lower: list[NormalizedPoint] = []
    for point in ordered:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], point) <= 0:
            lower.pop()
        lower.append(point)

    upper: list[NormalizedPoint] = []
    for point in reversed(ordered):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], point) <= 0:
            upper.pop()
        upper.append(point)

    return lower[:-1] + upper[:-1]


def _wedge(point: NormalizedPoint, base: NormalizedPoint) -> list[NormalizedPoint]:
    vx, vy = base.x - point.x, base.y - point.y
    nx, ny = -vy, vx
    return [
        point,
        NormalizedPoint(
            x=point.x + vx * WEDGE_REACH - nx * WEDGE_HALF_WIDTH,
            y=point.y + vy * WEDGE_REACH - ny * WEDGE_HALF_WIDTH,
        ),
        NormalizedPoint(
            x=point.x + vx * WEDGE_REACH + nx * WEDGE_HALF_WIDTH,
            y=point.y + vy * WEDGE_REACH + ny * WEDGE_HALF_WIDTH,
        ),
    ]


def _toward(point: NormalizedPoint, base: NormalizedPoint, share: float) -> NormalizedPoint:
    return NormalizedPoint(
        x=point.x + (base.x - point.x) * share, y=point.y + (base.y - point.y) * share
    )


def _front_polygon(
    hull: list[NormalizedPoint], base: NormalizedPoint, team_id: int
) -> list[NormalizedPoint]:
    # Widest pair of hull vertices; first pair wins on ties
    best = 0.0
    first, second = hull[0], hull[0]
    for i in range(len(hull)):
        for j in range(i + 1, len(hull)):
            distance = _distance_sq(hull[i], hull[j])
            if distance > best:
                best = distance
                first, second = hull[i], hull[j]

    mid = NormalizedPoint(x=(first.x + second.x) / 2, y=(first.y + second.y) / 2)
    turn = _cross(mid, first, base)
    if (team_id == TeamId.BLUE.value and turn < 0) or (team_id != TeamId.BLUE.value and turn > 0):
        first, second = second, first

    return [
        first,
        second,
        _toward(second, base, FRONT_PROJECTION),
        _toward(first, base, FRONT_PROJECTION),
    ]


def build_invasion_polygons(
    team_id: int, invaders: Sequence[Invader], join_distance: float = 0.2
) -> list[InvasionPolygon]:
    """One polygon per group of nearby invaders of ``team_id``."""
    if not invaders:
        return []

    base = BASE_POSITIONS[team_id]
    polygons = []
    for group in cluster_points([point for _, point in invaders], join_distance):
        members = [invaders[index] for index in group]
        points = [point for _, point in members]
        distinct = list(dict.fromkeys(point.as_tuple() for point in points))

        if len(distinct) < 2:
            shape = _wedge(points[0], base)
        else:
            shape = _front_polygon(convex_hull(points), base, team_id)

        polygons.append(
            InvasionPolygon(
                team_id=team_id,
                participant_ids=[participant_id for participant_id, _ in members],
                points=shape,
            )
        )
    return polygons


def invasion_polygons_for_frame(
    frame: Frame, settings: Settings | None = None
) -> dict[int, list[InvasionPolygon]]:
    """Invasion polygons of both teams, keyed by team ID."""
    settings = settings or get_settings()
    participants = frame.participants
    return {
        team_id: build_invasion_polygons(
            team_id,
            find_invaders(participants, team_id, settings.invasion_threshold),
            settings.invasion_join_distance,
        )
        for team_id in (TeamId.BLUE.value, TeamId.RED.value)
    }
