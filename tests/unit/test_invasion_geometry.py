"""Unit tests for invasion geometry."""

import pytest

from rift_replay.config import Settings
from rift_replay.contracts.common import NormalizedPoint, Position
from rift_replay.contracts.match import FrameSnapshot, ParticipantFrameState
from rift_replay.contracts.timeline import Frame
from rift_replay.core.services.invasion_geometry import (
    build_invasion_polygons,
    cluster_points,
    convex_hull,
    find_invaders,
    invasion_depth,
    invasion_polygons_for_frame,
)


def _p(x: float, y: float) -> NormalizedPoint:
    return NormalizedPoint(x=x, y=y)


def _cross(o: NormalizedPoint, a: NormalizedPoint, b: NormalizedPoint) -> float:
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def _state(pid: int, x: float, z: float) -> ParticipantFrameState:
    return ParticipantFrameState(
        participant_id=pid,
        summoner_name=f"p{pid}",
        team_id=100 if pid <= 5 else 200,
        position=Position(x=x, z=z),
    )


class TestDepth:
    def test_deeper_toward_enemy_base(self) -> None:
        assert invasion_depth(_p(0, 1), 100) == 0
        assert invasion_depth(_p(1, 0), 100) == 2
        assert invasion_depth(_p(1, 0), 200) == 0
        assert invasion_depth(_p(0.8, 0.2), 100) > invasion_depth(_p(0.2, 0.8), 100)

    def test_find_invaders_filters_team_and_depth(self) -> None:
        participants = [
            _state(1, 13000, 13000),  # blue deep on the red side
            _state(2, 1000, 1000),  # blue at home
            _state(6, 2000, 2000),  # red deep on the blue side
            ParticipantFrameState(participant_id=3, summoner_name="p3", team_id=100),
        ]
        assert [pid for pid, _ in find_invaders(participants, 100)] == [1]
        assert [pid for pid, _ in find_invaders(participants, 200)] == [6]


class TestClustering:
    def test_components_in_input_order(self) -> None:
        points = [_p(0.1, 0.1), _p(0.9, 0.9), _p(0.2, 0.1), _p(0.35, 0.1)]
        assert cluster_points(points, 0.2) == [[0, 2, 3], [1]]

    def test_join_distance_is_strict(self) -> None:
        assert cluster_points([_p(0, 0), _p(0.2, 0)], 0.2) == [[0], [1]]

    def test_empty(self) -> None:
        assert cluster_points([], 0.2) == []


class TestHull:
    def test_small_inputs_returned_as_is(self) -> None:
        points = [_p(0.3, 0.3), _p(0.1, 0.1)]
        assert convex_hull(points) == points

    def test_interior_and_collinear_points_dropped(self) -> None:
        square = [_p(0, 0), _p(1, 0), _p(1, 1), _p(0, 1)]
        hull = convex_hull([*square, _p(0.5, 0.5), _p(0.5, 0)])
        assert set(p.as_tuple() for p in hull) == {p.as_tuple() for p in square}
        assert len(hull) == 4

    def test_every_member_inside_or_on_hull(self) -> None:
        points = [_p((i * 37 % 17) / 17, (i * 53 % 19) / 19) for i in range(25)]
        hull = convex_hull(points)
        for a, b in zip(hull, hull[1:] + hull[:1]):
            for point in points:
                assert _cross(a, b, point) >= -1e-12


class TestPolygons:
    def test_no_invaders_no_polygons(self) -> None:
        assert build_invasion_polygons(100, []) == []

    def test_lone_invader_gets_a_wedge(self) -> None:
        polygons = build_invasion_polygons(100, [(1, _p(0.8, 0.2))])
        assert len(polygons) == 1
        wedge = polygons[0]
        assert wedge.participant_ids == (1,)
        assert len(wedge.points) == 3
        assert wedge.points[0] == _p(0.8, 0.2)
        # Both wing tips sit closer to the blue base than the invader
        for tip in wedge.points[1:]:
            assert invasion_depth(tip, 100) < invasion_depth(wedge.points[0], 100)

    def test_group_front_projected_toward_base(self) -> None:
        invaders = [(1, _p(0.7, 0.2)), (2, _p(0.8, 0.3)), (3, _p(0.75, 0.25))]
        polygons = build_invasion_polygons(100, invaders)
        assert len(polygons) == 1
        polygon = polygons[0]
        assert sorted(polygon.participant_ids) == [1, 2, 3]
        assert len(polygon.points) == 4
        p1, p2, p4, p3 = polygon.points
        assert {p1.as_tuple(), p2.as_tuple()} == {(0.7, 0.2), (0.8, 0.3)}
        # p3/p4 are 80% of the way from the front to the blue base (0, 1)
        assert p3.x == pytest.approx(p1.x * 0.2)
        assert p3.y == pytest.approx(p1.y + (1 - p1.y) * 0.8)
        assert p4.x == pytest.approx(p2.x * 0.2)

    def test_stacked_group_falls_back_to_wedge(self) -> None:
        invaders = [(6, _p(0.2, 0.8)), (7, _p(0.2, 0.8))]
        polygons = build_invasion_polygons(200, invaders)
        assert len(polygons) == 1
        assert polygons[0].participant_ids == (6, 7)
        assert len(polygons[0].points) == 3

    def test_front_orientation_is_consistent(self) -> None:
        """The same group listed in another order yields the same polygon."""
        a = [(1, _p(0.7, 0.2)), (2, _p(0.8, 0.3))]
        first = build_invasion_polygons(100, a)[0].points
        second = build_invasion_polygons(100, list(reversed(a)))[0].points
        assert first == second
        p1, p2 = first[0], first[1]
        mid = _p((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)
        assert _cross(mid, p1, _p(0, 1)) >= 0

    def test_polygons_for_frame_cover_both_teams(self) -> None:
        frame = Frame(
            timestamp_sec=1,
            snapshot=FrameSnapshot(
                participants=[_state(1, 13000, 13000), _state(6, 1500, 1500), _state(7, 14000, 14000)]
            ),
        )
        polygons = invasion_polygons_for_frame(frame, Settings())
        assert set(polygons) == {100, 200}
        assert [p.participant_ids for p in polygons[100]] == [(1,)]
        assert [p.participant_ids for p in polygons[200]] == [(6,)]

    def test_frame_without_snapshot(self) -> None:
        assert invasion_polygons_for_frame(Frame(timestamp_sec=0), Settings()) == {100: [], 200: []}
