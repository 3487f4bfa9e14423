"""Unit tests for ward lifecycle resolution."""

import math

from rift_replay.contracts.events import RawEvent
from rift_replay.contracts.match import Participant
from rift_replay.contracts.wards import WardType
from rift_replay.core.services.ward_lifecycle import (
    active_wards_at,
    normalize_ward_type,
    resolve_ward_lifecycles,
)

ROSTER = {
    1: Participant(participant_id=1, summoner_name="blue", team_id=100),
    6: Participant(participant_id=6, summoner_name="red", team_id=200),
}


def _placed(ms: int, placer: int, x: float, z: float, ward_type: str = "yellowTrinket") -> RawEvent:
    return RawEvent(
        game_time_ms=ms,
        schema_tag="ward_placed",
        payload={"placer": placer, "position": {"x": x, "z": z}, "wardType": ward_type},
    )


def _killed(ms: int, x: float, z: float) -> RawEvent:
    return RawEvent(
        game_time_ms=ms, schema_tag="ward_killed", payload={"position": {"x": x, "z": z}}
    )


class TestWardTypes:
    def test_normalization(self) -> None:
        assert normalize_ward_type("controlWard") == WardType.CONTROL_WARD
        assert normalize_ward_type("sightWard") == WardType.SIGHT_WARD
        assert normalize_ward_type("blueTrinket") == WardType.BLUE_TRINKET
        assert normalize_ward_type("yellowTrinket") == WardType.YELLOW_TRINKET
        assert normalize_ward_type(None) == WardType.YELLOW_TRINKET


class TestResolution:
    def test_yellow_trinket_expires_after_two_minutes(self) -> None:
        """Placed at 10s, visible at 129s, gone at 130s."""
        wards = resolve_ward_lifecycles([_placed(10_000, 1, 1000, 1000)], [], ROSTER)
        assert len(wards) == 1
        ward = wards[0]
        assert ward.ward_id == "ward-10000-1"
        assert ward.team_id == 100
        assert active_wards_at(wards, 9) == []
        assert active_wards_at(wards, 10) == [ward]
        assert active_wards_at(wards, 129) == [ward]
        assert active_wards_at(wards, 130) == []

    def test_destroyed_ward_stops_at_kill_second(self) -> None:
        """Destroyed at 40s: visible at 39, invisible at 40."""
        wards = resolve_ward_lifecycles(
            [_placed(10_000, 6, 5000, 5000, "controlWard")], [_killed(40_000, 5010, 4990)], ROSTER
        )
        assert wards[0].expires_at == 40
        assert wards[0].team_id == 200
        assert active_wards_at(wards, 39)
        assert not active_wards_at(wards, 40)

    def test_unbounded_ward_without_kill(self) -> None:
        wards = resolve_ward_lifecycles([_placed(0, 1, 0, 0, "controlWard")], [], ROSTER)
        assert wards[0].expires_at == math.inf
        assert active_wards_at(wards, 100_000)

    def test_kill_matches_nearest_live_ward(self) -> None:
        wards = resolve_ward_lifecycles(
            [_placed(1000, 1, 1000, 1000), _placed(2000, 1, 8000, 8000)],
            [_killed(5000, 7900, 7900)],
            ROSTER,
        )
        by_id = {ward.ward_id: ward for ward in wards}
        assert by_id["ward-1000-1"].expires_at == 121
        assert by_id["ward-2000-1"].expires_at == 5

    def test_each_ward_resolved_at_most_once(self) -> None:
        """Second kill at the same spot has nothing left to match and is discarded."""
        wards = resolve_ward_lifecycles(
            [_placed(1000, 1, 1000, 1000)],
            [_killed(5000, 1000, 1000), _killed(6000, 1000, 1000)],
            ROSTER,
        )
        assert wards[0].expires_at == 5

    def test_kill_without_live_ward_is_discarded(self) -> None:
        wards = resolve_ward_lifecycles(
            [_placed(100_000, 1, 1000, 1000)], [_killed(50_000, 1000, 1000)], ROSTER
        )
        assert wards[0].expires_at == 220

    def test_unknown_placer_falls_back_to_red(self) -> None:
        wards = resolve_ward_lifecycles([_placed(0, 9, 0, 0)], [], ROSTER)
        assert wards[0].team_id == 200

    def test_wards_ordered_by_placement(self) -> None:
        wards = resolve_ward_lifecycles(
            [_placed(9000, 1, 0, 0), _placed(3000, 6, 0, 0)], [], ROSTER
        )
        assert [ward.placed_at for ward in wards] == [3, 9]
