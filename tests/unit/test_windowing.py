"""Unit tests for recent-kill and channel windows."""

from rift_replay.contracts.events import KillEvent, RawEvent
from rift_replay.core.services.windowing import (
    ChannelIntervalIndex,
    active_channels_at,
    parse_kill,
    recent_kills_at,
)


def _channel(ms: int, participant_id: int, started: bool = True, kind: str | None = None) -> RawEvent:
    payload: dict = {"participantID": participant_id}
    if kind is not None:
        payload["channelingType"] = kind
    return RawEvent(
        game_time_ms=ms,
        schema_tag="channeling_started" if started else "channeling_ended",
        payload=payload,
    )


def test_parse_kill_reads_fields() -> None:
    kill = parse_kill(
        RawEvent(
            game_time_ms=5000,
            schema_tag="champion_kill",
            payload={"killer": 1, "victim": 6, "assistants": [2, "3", None], "position": {"x": 1, "z": 2}},
        )
    )
    assert kill.killer_id == 1
    assert kill.victim_id == 6
    assert kill.assist_ids == (2, 3)
    assert kill.position.z == 2


def test_recent_kills_window() -> None:
    """A kill stays visible for the configured number of seconds, inclusive."""
    kills = [KillEvent(game_time_ms=10_500, killer_id=1, victim_id=6)]
    assert recent_kills_at(kills, 9) == []
    assert recent_kills_at(kills, 10) == kills
    assert recent_kills_at(kills, 13) == kills
    assert recent_kills_at(kills, 14) == []
    assert recent_kills_at(kills, 11, window=0) == []


def test_channel_replay_start_and_end() -> None:
    events = [_channel(2000, 3, kind="teleport"), _channel(9000, 3, started=False)]
    assert active_channels_at(events, 1) == []
    active = active_channels_at(events, 5)
    assert [c.participant_id for c in active] == [3]
    assert active[0].channeling_type == "teleport"
    assert active_channels_at(events, 9) == []


def test_channel_type_defaults_to_recall() -> None:
    active = active_channels_at([_channel(0, 1)], 0)
    assert active[0].channeling_type == "recall"


def test_index_matches_replay() -> None:
    """The interval index answers every second exactly like a full replay."""
    events = [
        _channel(1000, 2),
        _channel(1500, 7, kind="teleport"),
        _channel(4000, 2, started=False),
        _channel(5000, 2),
        _channel(5200, 2, started=False),  # same second as its start
        _channel(6000, 7),  # restart replaces the running channel
        _channel(8000, 4, started=False),  # end with nothing running
        _channel(9000, 9),  # never ends
    ]
    index = ChannelIntervalIndex(events)
    for second in range(0, 15):
        assert index.active_at(second) == active_channels_at(events, second), second


def test_index_results_sorted_by_participant() -> None:
    index = ChannelIntervalIndex([_channel(0, 8), _channel(0, 1), _channel(0, 5)])
    assert [c.participant_id for c in index.active_at(0)] == [1, 5, 8]
