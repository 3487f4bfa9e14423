"""Unit tests for line parsing and event classification."""

import json

import pytest

from rift_replay.contracts.events import EventType
from rift_replay.core.services.event_classifier import classify, event_type_for, parse_line


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("stats_update", EventType.STATE_SNAPSHOT.value),
        ("champion_kill", EventType.CHAMPION_KILL.value),
        ("ward_placed", EventType.WARD_PLACED.value),
        ("ward_killed", EventType.WARD_KILLED.value),
        ("building_destroyed", EventType.TURRET_KILLED.value),
        ("channeling_started", EventType.CHANNELING_STARTED.value),
        ("channeling_ended", EventType.CHANNELING_ENDED.value),
    ],
)
def test_known_tags(tag: str, expected: str) -> None:
    assert event_type_for(tag) == expected


def test_unknown_tag_passes_through() -> None:
    """Tags outside the vocabulary keep their raw value."""
    assert event_type_for("queued_dragon_info") == "queued_dragon_info"
    assert event_type_for(None) == "Unknown"
    assert event_type_for("") == "Unknown"


def test_parse_line_reads_game_time_and_tag() -> None:
    line = json.dumps({"rfc461Schema": "champion_kill", "gameTime": 5250, "killer": 1})
    event = parse_line(line)
    assert event is not None
    assert event.game_time_ms == 5250
    assert event.second == 5
    assert event.schema_tag == "champion_kill"
    assert event.payload["killer"] == 1


def test_missing_game_time_defaults_to_zero() -> None:
    event = parse_line('{"rfc461Schema": "game_info"}')
    assert event is not None
    assert event.game_time_ms == 0


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        "{not json",
        "[1, 2, 3]",
        '"just a string"',
        '{"rfc461Schema": "stats_update", "gameTime": "soon"}',
    ],
)
def test_unusable_lines_are_rejected(line: str) -> None:
    assert parse_line(line) is None


def test_classify_keeps_payload() -> None:
    event = parse_line('{"rfc461Schema": "skill_used", "gameTime": 1000, "skillSlot": 2}')
    classified = classify(event)
    assert classified.event_type == EventType.SKILL_USED.value
    assert classified.details["skillSlot"] == 2
    assert classified.game_time_ms == 1000
