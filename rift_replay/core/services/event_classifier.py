"""Line parsing and event classification for the telemetry log."""

from __future__ import annotations

import json
from typing import Any, Final

from rift_replay.contracts.events import UNKNOWN_EVENT_TYPE, ClassifiedEvent, EventType, RawEvent

SCHEMA_KEY: Final[str] = "rfc461Schema"
GAME_TIME_KEY: Final[str] = "gameTime"

# Feed schema tags
SNAPSHOT_TAG: Final[str] = "stats_update"
WARD_PLACED_TAG: Final[str] = "ward_placed"
WARD_KILLED_TAG: Final[str] = "ward_killed"
CHAMPION_KILL_TAG: Final[str] = "champion_kill"
CHANNEL_STARTED_TAG: Final[str] = "channeling_started"
CHANNEL_ENDED_TAG: Final[str] = "channeling_ended"

SCHEMA_TO_EVENT_TYPE: Final[dict[str, EventType]] = {
    SNAPSHOT_TAG: EventType.STATE_SNAPSHOT,
    "item_purchased": EventType.ITEM_PURCHASED,
    "item_destroyed": EventType.ITEM_DESTROYED,
    "skill_level_up": EventType.SKILL_LEVEL_UP,
    "skill_used": EventType.SKILL_USED,
    WARD_PLACED_TAG: EventType.WARD_PLACED,
    WARD_KILLED_TAG: EventType.WARD_KILLED,
    CHAMPION_KILL_TAG: EventType.CHAMPION_KILL,
    "building_destroyed": EventType.TURRET_KILLED,
    "epic_monster_kill": EventType.EPIC_MONSTER_KILL,
    "summoner_spell_used": EventType.SUMMONER_SPELL_USED,
    CHANNEL_STARTED_TAG: EventType.CHANNELING_STARTED,
    CHANNEL_ENDED_TAG: EventType.CHANNELING_ENDED,
}


def event_type_for(schema_tag: str | None) -> str:
    """Category of a schema tag; unknown tags are returned unchanged."""
    if not schema_tag:
        return UNKNOWN_EVENT_TYPE
    event_type = SCHEMA_TO_EVENT_TYPE.get(schema_tag)
    return event_type.value if event_type is not None else schema_tag


def _coerce_game_time(value: Any) -> int | None:
    if value is None:
        return 0
    if isinstance(value, bool):
        return None
    try:
        game_time = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return max(0, game_time)


def parse_line(line: str) -> RawEvent | None:
    """Parse one NDJSON line.

    Returns None for blank lines, invalid JSON, records that are not JSON
    objects and records whose game time is not a number.
    """
    text = line.strip()
    if not text:
        return None

    try:
        record = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(record, dict):
        return None

    game_time_ms = _coerce_game_time(record.get(GAME_TIME_KEY))
    if game_time_ms is None:
        return None

    schema_tag = record.get(SCHEMA_KEY)
    return RawEvent(
        game_time_ms=game_time_ms,
        schema_tag=schema_tag if isinstance(schema_tag, str) else None,
        payload=record,
    )


def classify(raw_event: RawEvent) -> ClassifiedEvent:
    """Tag a raw event with its category. Never fails, never drops."""
    return ClassifiedEvent(
        game_time_ms=raw_event.game_time_ms,
        event_type=event_type_for(raw_event.schema_tag),
        details=raw_event.payload,
    )
