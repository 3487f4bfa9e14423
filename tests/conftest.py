"""Pytest configuration and fixtures for rift-replay tests.

Test logs are written with :class:`MatchLogBuilder`, which produces the same
NDJSON records the live feed emits.

NOTE: no sys.path manipulation; the package is resolved from the installed
distribution (``pip install -e .[test]``).
"""

import json
from pathlib import Path
from typing import Any

import pytest

from rift_replay.config import Settings

# Blue side lives bottom-left, red side top-right
BLUE_FOUNTAIN = (600.0, 600.0)
RED_FOUNTAIN = (14200.0, 14200.0)


def participant_entry(
    participant_id: int,
    x: float | None = None,
    z: float | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """One ``participants`` entry of a ``stats_update`` record."""
    team_id = 100 if participant_id <= 5 else 200
    if x is None or z is None:
        x, z = BLUE_FOUNTAIN if team_id == 100 else RED_FOUNTAIN
    entry: dict[str, Any] = {
        "participantID": participant_id,
        "teamID": team_id,
        "championName": f"Champion{participant_id}",
        "summonerName": f"Player{participant_id}",
        "position": {"x": x, "z": z},
        "level": 1,
        "currentGold": 500,
        "totalGold": 500,
        "XP": 0,
        "stats": [],
        "items": [],
    }
    entry.update(fields)
    return entry


class MatchLogBuilder:
    """Accumulates feed records and renders them as NDJSON lines."""

    def __init__(self) -> None:
        self.records: list[dict[str, Any]] = []

    def add(self, schema: str, game_time: int, **fields: Any) -> "MatchLogBuilder":
        self.records.append({"rfc461Schema": schema, "gameTime": game_time, **fields})
        return self

    def snapshot(
        self,
        game_time: int,
        participants: list[dict[str, Any]] | None = None,
        **fields: Any,
    ) -> "MatchLogBuilder":
        if participants is None:
            participants = [participant_entry(pid) for pid in range(1, 11)]
        return self.add("stats_update", game_time, participants=participants, **fields)

    def kill(
        self,
        game_time: int,
        killer: int,
        victim: int,
        assistants: list[int] | None = None,
        position: dict[str, float] | None = None,
    ) -> "MatchLogBuilder":
        return self.add(
            "champion_kill",
            game_time,
            killer=killer,
            victim=victim,
            assistants=assistants or [],
            position=position or {"x": 7400, "z": 7400},
        )

    def ward_placed(
        self, game_time: int, placer: int, x: float, z: float, ward_type: str = "yellowTrinket"
    ) -> "MatchLogBuilder":
        return self.add(
            "ward_placed", game_time, placer=placer, position={"x": x, "z": z}, wardType=ward_type
        )

    def ward_killed(self, game_time: int, killer: int, x: float, z: float) -> "MatchLogBuilder":
        return self.add("ward_killed", game_time, killer=killer, position={"x": x, "z": z})

    def channel_started(
        self, game_time: int, participant_id: int, channeling_type: str = "recall"
    ) -> "MatchLogBuilder":
        return self.add(
            "channeling_started",
            game_time,
            participantID=participant_id,
            channelingType=channeling_type,
        )

    def channel_ended(self, game_time: int, participant_id: int) -> "MatchLogBuilder":
        return self.add("channeling_ended", game_time, participantID=participant_id)

    def lines(self) -> list[str]:
        return [json.dumps(record) for record in self.records]

    def write(self, path: Path) -> Path:
        path.write_text("\n".join(self.lines()) + "\n", encoding="utf-8")
        return path


@pytest.fixture
def log_builder() -> MatchLogBuilder:
    return MatchLogBuilder()


@pytest.fixture
def settings() -> Settings:
    """Small chunks and a coarse dominance grid keep tests quick."""
    return Settings(chunk_size=10, dominance_resolution=20, cache_window_size=100)


@pytest.fixture
def make_participant():
    return participant_entry
