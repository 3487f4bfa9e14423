"""
Telemetry event models.
Raw records are kept as opaque field bags; only the events the replay
derives state from get dedicated models.
"""

from enum import Enum
from typing import Any

from pydantic import Field

from .common import FrozenContract, Position


class EventType(str, Enum):
    """Closed vocabulary of event categories understood by the replay."""

    STATE_SNAPSHOT = "StateSnapshot"
    ITEM_PURCHASED = "ItemPurchased"
    ITEM_DESTROYED = "ItemDestroyed"
    SKILL_LEVEL_UP = "SkillLevelUp"
    SKILL_USED = "SkillUsed"
    WARD_PLACED = "WardPlaced"
    WARD_KILLED = "WardKilled"
    CHAMPION_KILL = "ChampionKill"
    TURRET_KILLED = "TurretKilled"
    EPIC_MONSTER_KILL = "EpicMonsterKill"
    SUMMONER_SPELL_USED = "SummonerSpellUsed"
    CHANNELING_STARTED = "ChannelingStarted"
    CHANNELING_ENDED = "ChannelingEnded"


UNKNOWN_EVENT_TYPE = "Unknown"


class RawEvent(FrozenContract):
    """One parsed line of the telemetry log."""

    game_time_ms: int = Field(0, ge=0, description="Game time in milliseconds")
    schema_tag: str | None = Field(None, description="Value of the record's rfc461Schema tag")
    payload: dict[str, Any] = Field(default_factory=dict, description="Record as parsed")

    @property
    def second(self) -> int:
        return self.game_time_ms // 1000


class ClassifiedEvent(FrozenContract):
    """Raw event tagged with its category.

    ``event_type`` holds an :class:`EventType` value for known tags and the
    original tag for anything else.
    """

    game_time_ms: int = Field(0, ge=0)
    event_type: str
    details: dict[str, Any] = Field(default_factory=dict)


class KillEvent(FrozenContract):
    """Champion kill."""

    game_time_ms: int = Field(0, ge=0)
    killer_id: int = Field(0, description="0 when no champion got the kill (turret, minion)")
    victim_id: int = Field(0)
    position: Position = Field(default_factory=lambda: Position(x=0, z=0))
    assist_ids: tuple[int, ...] = ()

    @property
    def second(self) -> int:
        return self.game_time_ms // 1000


class ChannelInterval(FrozenContract):
    """A channel (recall, teleport...) that is running at the queried second."""

    participant_id: int
    channeling_type: str = Field("recall")
    game_time_ms: int = Field(0, ge=0, description="When the channel started")
    active: bool = Field(True)
    interrupted: bool = Field(False)
