"""
Match roster and per-frame state contracts.
"""

from pydantic import Field

from .common import FrozenContract, Position


class Participant(FrozenContract):
    """Static identity of one player, fixed by the first full snapshot."""

    participant_id: int = Field(..., ge=1, le=10)
    summoner_name: str = Field(..., description="Display name, falls back to 'Player <id>'")
    team_id: int = Field(..., description="100 (blue) or 200 (red)")
    champion_id: int = Field(0)
    champion_name: str = Field("Unknown")


class ItemSlot(FrozenContract):
    """Inventory slot content."""

    item_id: int = Field(..., gt=0)
    slot: int = Field(0)
    stacks: int = Field(1)


class ParticipantFrameState(FrozenContract):
    """Participant state at one second of the replay.

    ``kills``/``deaths``/``assists`` always come from the live counters
    accumulated from the kill history, never from the (possibly stale)
    snapshot the other fields were copied from.
    """

    participant_id: int = Field(..., ge=1, le=10)
    summoner_name: str
    team_id: int
    champion_id: int = Field(0)
    champion_name: str = Field("Unknown")
    position: Position | None = None
    level: int = Field(1)
    current_gold: float = Field(0)
    total_gold: float = Field(0)
    xp: float = Field(0)
    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    total_damage_dealt: float = Field(0)
    total_damage_taken: float = Field(0)
    total_heal: float = Field(0)
    vision_score: float = Field(0)
    items: tuple[ItemSlot, ...] = ()


class TeamAggregate(FrozenContract):
    """Team totals at one second of the replay."""

    team_id: int
    total_gold: float = Field(0)
    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    towers: int = Field(0)
    inhibitors: int = Field(0)
    dragons: int = Field(0)
    barons: int = Field(0)


class FrameSnapshot(FrozenContract):
    """Carried-forward snapshot payload of a frame."""

    game_time_ms: int = Field(0, ge=0, description="Game time of the snapshot event it came from")
    participants: tuple[ParticipantFrameState, ...] = ()
    teams: tuple[TeamAggregate, ...] = ()


class GameMetadata(FrozenContract):
    """Match-level metadata handed to the surrounding application."""

    game_id: str = Field("unknown")
    game_mode: str = Field("CLASSIC")
    platform_id: str = Field("unknown")
    participants: tuple[Participant, ...] = ()
    duration_sec: int = Field(0, ge=0, description="Last second of the match")

    def get_participant(self, participant_id: int) -> Participant | None:
        for participant in self.participants:
            if participant.participant_id == participant_id:
                return participant
        return None

    def team_of(self, participant_id: int) -> int | None:
        participant = self.get_participant(participant_id)
        return participant.team_id if participant else None
