"""Contract models for replay data."""

from .common import NormalizedPoint, Position, TeamId
from .dominance import Dominance, DominanceField, InfluenceCell, InvasionPolygon, ZoneCell
from .events import (
    UNKNOWN_EVENT_TYPE,
    ChannelInterval,
    ClassifiedEvent,
    EventType,
    KillEvent,
    RawEvent,
)
from .match import (
    FrameSnapshot,
    GameMetadata,
    ItemSlot,
    Participant,
    ParticipantFrameState,
    TeamAggregate,
)
from .timeline import Frame, MatchTimeline
from .wards import WARD_DURATIONS, Ward, WardType

__all__ = [
    "Position",
    "NormalizedPoint",
    "TeamId",
    "EventType",
    "UNKNOWN_EVENT_TYPE",
    "RawEvent",
    "ClassifiedEvent",
    "KillEvent",
    "ChannelInterval",
    "Participant",
    "ItemSlot",
    "ParticipantFrameState",
    "TeamAggregate",
    "FrameSnapshot",
    "GameMetadata",
    "Frame",
    "MatchTimeline",
    "Ward",
    "WardType",
    "WARD_DURATIONS",
    "InfluenceCell",
    "DominanceField",
    "Dominance",
    "ZoneCell",
    "InvasionPolygon",
]
