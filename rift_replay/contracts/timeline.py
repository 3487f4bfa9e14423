"""
Reconstructed timeline contracts.
This is the core data structure handed to playback.
"""

from pydantic import Field

from .common import FrozenContract
from .events import ChannelInterval, ClassifiedEvent, KillEvent
from .match import FrameSnapshot, GameMetadata, ParticipantFrameState, TeamAggregate
from .wards import Ward


class Frame(FrozenContract):
    """Reconstructed match state for one integer second."""

    timestamp_sec: int = Field(..., ge=0, description="Frame second, dense from 0")
    snapshot: FrameSnapshot | None = Field(
        None, description="Carried-forward snapshot; None until the first snapshot event"
    )
    events: tuple[ClassifiedEvent, ...] = Field(
        (), description="Events whose game time falls in this second"
    )
    active_wards: tuple[Ward, ...] = ()
    active_channels: tuple[ChannelInterval, ...] = ()
    recent_kills: tuple[KillEvent, ...] = ()

    @property
    def participants(self) -> tuple[ParticipantFrameState, ...]:
        return self.snapshot.participants if self.snapshot else ()

    @property
    def team_aggregates(self) -> tuple[TeamAggregate, ...]:
        return self.snapshot.teams if self.snapshot else ()

    def participant(self, participant_id: int) -> ParticipantFrameState | None:
        """Get a participant's state in this frame by participant ID."""
        for state in self.participants:
            if state.participant_id == participant_id:
                return state
        return None

    def team(self, team_id: int) -> TeamAggregate | None:
        for aggregate in self.team_aggregates:
            if aggregate.team_id == team_id:
                return aggregate
        return None


class MatchTimeline(FrozenContract):
    """Complete reconstructed match: metadata plus one frame per second."""

    metadata: GameMetadata
    frames: tuple[Frame, ...] = ()
    wards: tuple[Ward, ...] = Field((), description="Every resolved ward")
    skipped_lines: int = Field(0, ge=0, description="Unparseable input lines")

    @property
    def duration_sec(self) -> int:
        return self.metadata.duration_sec

    def frame_at(self, second: int) -> Frame | None:
        """Frame for an exact second, None outside the match."""
        if 0 <= second < len(self.frames):
            return self.frames[second]
        return None

    def get_events_by_type(self, event_type: str) -> list[ClassifiedEvent]:
        """Get all events of a specific type."""
        return [event for frame in self.frames for event in frame.events if event.event_type == event_type]
