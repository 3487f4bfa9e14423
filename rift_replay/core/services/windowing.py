"""Short-lived display state derived from raw histories: recent kills and active channels."""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from rift_replay.contracts.common import Position
from rift_replay.contracts.events import ChannelInterval, KillEvent, RawEvent
from rift_replay.core.services.event_classifier import CHANNEL_ENDED_TAG, CHANNEL_STARTED_TAG
from rift_replay.core.utils.payload import as_int, as_int_list, parse_position

KILL_DISPLAY_SECONDS = 3
DEFAULT_CHANNELING_TYPE = "recall"


def parse_kill(event: RawEvent) -> KillEvent:
    """Build a :class:`KillEvent` from a ``champion_kill`` record."""
    payload = event.payload
    return KillEvent(
        game_time_ms=event.game_time_ms,
        killer_id=as_int(payload.get("killer")),
        victim_id=as_int(payload.get("victim")),
        position=parse_position(payload.get("position")) or Position(x=0, z=0),
        assist_ids=as_int_list(payload.get("assistants")),
    )


def recent_kills_at(
    kills: Iterable[KillEvent], second: int, window: int = KILL_DISPLAY_SECONDS
) -> list[KillEvent]:
    """Kills whose second lies in ``[second - window, second]``."""
    return [kill for kill in kills if 0 <= second - kill.second <= window]


def _channel_from_start(event: RawEvent) -> ChannelInterval:
    channeling_type = event.payload.get("channelingType")
    return ChannelInterval(
        participant_id=as_int(event.payload.get("participantID")),
        channeling_type=(
            channeling_type
            if isinstance(channeling_type, str) and channeling_type
            else DEFAULT_CHANNELING_TYPE
        ),
        game_time_ms=event.game_time_ms,
    )


def active_channels_at(channel_events: Iterable[RawEvent], second: int) -> list[ChannelInterval]:
    """Replay channel events up to ``second`` and return what is still running.

    Reference implementation: every call replays the whole history. Fine for a
    single pass, use :class:`ChannelIntervalIndex` for repeated queries.
    """
    running: dict[int, ChannelInterval] = {}
    for event in channel_events:
        if event.second > second:
            continue
        participant_id = as_int(event.payload.get("participantID"))
        if event.schema_tag == CHANNEL_STARTED_TAG:
            running[participant_id] = _channel_from_start(event)
        elif event.schema_tag == CHANNEL_ENDED_TAG:
            running.pop(participant_id, None)
    return [running[pid] for pid in sorted(running)]


@dataclass(frozen=True)
class _ChannelSpan:
    start: int
    end: float
    channel: ChannelInterval


class ChannelIntervalIndex:
    """Channel history turned into per-participant ``[start, end)`` spans.

    Built once in time order; ``active_at`` then bisects each participant's
    spans instead of replaying the whole history.
    """

    def __init__(self, channel_events: Iterable[RawEvent]) -> None:
        spans: dict[int, list[_ChannelSpan]] = {}
        open_spans: dict[int, tuple[int, ChannelInterval]] = {}

        def _close(participant_id: int, end: float) -> None:
            opened = open_spans.pop(participant_id, None)
            if opened is None:
                return
            start, channel = opened
            if end > start:
                spans.setdefault(participant_id, []).append(_ChannelSpan(start, end, channel))

        for event in sorted(channel_events, key=lambda e: e.game_time_ms):
            participant_id = as_int(event.payload.get("participantID"))
            if event.schema_tag == CHANNEL_STARTED_TAG:
                _close(participant_id, event.second)
                open_spans[participant_id] = (event.second, _channel_from_start(event))
            elif event.schema_tag == CHANNEL_ENDED_TAG:
                _close(participant_id, event.second)

        for participant_id in list(open_spans):
            _close(participant_id, float("inf"))

        self._spans = spans
        self._starts = {pid: [span.start for span in pid_spans] for pid, pid_spans in spans.items()}
        self._participants: Sequence[int] = sorted(spans)

    def active_at(self, second: int) -> list[ChannelInterval]:
        active = []
        for participant_id in self._participants:
            starts = self._starts[participant_id]
            idx = bisect.bisect_right(starts, second) - 1
            if idx < 0:
                continue
            span = self._spans[participant_id][idx]
            if span.start <= second < span.end:
                active.append(span.channel)
        return active
