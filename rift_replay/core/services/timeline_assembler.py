"""Timeline assembly: raw NDJSON lines to one frame per second.

Two cooperative passes over the input:

1. Parse pass, in chunks of ``chunk_size`` lines: classify every line and
   bucket events by second, collecting the ward, kill and channel histories
   and the roster on the way.
2. Frame pass, in chunks of ``chunk_size`` seconds: resolve ward lifecycles,
   then walk seconds 0..end carrying the last snapshot forward.

The coroutine yields to the event loop between chunks, checking the abort
flag each time. Either a complete :class:`MatchTimeline` is returned or an
exception propagates; no partial frame list escapes.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from rift_replay.config import Settings, get_settings
from rift_replay.contracts.events import ClassifiedEvent, KillEvent, RawEvent
from rift_replay.contracts.match import GameMetadata
from rift_replay.contracts.timeline import Frame, MatchTimeline
from rift_replay.contracts.wards import Ward
from rift_replay.core.errors import AssemblyCancelledError, NoMatchDataError
from rift_replay.core.observability import trace_operation
from rift_replay.core.services.event_classifier import (
    CHAMPION_KILL_TAG,
    CHANNEL_ENDED_TAG,
    CHANNEL_STARTED_TAG,
    SNAPSHOT_TAG,
    WARD_KILLED_TAG,
    WARD_PLACED_TAG,
    classify,
    parse_line,
)
from rift_replay.core.services.snapshot_reconstructor import SnapshotReconstructor
from rift_replay.core.services.ward_lifecycle import active_wards_at, resolve_ward_lifecycles
from rift_replay.core.services.windowing import ChannelIntervalIndex, parse_kill, recent_kills_at

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]
FrameCallback = Callable[[Frame], None]
AbortCheck = Callable[[], bool]

# Share of the progress bar spent on parsing; frame building fills the rest.
PARSE_PROGRESS_SHARE = 0.9


@dataclass
class _ParsedLog:
    """Everything the parse pass collects."""

    events_by_second: dict[int, list[ClassifiedEvent]] = field(default_factory=dict)
    snapshots_by_second: dict[int, RawEvent] = field(default_factory=dict)
    kills_by_second: dict[int, list[KillEvent]] = field(default_factory=dict)
    kills: list[KillEvent] = field(default_factory=list)
    ward_placements: list[RawEvent] = field(default_factory=list)
    ward_kills: list[RawEvent] = field(default_factory=list)
    channel_events: list[RawEvent] = field(default_factory=list)
    game_info: dict[str, str] = field(default_factory=dict)
    max_time_ms: int = 0
    usable_lines: int = 0
    skipped_lines: int = 0


class _ProgressReporter:
    """Forwards progress to the caller, never going backwards."""

    def __init__(self, callback: ProgressCallback | None) -> None:
        self._callback = callback
        self.value = 0.0

    def report(self, value: float) -> None:
        value = max(self.value, min(1.0, value))
        self.value = value
        if self._callback is not None:
            self._callback(value)


class TimelineAssembler:
    """Builds a :class:`MatchTimeline` from raw log lines.

    Each :meth:`assemble` call owns a fresh reconstructor, so one assembler can
    load several matches one after the other.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        on_progress: ProgressCallback | None = None,
        on_frame: FrameCallback | None = None,
        should_abort: AbortCheck | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._on_progress = on_progress
        self._on_frame = on_frame
        self._should_abort = should_abort

    @trace_operation(capture_result=False, add_metadata={"stage": "assemble"})
    async def assemble(self, lines: Sequence[str]) -> MatchTimeline:
        """Reconstruct the timeline.

        Args:
            lines: Raw NDJSON lines in file order

        Returns:
            Metadata, one frame per second from 0 to the last event's second,
            and every resolved ward

        Raises:
            NoMatchDataError: If no line could be parsed
            AssemblyCancelledError: If ``should_abort`` returned True between chunks
        """
        started = time.perf_counter()
        progress = _ProgressReporter(self._on_progress)
        reconstructor = SnapshotReconstructor()

        parsed = await self._parse(lines, reconstructor, progress)
        if parsed.usable_lines == 0:
            raise NoMatchDataError(total_lines=len(lines))

        wards = resolve_ward_lifecycles(
            parsed.ward_placements, parsed.ward_kills, reconstructor.roster
        )
        end_second = parsed.max_time_ms // 1000
        frames = await self._build_frames(parsed, reconstructor, wards, end_second, progress)

        metadata = GameMetadata(
            game_id=parsed.game_info.get("game_id", "unknown"),
            game_mode=parsed.game_info.get("game_mode", "CLASSIC"),
            platform_id=parsed.game_info.get("platform_id", "unknown"),
            participants=reconstructor.participants,
            duration_sec=end_second,
        )
        timeline = MatchTimeline(
            metadata=metadata, frames=frames, wards=wards, skipped_lines=parsed.skipped_lines
        )
        progress.report(1.0)

        logger.info(
            "timeline_assembled",
            extra={
                "game_id": metadata.game_id,
                "frames": len(frames),
                "wards": len(wards),
                "kills": len(parsed.kills),
                "skipped_lines": parsed.skipped_lines,
                "duration_sec": end_second,
                "assembly_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return timeline

    async def _checkpoint(self, progress: _ProgressReporter) -> None:
        """Yield to the event loop, then honour a pending abort."""
        await asyncio.sleep(0)
        if self._should_abort is not None and self._should_abort():
            logger.info("Timeline assembly cancelled at %.2f", progress.value)
            raise AssemblyCancelledError(progress.value)

    async def _parse(
        self,
        lines: Sequence[str],
        reconstructor: SnapshotReconstructor,
        progress: _ProgressReporter,
    ) -> _ParsedLog:
        parsed = _ParsedLog()
        total = len(lines)
        chunk_size = self.settings.chunk_size

        for start in range(0, total, chunk_size):
            for line in lines[start : start + chunk_size]:
                raw_event = parse_line(line)
                if raw_event is None:
                    if line.strip():
                        parsed.skipped_lines += 1
                    continue
                self._collect(raw_event, parsed, reconstructor)

            processed = min(start + chunk_size, total)
            progress.report(processed / total * PARSE_PROGRESS_SHARE)
            await self._checkpoint(progress)

        if parsed.skipped_lines:
            logger.debug("Skipped %d unparseable lines", parsed.skipped_lines)
        return parsed

    def _collect(
        self, raw_event: RawEvent, parsed: _ParsedLog, reconstructor: SnapshotReconstructor
    ) -> None:
        event = classify(raw_event)
        second = raw_event.second
        parsed.usable_lines += 1
        parsed.max_time_ms = max(parsed.max_time_ms, raw_event.game_time_ms)
        parsed.events_by_second.setdefault(second, []).append(event)

        tag = raw_event.schema_tag
        if tag == SNAPSHOT_TAG:
            if reconstructor.register_roster(raw_event):
                self._collect_game_info(raw_event, parsed, override=True)
            # Last snapshot of a second wins
            parsed.snapshots_by_second[second] = raw_event
        elif tag == WARD_PLACED_TAG:
            parsed.ward_placements.append(raw_event)
        elif tag == WARD_KILLED_TAG:
            parsed.ward_kills.append(raw_event)
        elif tag in (CHANNEL_STARTED_TAG, CHANNEL_ENDED_TAG):
            parsed.channel_events.append(raw_event)
        elif tag == CHAMPION_KILL_TAG:
            kill = parse_kill(raw_event)
            parsed.kills.append(kill)
            parsed.kills_by_second.setdefault(second, []).append(kill)

        if not parsed.game_info:
            self._collect_game_info(raw_event, parsed, override=False)

    @staticmethod
    def _collect_game_info(raw_event: RawEvent, parsed: _ParsedLog, *, override: bool) -> None:
        payload = raw_event.payload
        info = {
            "game_id": payload.get("gameID"),
            "platform_id": payload.get("platformID"),
            "game_mode": payload.get("gameMode"),
        }
        found = {key: str(value) for key, value in info.items() if value not in (None, "")}
        if override and found:
            parsed.game_info = found
        elif not parsed.game_info:
            parsed.game_info.update(found)

    async def _build_frames(
        self,
        parsed: _ParsedLog,
        reconstructor: SnapshotReconstructor,
        wards: list[Ward],
        end_second: int,
        progress: _ProgressReporter,
    ) -> list[Frame]:
        channels = ChannelIntervalIndex(parsed.channel_events)
        kill_window = self.settings.kill_display_seconds
        chunk_size = self.settings.chunk_size
        total_frames = end_second + 1
        frames: list[Frame] = []

        for second in range(total_frames):
            for kill in parsed.kills_by_second.get(second, []):
                reconstructor.apply_kill(kill)
            snapshot_event = parsed.snapshots_by_second.get(second)
            if snapshot_event is not None:
                reconstructor.apply_snapshot(snapshot_event)

            frame = Frame(
                timestamp_sec=second,
                snapshot=reconstructor.current_snapshot(),
                events=parsed.events_by_second.get(second, []),
                active_wards=active_wards_at(wards, second),
                active_channels=channels.active_at(second),
                recent_kills=recent_kills_at(parsed.kills, second, kill_window),
            )
            frames.append(frame)
            if self._on_frame is not None:
                self._on_frame(frame)

            if (second + 1) % chunk_size == 0 and second + 1 < total_frames:
                progress.report(
                    PARSE_PROGRESS_SHARE + (second + 1) / total_frames * (1 - PARSE_PROGRESS_SHARE)
                )
                await self._checkpoint(progress)

        return frames
