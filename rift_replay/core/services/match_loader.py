"""Top-level entry points: read a log and assemble its timeline."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from rift_replay.adapters.jsonl_source import JsonlFileSource
from rift_replay.config import Settings, get_settings
from rift_replay.contracts.timeline import MatchTimeline
from rift_replay.core.observability import clear_correlation_id, set_correlation_id
from rift_replay.core.ports import MatchLogSourcePort
from rift_replay.core.services.timeline_assembler import (
    AbortCheck,
    FrameCallback,
    ProgressCallback,
    TimelineAssembler,
)

logger = logging.getLogger(__name__)


async def load_match_lines(
    lines: Sequence[str],
    settings: Settings | None = None,
    on_progress: ProgressCallback | None = None,
    should_abort: AbortCheck | None = None,
    on_frame: FrameCallback | None = None,
) -> MatchTimeline:
    """Assemble a timeline from lines already in memory."""
    assembler = TimelineAssembler(
        settings or get_settings(),
        on_progress=on_progress,
        on_frame=on_frame,
        should_abort=should_abort,
    )
    return await assembler.assemble(lines)


async def load_match(
    source: MatchLogSourcePort,
    settings: Settings | None = None,
    on_progress: ProgressCallback | None = None,
    should_abort: AbortCheck | None = None,
    on_frame: FrameCallback | None = None,
) -> MatchTimeline:
    """Read everything from ``source`` once, then assemble it."""
    lines = await source.read_lines()
    return await load_match_lines(lines, settings, on_progress, should_abort, on_frame)


async def load_match_file(
    path: str | Path,
    settings: Settings | None = None,
    on_progress: ProgressCallback | None = None,
    should_abort: AbortCheck | None = None,
    on_frame: FrameCallback | None = None,
) -> MatchTimeline:
    """Load a ``.jsonl`` telemetry log from disk.

    Raises:
        MatchSourceError: If the file cannot be read
        NoMatchDataError: If no line of the file could be parsed
        AssemblyCancelledError: If ``should_abort`` returned True
    """
    set_correlation_id(Path(path).name)
    try:
        timeline = await load_match(
            JsonlFileSource(path), settings, on_progress, should_abort, on_frame
        )
    finally:
        clear_correlation_id()

    logger.info(
        "Loaded %s: %d frames, %d participants",
        path,
        len(timeline.frames),
        len(timeline.metadata.participants),
    )
    return timeline
