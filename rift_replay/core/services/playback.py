"""Playback session over an assembled timeline.

Owns the playhead: seeking, ticking while playing, and memoized per-frame
derived views (dominance field, invasion polygons) for the current frame.
"""

from __future__ import annotations

import asyncio
import logging

from rift_replay.config import Settings, get_settings
from rift_replay.contracts.dominance import DominanceField, InvasionPolygon, ZoneCell
from rift_replay.contracts.timeline import Frame, MatchTimeline
from rift_replay.core.ports import DominanceStrategyPort
from rift_replay.core.services.dominance_calculator import (
    create_dominance_calculator,
    summarize_zones,
)
from rift_replay.core.services.frame_lookup import FrameLookup
from rift_replay.core.services.invasion_geometry import invasion_polygons_for_frame
from rift_replay.core.utils.windowed_cache import WindowedCache

logger = logging.getLogger(__name__)


class PlaybackSession:
    """Playhead state for one loaded match."""

    def __init__(
        self,
        timeline: MatchTimeline,
        settings: Settings | None = None,
        dominance: DominanceStrategyPort | None = None,
    ) -> None:
        self.timeline = timeline
        self.settings = settings or get_settings()
        self._frames = FrameLookup(timeline.frames, self.settings.cache_window_size)
        self._dominance = dominance or create_dominance_calculator(settings=self.settings)
        self._dominance_cache: WindowedCache[DominanceField] = WindowedCache(
            self.settings.cache_window_size
        )
        self._current_time = 0.0
        self._playing = False
        self._speed = 1.0

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def duration(self) -> int:
        return self.timeline.duration_sec

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def speed(self) -> float:
        return self._speed

    def set_speed(self, speed: float) -> None:
        if speed <= 0:
            raise ValueError(f"Playback speed must be positive, got {speed}")
        self._speed = speed

    def seek(self, time: float) -> float:
        """Move the playhead, clamped to ``[0, duration]``. Returns the new time."""
        self._current_time = max(0.0, min(float(time), float(self.duration)))
        return self._current_time

    def play(self) -> None:
        self._playing = True

    def pause(self) -> None:
        self._playing = False

    def toggle(self) -> bool:
        """Flip between playing and paused. Returns the new playing state."""
        self._playing = not self._playing
        return self._playing

    def tick(self) -> float:
        """Advance one second while playing; stop at the end of the match."""
        if not self._playing:
            return self._current_time

        next_time = self._current_time + 1
        if next_time >= self.duration:
            self._current_time = float(self.duration)
            self._playing = False
            logger.debug("Playback reached end of match at %ss", self.duration)
        else:
            self._current_time = next_time
        return self._current_time

    async def run(self) -> None:
        """Tick in real time, scaled by speed, until paused or finished."""
        while self._playing:
            await asyncio.sleep(1 / self._speed)
            self.tick()

    def current_frame(self) -> Frame | None:
        return self._frames.get(self._current_time)

    def current_dominance(self) -> DominanceField | None:
        """Dominance field of the current frame, computed once per frame."""
        frame = self.current_frame()
        if frame is None:
            return None

        cached = self._dominance_cache.get(frame.timestamp_sec)
        if cached is not None:
            return cached
        field = self._dominance.calculate(frame)
        self._dominance_cache.set(frame.timestamp_sec, field)
        return field

    def current_zones(self) -> list[ZoneCell]:
        """Coarse zone board of the current dominance field."""
        field = self.current_dominance()
        if field is None:
            return []
        return summarize_zones(field, self.settings.zone_grid_size)

    def current_invasions(self) -> dict[int, list[InvasionPolygon]]:
        frame = self.current_frame()
        if frame is None:
            return {}
        return invasion_polygons_for_frame(frame, self.settings)
