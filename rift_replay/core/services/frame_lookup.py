"""Nearest-frame lookup for playback scrubbing."""

from __future__ import annotations

import math
from collections.abc import Sequence

from rift_replay.contracts.timeline import Frame
from rift_replay.core.utils.windowed_cache import DEFAULT_WINDOW_SIZE, WindowedCache


def find_nearest_frame(frames: Sequence[Frame], second: int) -> Frame | None:
    """Binary search of time-sorted frames for the one closest to ``second``.

    Ties go to the earlier frame.
    """
    if not frames:
        return None

    lo, hi = 0, len(frames) - 1
    while lo < hi:
        mid = (lo + hi) // 2
        if frames[mid].timestamp_sec < second:
            lo = mid + 1
        else:
            hi = mid

    # lo is the first frame at or after second; its predecessor may be closer
    if lo > 0:
        before = frames[lo - 1]
        if abs(before.timestamp_sec - second) <= abs(frames[lo].timestamp_sec - second):
            return before
    return frames[lo]


class FrameLookup:
    """Frame access by (possibly fractional) playback time.

    Results are memoized per integer second in a :class:`WindowedCache`, so
    scrubbing back and forth around the playhead stays cheap while memory
    stays bounded.
    """

    def __init__(self, frames: Sequence[Frame], window_size: int = DEFAULT_WINDOW_SIZE) -> None:
        self._frames = frames
        self._cache: WindowedCache[Frame] = WindowedCache(window_size)

    @property
    def cache(self) -> WindowedCache[Frame]:
        return self._cache

    def get(self, time: float) -> Frame | None:
        if not self._frames:
            return None

        second = math.floor(time)
        cached = self._cache.get(second)
        if cached is not None:
            return cached

        frame = find_nearest_frame(self._frames, second)
        if frame is not None:
            self._cache.set(second, frame)
        return frame
