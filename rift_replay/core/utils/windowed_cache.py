"""Sliding-window cache keyed by integer seconds.

Tuned for sequential scrubbing: every write re-centres the window on the
written key and drops entries that fall outside it.
"""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_WINDOW_SIZE = 100


class WindowedCache(Generic[T]):
    """Keep only entries within ``window_size // 2`` of the last written key."""

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE) -> None:
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        self._entries: dict[int, T] = {}
        self._window_size = window_size
        self._center: int | None = None

    @property
    def center(self) -> int | None:
        """Key of the most recent write."""
        return self._center

    def set(self, key: int, value: T) -> None:
        self._entries[key] = value
        self._evict_around(key)

    def get(self, key: int) -> T | None:
        return self._entries.get(key)

    def has(self, key: int) -> bool:
        return key in self._entries

    def clear(self) -> None:
        self._entries.clear()
        self._center = None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def _evict_around(self, current_key: int) -> None:
        self._center = current_key
        half_window = self._window_size // 2
        stale = [key for key in self._entries if abs(key - current_key) > half_window]
        for key in stale:
            del self._entries[key]
