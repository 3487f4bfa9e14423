"""Errors raised while loading a match."""

from __future__ import annotations


class MatchLoadError(Exception):
    """A match could not be turned into a timeline. Never retried internally."""

    pass


class NoMatchDataError(MatchLoadError):
    """The log contained no usable line, so not even metadata can be produced."""

    def __init__(self, total_lines: int = 0) -> None:
        super().__init__(f"No data: none of the {total_lines} input lines could be parsed")
        self.total_lines = total_lines


class AssemblyCancelledError(MatchLoadError):
    """The caller aborted assembly between two chunks."""

    def __init__(self, progress: float) -> None:
        super().__init__(f"Timeline assembly cancelled at {progress:.0%}")
        self.progress = progress


class MatchSourceError(MatchLoadError):
    """Reading the raw log failed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
