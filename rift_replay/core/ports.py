"""Port interfaces between the replay core and its collaborators.

Adapters that feed raw logs in, and strategies that turn frames into
territory fields, implement these.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rift_replay.contracts.dominance import DominanceField
    from rift_replay.contracts.timeline import Frame

__all__ = [
    "MatchLogSourcePort",
    "DominanceStrategyPort",
]


class MatchLogSourcePort(ABC):
    """Port for reading a raw telemetry log."""

    @abstractmethod
    async def read_lines(self) -> list[str]:
        """Read the whole log in one bulk operation.

        Returns:
            Non-blank lines in file order

        Raises:
            MatchSourceError: If the log cannot be read
        """
        pass


class DominanceStrategyPort(ABC):
    """Port for computing a territory field from one frame."""

    @abstractmethod
    def calculate(self, frame: Frame) -> DominanceField:
        """Compute the field for ``frame``. Must be pure and deterministic."""
        pass
