"""
JSON Lines file adapter.
Implements MatchLogSourcePort for telemetry logs stored on local disk.
"""

import asyncio
import logging
from pathlib import Path

from rift_replay.core.errors import MatchSourceError
from rift_replay.core.ports import MatchLogSourcePort

logger = logging.getLogger(__name__)


class JsonlFileSource(MatchLogSourcePort):
    """Reads a whole ``.jsonl`` log in one go, off the event loop."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def read_lines(self) -> list[str]:
        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read match log {self.path}: {e}")
            raise MatchSourceError(
                f"Could not read match log {self.path}: {e}", path=str(self.path)
            ) from e

        lines = [line for line in text.splitlines() if line.strip()]
        logger.info(f"Read {len(lines)} lines from {self.path}")
        return lines
