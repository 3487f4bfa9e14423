"""rift-replay: reconstruct browsable match timelines from raw telemetry logs."""

from rift_replay.core.services.match_loader import load_match, load_match_file, load_match_lines
from rift_replay.core.services.playback import PlaybackSession

__version__ = "0.1.0"

__all__ = ["load_match", "load_match_file", "load_match_lines", "PlaybackSession", "__version__"]
