"""Best-effort readers for loosely typed telemetry payloads."""

from __future__ import annotations

import math
from typing import Any

from rift_replay.contracts.common import Position


def as_int(value: Any, default: int = 0) -> int:
    """Coerce ``value`` to int, returning ``default`` for missing or malformed values."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return default


def as_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def as_int_list(values: Any) -> list[int]:
    """Integers of a list payload; anything unusable is dropped."""
    if not isinstance(values, list):
        return []
    result = []
    for value in values:
        number = as_int(value, default=-1)
        if number >= 0:
            result.append(number)
    return result


def parse_position(value: Any) -> Position | None:
    """Read an ``{x, z}`` position; None when absent, malformed or not finite."""
    if not isinstance(value, dict):
        return None
    x = value.get("x")
    z = value.get("z", value.get("y"))
    if x is None or z is None:
        return None
    try:
        x, z = float(x), float(z)
    except (TypeError, ValueError, OverflowError):
        return None
    if not (math.isfinite(x) and math.isfinite(z)):
        return None
    return Position(x=x, z=z)
