"""Adapters that connect the replay core to concrete log sources."""

from .jsonl_source import JsonlFileSource

__all__ = ["JsonlFileSource"]
