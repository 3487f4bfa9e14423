"""Replay services: timeline assembly, lookup, dominance and invasion geometry."""
