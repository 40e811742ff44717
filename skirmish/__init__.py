"""Skirmish — turn-based grid combat encounter engine."""

__version__ = "0.1.0"
