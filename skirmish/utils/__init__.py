"""Logging setup and the encounter event log."""
