"""Normalizes judge problem pages into tasks and delivers them to local tools."""

__version__ = "0.1.0"
