"""Tabletkeeper - compaction requests for sorted key/value tables."""

__version__ = "0.1.0"
