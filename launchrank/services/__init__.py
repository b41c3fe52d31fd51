# Launchrank Services Package
"""
Backend services for the launcher.

Services handle data persistence and system integration.
"""

from .history import HistoryEntry, HistoryMap, HistoryStore, prune, record_use

__all__ = ["HistoryEntry", "HistoryMap", "HistoryStore", "prune", "record_use"]
