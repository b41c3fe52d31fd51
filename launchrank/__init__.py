# Launchrank Package
"""
Ranking core for a keyboard-driven application launcher.

Modules:
  - entry: Launchable entries and their per-query state
  - search: Fuzzy matchers and the ranking comparator
  - services: Persisted launch history
  - controller: Query state machine (search vs command mode)
"""

__version__ = "0.1.0"
