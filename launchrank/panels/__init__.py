# Launchrank Panels Package
"""
Ignis presentation layer for the launcher.
"""

from .search import SearchPanel

__all__ = ["SearchPanel"]
