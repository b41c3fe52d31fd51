"""
Search package - Matching and ranking.

Matchers score a query against entry text; the ranking comparator orders
entries by score, launch history and name.
"""

from .matcher import Match, Matcher, RapidfuzzMatcher, SubsequenceMatcher, make_matcher
from .ranking import MIN_WEIGHT, compare, history_weight, sort_entries, sort_key, top_visible

__all__ = [
    "Match",
    "Matcher",
    "SubsequenceMatcher",
    "RapidfuzzMatcher",
    "make_matcher",
    "MIN_WEIGHT",
    "compare",
    "history_weight",
    "sort_entries",
    "sort_key",
    "top_visible",
]
