"""
Ranking - Total order over entries and history weighting.

Entries are ordered by, first difference wins:
  1. Visible before hidden
  2. Higher match score
  3. Higher history weight
  4. Display name, case-insensitive
  5. Display name, then id (keeps the order total for distinct ids)

History weight uses the Firefox-style frecency buckets by default:
  - < 4 days: 100x multiplier
  - < 14 days: 70x multiplier
  - < 31 days: 50x multiplier
  - < 90 days: 30x multiplier
  - 90+ days: 10x multiplier
"""

import time
from functools import cmp_to_key
from typing import Iterable, Optional


MIN_WEIGHT = (0, 0)

_DAY = 24 * 3600


def recency_weight(last_used: int, now: Optional[float] = None) -> int:
    """Frecency multiplier for a launch `last_used` seconds since epoch."""
    if now is None:
        now = time.time()
    age_days = (now - last_used) / _DAY

    if age_days < 4:
        return 100
    elif age_days < 14:
        return 70
    elif age_days < 31:
        return 50
    elif age_days < 90:
        return 30
    return 10


def history_weight(record, order: str = "frecency", now: Optional[float] = None) -> tuple:
    """
    Ranking boost derived from a HistoryEntry.

    Args:
        record: HistoryEntry or None if the entry was never launched
        order: "frecency", "frequent" or "recent"
        now: Reference time for recency buckets

    Returns:
        Tuple compared lexicographically; higher ranks first
    """
    if record is None:
        return MIN_WEIGHT
    if order == "frequent":
        return (record.count, record.last_used)
    if order == "recent":
        return (record.last_used, record.count)
    return (record.count * recency_weight(record.last_used, now), record.last_used)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare(a, b) -> int:
    """
    Compare two entries for display order.

    Returns:
        Negative if `a` sorts first, positive if `b` does, 0 only for the
        same entry
    """
    if a.hidden != b.hidden:
        return 1 if a.hidden else -1

    score_a = -1 if a.score is None else a.score
    score_b = -1 if b.score is None else b.score
    if score_a != score_b:
        return -1 if score_a > score_b else 1

    if a.history_weight != b.history_weight:
        return -1 if a.history_weight > b.history_weight else 1

    name_a = a.display_name
    name_b = b.display_name
    return (
        _cmp(name_a.casefold(), name_b.casefold())
        or _cmp(name_a, name_b)
        or _cmp(a.id, b.id)
    )


sort_key = cmp_to_key(compare)


def sort_entries(entries: Iterable) -> list:
    """Return entries in display order."""
    return sorted(entries, key=sort_key)


def top_visible(entries: Iterable):
    """Return the first visible entry in display order, or None."""
    visible = [entry for entry in entries if not entry.hidden]
    if not visible:
        return None
    return min(visible, key=sort_key)
