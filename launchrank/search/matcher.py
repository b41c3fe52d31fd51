"""
Matchers - Score how well a query matches a candidate string.

Two interchangeable strategies share the Matcher interface:
  - SubsequenceMatcher: fzf/skim style subsequence alignment. Every query
    character must appear in order. Contiguous runs, word-boundary starts
    and exact-case characters score higher; gaps and late starts cost.
  - RapidfuzzMatcher: typo-tolerant weighted ratio from rapidfuzz. Does not
    require a subsequence and reports no highlight positions.

All matching is case-insensitive and total: empty strings never raise.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from rapidfuzz import fuzz, utils


SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1
BONUS_BOUNDARY = 8
BONUS_CAMEL = 7
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2
BONUS_CASE_MATCH = 1
PENALTY_LEADING = -1
MAX_LEADING_PENALTY = -6

_NEG_INF = float("-inf")


@dataclass(frozen=True)
class Match:
    """Result of a successful match."""
    score: int
    positions: tuple = ()


class Matcher(ABC):
    """Base class for match strategies."""

    @abstractmethod
    def match(self, query: str, candidate: str) -> Optional[Match]:
        """Return a Match, or None if the candidate does not match."""
        ...


def _char_bonus(prev: str, char: str) -> int:
    """Bonus for matching `char` given the character before it."""
    if not prev or not prev.isalnum():
        return BONUS_BOUNDARY if char.isalnum() else 0
    if prev.islower() and char.isupper():
        return BONUS_CAMEL
    if prev.isalpha() and char.isdigit():
        return BONUS_CAMEL
    return 0


class SubsequenceMatcher(Matcher):
    """Optimal-alignment subsequence matcher."""

    def match(self, query: str, candidate: str) -> Optional[Match]:
        if not query:
            return Match(0)
        if not candidate or len(query) > len(candidate):
            return None

        # Per-character lowering keeps indices aligned with the original text
        q_lower = [ch.lower() for ch in query]
        c_lower = [ch.lower() for ch in candidate]
        if not _is_subsequence(q_lower, c_lower):
            return None

        m, n = len(query), len(candidate)
        bonus = [_char_bonus(candidate[j - 1] if j else "", candidate[j]) for j in range(n)]

        # best[i][j]: best score with query[i] matched at candidate[j]
        best = [[_NEG_INF] * n for _ in range(m)]
        back = [[-1] * n for _ in range(m)]

        for i in range(m):
            for j in range(i, n):
                if q_lower[i] != c_lower[j]:
                    continue

                score = SCORE_MATCH + bonus[j]
                if query[i] == candidate[j]:
                    score += BONUS_CASE_MATCH

                if i == 0:
                    score += bonus[j] * (BONUS_FIRST_CHAR_MULTIPLIER - 1)
                    score += max(PENALTY_LEADING * j, MAX_LEADING_PENALTY)
                    best[i][j] = score
                    continue

                prev_best = _NEG_INF
                prev_idx = -1
                for k in range(i - 1, j):
                    if best[i - 1][k] == _NEG_INF:
                        continue
                    gap = j - k - 1
                    if gap == 0:
                        link = max(BONUS_CONSECUTIVE, bonus[j])
                    else:
                        link = SCORE_GAP_START + SCORE_GAP_EXTENSION * (gap - 1)
                    if best[i - 1][k] + link > prev_best:
                        prev_best = best[i - 1][k] + link
                        prev_idx = k

                if prev_idx >= 0:
                    best[i][j] = score + prev_best
                    back[i][j] = prev_idx

        last = best[m - 1]
        end = max(range(n), key=lambda j: (last[j], -j))
        if last[end] == _NEG_INF:
            return None

        positions = [end]
        for i in range(m - 1, 0, -1):
            positions.append(back[i][positions[-1]])
        positions.reverse()

        return Match(max(int(last[end]), 0), tuple(positions))


class RapidfuzzMatcher(Matcher):
    """Typo-tolerant matcher using rapidfuzz's weighted ratio."""

    def __init__(self, threshold: int = 50):
        self.threshold = threshold

    def match(self, query: str, candidate: str) -> Optional[Match]:
        if not query:
            return Match(0)
        if not candidate:
            return None

        score = fuzz.WRatio(
            query,
            candidate,
            processor=utils.default_process,
            score_cutoff=self.threshold,
        )
        if not score:
            return None
        return Match(int(round(score)))


def make_matcher(config) -> Matcher:
    """Create the matcher selected by config.matcher."""
    if config.matcher == "fuzzy":
        return RapidfuzzMatcher(config.fuzzy_threshold)
    return SubsequenceMatcher()


def _is_subsequence(query: str, candidate: str) -> bool:
    it = iter(candidate)
    return all(ch in it for ch in query)
