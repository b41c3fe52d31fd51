"""
Tests for the subsequence and rapidfuzz matchers.
"""

import pytest

from launchrank.config import Config
from launchrank.search.matcher import (
    Match,
    RapidfuzzMatcher,
    SubsequenceMatcher,
    make_matcher,
)


class TestSubsequenceMatcher:
    """Test the fzf-style subsequence scoring."""

    def setup_method(self):
        self.matcher = SubsequenceMatcher()

    def test_empty_query_matches_with_zero(self):
        assert self.matcher.match("", "Firefox") == Match(0)
        assert self.matcher.match("", "") == Match(0)

    def test_empty_candidate_never_matches(self):
        assert self.matcher.match("f", "") is None

    def test_non_subsequence_is_no_match(self):
        assert self.matcher.match("xyz", "Firefox") is None
        assert self.matcher.match("ff", "Files") is None

    def test_query_longer_than_candidate(self):
        assert self.matcher.match("firefoxes", "Firefox") is None

    def test_case_insensitive(self):
        assert self.matcher.match("FIRE", "firefox") is not None
        assert self.matcher.match("fire", "FIREFOX") is not None

    def test_positions_point_at_matched_chars(self):
        result = self.matcher.match("ffx", "Firefox")
        assert result.positions == (0, 4, 6)

    def test_prefers_contiguous_run(self):
        contiguous = self.matcher.match("term", "Terminal")
        scattered = self.matcher.match("term", "Text Reader Mail")
        assert contiguous.score > scattered.score

    def test_prefers_earlier_match(self):
        early = self.matcher.match("code", "code editor")
        late = self.matcher.match("code", "xxxxxxxxcode")
        assert early.score > late.score

    def test_prefers_word_boundary(self):
        boundary = self.matcher.match("m", "Gnome Maps")
        inner = self.matcher.match("m", "Gnome Xaps")
        assert boundary.positions == (6,)
        assert boundary.score > inner.score

    def test_word_start_beats_inner_char(self):
        result = self.matcher.match("s", "KeePassXC Settings")
        assert result.positions == (10,)

    def test_camel_case_bonus(self):
        assert self.matcher.match("p", "KeePass").score > self.matcher.match("p", "Keepass").score

    def test_exact_case_scores_higher(self):
        assert self.matcher.match("F", "Firefox").score > self.matcher.match("f", "Firefox").score

    def test_same_prefix_scores_tie(self):
        assert self.matcher.match("fi", "Firefox").score == self.matcher.match("fi", "Files").score

    def test_score_is_never_negative(self):
        result = self.matcher.match("az", "a" + "-" * 200 + "z")
        assert result is not None
        assert result.score >= 0

    def test_picks_best_alignment(self):
        # Greedy would take the first "c"; the optimal path uses "Code"
        result = self.matcher.match("code", "cxx Code")
        assert result.positions == (4, 5, 6, 7)


class TestRapidfuzzMatcher:
    """Test the typo-tolerant matcher."""

    def test_tolerates_typo(self):
        matcher = RapidfuzzMatcher(threshold=50)
        result = matcher.match("firefx", "Firefox")
        assert result is not None
        assert result.score >= 50
        assert result.positions == ()

    def test_below_threshold_is_no_match(self):
        matcher = RapidfuzzMatcher(threshold=50)
        assert matcher.match("xyz", "Firefox") is None

    def test_empty_query_and_candidate(self):
        matcher = RapidfuzzMatcher()
        assert matcher.match("", "Firefox") == Match(0)
        assert matcher.match("fire", "") is None


class TestMakeMatcher:

    def test_default_is_subsequence(self):
        assert isinstance(make_matcher(Config()), SubsequenceMatcher)

    @pytest.mark.parametrize("threshold", [40, 70])
    def test_fuzzy_uses_threshold(self, threshold):
        matcher = make_matcher(Config(matcher="fuzzy", fuzzy_threshold=threshold))
        assert isinstance(matcher, RapidfuzzMatcher)
        assert matcher.threshold == threshold
