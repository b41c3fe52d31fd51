"""
Entry model - One launchable item plus its per-query state.

AppInfo holds the static metadata supplied by discovery. Entry wraps it
with the state that changes on every keystroke: score, visibility, which
field matched and where, and the history weight used for tie-breaking.
"""

from dataclasses import dataclass, field
from typing import Optional

from .search.matcher import Matcher
from .search.ranking import MIN_WEIGHT, compare


@dataclass(frozen=True)
class AppInfo:
    """Static metadata for a launchable application."""
    id: str
    name: str
    command: str = ""
    description: str = ""
    keywords: tuple = ()
    working_dir: Optional[str] = None
    terminal: bool = False
    icon: str = "application-x-executable"
    app: object = field(default=None, compare=False, repr=False)  # Application object for Ignis-discovered entries


@dataclass(eq=False)
class Entry:
    """A launchable item as seen by the current query."""
    info: AppInfo
    display_name: str = ""
    score: Optional[int] = 0
    hidden: bool = False
    history_weight: tuple = MIN_WEIGHT
    matched_field: Optional[str] = None
    positions: tuple = field(default_factory=tuple)

    def __post_init__(self):
        if not self.display_name:
            self.display_name = self.info.name

    @property
    def id(self) -> str:
        return self.info.id

    def update_match(self, query: str, matcher: Matcher, config) -> None:
        """
        Re-score this entry against `query`.

        Fields are tried in priority order (name, description, keywords)
        and the first match wins. An empty or blank query matches with
        score 0.
        """
        if not query.strip():
            self._set_match(0, None, ())
            return

        for field_name, text in self._candidates():
            result = matcher.match(query, text)
            if result is not None and result.score >= config.score_threshold:
                self._set_match(result.score, field_name, result.positions)
                return

        self.hide()

    def hide(self) -> None:
        """Hide without consulting the matcher (used in command mode)."""
        self.hidden = True
        self.score = None
        self.matched_field = None
        self.positions = ()

    def cmp(self, other: "Entry") -> int:
        return compare(self, other)

    def __lt__(self, other: "Entry") -> bool:
        return compare(self, other) < 0

    def _candidates(self):
        yield "name", self.display_name
        if self.info.description:
            yield "description", self.info.description
        for keyword in self.info.keywords:
            if keyword:
                yield "keyword", keyword

    def _set_match(self, score: int, field_name: Optional[str], positions: tuple) -> None:
        self.score = score
        self.hidden = False
        self.matched_field = field_name
        self.positions = positions
