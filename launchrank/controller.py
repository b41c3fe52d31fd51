"""
Query Controller - Owns entries, history and query state.

The presentation layer feeds it events and reads back sorted snapshots:

    TextChanged(text)   -> re-score entries (or hide all in command mode)
    Activated()         -> run the command, or launch the top visible entry
    RowSelected(id)     -> launch a specific entry if it is visible

Text that starts with the configured command prefix (">" by default) puts
the controller in command mode: the rest of the line is a shell command
and no entry is matched.
"""

import enum
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from loguru import logger

from .config import Config
from .entry import Entry
from .search.matcher import Matcher, make_matcher
from .search.ranking import history_weight, sort_entries, sort_key, top_visible
from .services.history import HistoryMap, HistoryStore, record_use
from .utils.helpers import launch_app, launch_command


@dataclass(frozen=True)
class TextChanged:
    text: str


@dataclass(frozen=True)
class Activated:
    pass


@dataclass(frozen=True)
class RowSelected:
    entry_id: str


Event = Union[TextChanged, Activated, RowSelected]


class Outcome(enum.Enum):
    """What handling an event did."""
    NONE = "none"
    UPDATED = "updated"
    LAUNCHED = "launched"
    COMMAND = "command"
    REJECTED = "rejected"


def is_command(text: str, prefix: str) -> bool:
    """True if `text` starts with the exact, non-empty command prefix."""
    return bool(prefix) and text.startswith(prefix)


def command_text(text: str, prefix: str) -> str:
    """Strip the command prefix and surrounding whitespace."""
    return text[len(prefix):].strip()


class QueryController:
    """
    Single owner of the entry set, the history map and the query text.

    Args:
        entries: Discovered entries (unique ids)
        config: Behavior knobs
        store: Backing store for history; None keeps history in memory only
        history: Already loaded history map
        matcher: Match strategy (defaults to the one config selects)
        launcher: Callable(AppInfo) -> bool that spawns an entry
        executor: Callable(str) -> bool that runs a raw command
    """

    def __init__(
        self,
        entries: Iterable[Entry],
        config: Optional[Config] = None,
        store: Optional[HistoryStore] = None,
        history: Optional[HistoryMap] = None,
        matcher: Optional[Matcher] = None,
        launcher: Optional[Callable] = None,
        executor: Optional[Callable[[str], bool]] = None,
    ):
        self.config = config or Config()
        self.store = store
        self.history = history if history is not None else {}
        self.matcher = matcher or make_matcher(self.config)
        self._launcher = launcher or (
            lambda info: launch_app(info, self.config.term_command, self.config.cgroups)
        )
        self._executor = executor or launch_command

        self._entries = {}
        for entry in entries:
            self._entries.setdefault(entry.id, entry)

        self.text = ""
        self.command_mode = False
        self.command = ""
        self.set_text("")

    def dispatch(self, event: Event) -> Outcome:
        """Handle one event from the presentation layer."""
        if isinstance(event, TextChanged):
            self.set_text(event.text)
            return Outcome.UPDATED
        if isinstance(event, Activated):
            return self.activate()
        if isinstance(event, RowSelected):
            return self.activate_entry(event.entry_id)
        raise TypeError(f"Unknown event: {event!r}")

    def set_text(self, text: str) -> None:
        """Update the query and every entry's match state."""
        self.text = text
        self.command_mode = is_command(text, self.config.command_prefix)

        if self.command_mode:
            self.command = command_text(text, self.config.command_prefix)
            for entry in self._entries.values():
                entry.hide()
            return

        self.command = ""
        for entry in self._entries.values():
            entry.update_match(text, self.matcher, self.config)

    def activate(self) -> Outcome:
        """Enter pressed: run the command or launch the top hit."""
        if self.command_mode:
            if not self.command:
                return Outcome.NONE
            self._executor(self.command)
            return Outcome.COMMAND

        top = top_visible(self._entries.values())
        if top is None:
            return Outcome.NONE
        return self.activate_entry(top.id)

    def activate_entry(self, entry_id: str) -> Outcome:
        """Launch a specific entry; hidden or unknown ids are rejected."""
        entry = self._entries.get(entry_id)
        if entry is None or entry.hidden:
            logger.debug(f"Rejected activation of {entry_id}")
            return Outcome.REJECTED

        if not self._launcher(entry.info):
            return Outcome.NONE

        record = record_use(self.history, entry.id)
        entry.history_weight = history_weight(record, self.config.history_order)
        if self.store is not None:
            self.store.save(self.history)
        return Outcome.LAUNCHED

    def entry(self, entry_id: str) -> Optional[Entry]:
        return self._entries.get(entry_id)

    def is_visible(self, entry_id: str) -> bool:
        entry = self._entries.get(entry_id)
        return entry is not None and not entry.hidden

    def entries(self) -> tuple:
        """All entries in display order."""
        return tuple(sort_entries(self._entries.values()))

    def visible_entries(self, limit: Optional[int] = None) -> tuple:
        """Visible entries in display order, optionally truncated."""
        visible = [entry for entry in sort_entries(self._entries.values()) if not entry.hidden]
        if limit is not None:
            visible = visible[:limit]
        return tuple(visible)

    sort_key = staticmethod(sort_key)
