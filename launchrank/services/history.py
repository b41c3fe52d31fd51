"""
History Service - Persist how often and how recently each entry was launched.

Records live in a SQLite database at the XDG data location:
    ~/.local/share/launchrank/history.db

The in-memory HistoryMap is authoritative for a session. The store only
loads it once at startup and writes it back after each launch. Only named
columns are read, so rows written by newer versions with extra columns
still load.
"""

import sqlite3
import time
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

from loguru import logger


DEFAULT_DB_PATH = Path.home() / ".local" / "share" / "launchrank" / "history.db"


@dataclass
class HistoryEntry:
    """Usage statistics for one entry id."""
    id: str
    count: int = 0
    last_used: int = 0


HistoryMap = Dict[str, HistoryEntry]


def record_use(history: HistoryMap, app_id: str, now: Optional[int] = None) -> HistoryEntry:
    """
    Record a launch of `app_id` in the in-memory history.

    Args:
        history: History map to update in place
        app_id: Desktop file ID (e.g., "firefox.desktop")
        now: Launch time in Unix seconds (defaults to the current time)

    Returns:
        The updated HistoryEntry
    """
    if now is None:
        now = int(time.time())

    record = history.get(app_id)
    if record is None:
        record = history[app_id] = HistoryEntry(app_id)

    record.count += 1
    record.last_used = max(record.last_used, now)
    logger.debug(f"Recorded launch for {app_id} (count={record.count})")
    return record


def prune(history: HistoryMap, known_ids: Iterable[str]) -> int:
    """
    Drop records whose id is not in `known_ids`.

    Returns:
        Number of records removed
    """
    known = set(known_ids)
    stale = [app_id for app_id in history if app_id not in known]
    for app_id in stale:
        del history[app_id]
    if stale:
        logger.debug(f"Pruned {len(stale)} stale history records")
    return len(stale)


class HistoryStore:
    """
    SQLite backing store for launch history.

    Methods:
        load(prune, known_ids): Read all records into a HistoryMap
        save(history): Write a HistoryMap back in one transaction
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            self._init_database(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def _init_database(self, conn: sqlite3.Connection) -> None:
        """Create database schema if it doesn't exist."""
        conn.execute("""
            CREATE TABLE IF NOT EXISTS history (
                app_id TEXT PRIMARY KEY,
                launch_count INTEGER DEFAULT 0,
                last_launch INTEGER DEFAULT 0
            )
        """)
        conn.commit()

    def load(self, prune_enabled: bool = False, known_ids: Optional[Iterable[str]] = None) -> HistoryMap:
        """
        Load persisted history.

        Args:
            prune_enabled: Drop records for ids not in `known_ids`
            known_ids: Ids of the currently discovered entries

        Returns:
            HistoryMap, empty if the store is missing or unreadable
        """
        history: HistoryMap = {}
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    "SELECT app_id, launch_count, last_launch FROM history"
                ).fetchall()
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Could not load history from {self.db_path}: {e}")
            return history

        for app_id, count, last_used in rows:
            if not app_id:
                continue
            try:
                history[app_id] = HistoryEntry(app_id, max(int(count or 0), 0), int(last_used or 0))
            except (TypeError, ValueError):
                logger.warning(f"Skipping malformed history record for {app_id}")

        if prune_enabled:
            if known_ids is None:
                logger.debug("History pruning requested without known ids, keeping all records")
            else:
                prune(history, known_ids)

        logger.debug(f"Loaded {len(history)} history records from {self.db_path}")
        return history

    def save(self, history: HistoryMap) -> bool:
        """
        Persist `history`, replacing whatever the store held.

        Returns:
            True on success. Failures are logged and reported as False;
            the in-memory history stays authoritative.
        """
        try:
            with closing(self._connect()) as conn:
                with conn:
                    stored = {row[0] for row in conn.execute("SELECT app_id FROM history")}
                    stale = stored.difference(history)
                    conn.executemany(
                        "DELETE FROM history WHERE app_id = ?",
                        [(app_id,) for app_id in stale],
                    )
                    conn.executemany("""
                        INSERT INTO history (app_id, launch_count, last_launch)
                        VALUES (?, ?, ?)
                        ON CONFLICT(app_id) DO UPDATE SET
                            launch_count = excluded.launch_count,
                            last_launch = excluded.last_launch
                    """, [(r.id, r.count, r.last_used) for r in history.values()])
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Failed to save history to {self.db_path}: {e}")
            return False

        logger.debug(f"Saved {len(history)} history records")
        return True
