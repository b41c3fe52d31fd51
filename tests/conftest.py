"""
Shared test fixtures for the launchrank test suite.

Provides a temporary history database, settings file and entry factory
that use real file I/O (no mocking of the filesystem).
"""

import sqlite3

import pytest
import toml

from launchrank.config import Config
from launchrank.entry import AppInfo, Entry


@pytest.fixture
def tmp_db(tmp_path):
    """Create a real SQLite database with HistoryStore-compatible schema."""
    db_path = tmp_path / "history.db"
    conn = sqlite3.connect(str(db_path))
    conn.execute("""
        CREATE TABLE IF NOT EXISTS history (
            app_id TEXT PRIMARY KEY,
            launch_count INTEGER DEFAULT 0,
            last_launch INTEGER DEFAULT 0
        )
    """)
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "launcher": {"command_prefix": "!", "term_command": "foot -e {}", "cgroups": True},
        "history": {"prune": True, "order": "recent"},
        "search": {"matcher": "fuzzy", "score_threshold": 5, "fuzzy_threshold": 60, "max_results": 10},
        "entries": {"exclude": ["^hidden"], "name_overrides": {"code.desktop": "VS Code"}},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def make_entry():
    """Factory for entries with only the fields a test cares about."""
    def _make(app_id, name, description="", keywords=(), command="", **state):
        info = AppInfo(
            id=app_id,
            name=name,
            command=command or name.lower(),
            description=description,
            keywords=tuple(keywords),
        )
        return Entry(info, **state)
    return _make
