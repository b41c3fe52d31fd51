"""
Launcher settings - TOML loading with defaults and a validated value object.

Settings live in ~/.config/launchrank/settings.toml. Any missing key falls
back to DEFAULT_SETTINGS, so an empty or absent file is a valid setup.

Example settings.toml:
    [launcher]
    command_prefix = ">"
    term_command = "foot -e {}"
    anchor = ["top"]

    [history]
    prune = true
    order = "frecency"

    [search]
    matcher = "subsequence"

    [entries]
    exclude = ["^org\\.gnome\\.Extensions"]
    name_overrides = { "code.desktop" = "VS Code" }
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger


SETTINGS_PATH = Path.home() / ".config" / "launchrank" / "settings.toml"

ANCHORS = ("top", "bottom", "left", "right")
HISTORY_ORDERS = ("frecency", "frequent", "recent")
MATCHERS = ("subsequence", "fuzzy")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "launcher": {
        "command_prefix": ">",
        "term_command": None,
        "cgroups": False,
        "close_on_unfocus": True,
        "width": 600,
        "height": 700,
        "anchor": ["top"],
    },
    "history": {
        "prune": False,
        "order": "frecency",
    },
    "search": {
        "matcher": "subsequence",
        "score_threshold": 0,
        "fuzzy_threshold": 50,
        "max_results": 30,
    },
    "entries": {
        "exclude": [],
        "name_overrides": {},
    },
}


class ConfigError(ValueError):
    """Raised when a settings value cannot be used."""


@dataclass(frozen=True)
class Config:
    """Read-only behavior knobs consumed by the ranking core."""

    command_prefix: str = ">"
    term_command: Optional[str] = None
    cgroups: bool = False
    close_on_unfocus: bool = True
    width: int = 600
    height: int = 700
    anchor: tuple = ("top",)
    prune_history: bool = False
    history_order: str = "frecency"
    matcher: str = "subsequence"
    score_threshold: int = 0
    fuzzy_threshold: int = 50
    max_results: int = 30
    exclude: tuple = ()
    name_overrides: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "Config":
        """
        Build a Config from a merged settings dictionary.

        Raises:
            ConfigError: If a value has the wrong type or an unknown choice
        """
        merged = _deep_merge(DEFAULT_SETTINGS, settings)
        for section in DEFAULT_SETTINGS:
            if not isinstance(merged[section], dict):
                raise ConfigError(f"[{section}] must be a table, got {merged[section]!r}")

        launcher = merged["launcher"]
        history = merged["history"]
        search = merged["search"]
        entries = merged["entries"]

        if history["order"] not in HISTORY_ORDERS:
            raise ConfigError(
                f"history.order must be one of {HISTORY_ORDERS}, got {history['order']!r}"
            )
        if search["matcher"] not in MATCHERS:
            raise ConfigError(
                f"search.matcher must be one of {MATCHERS}, got {search['matcher']!r}"
            )
        if not isinstance(launcher["command_prefix"], str):
            raise ConfigError("launcher.command_prefix must be a string")
        term_command = launcher["term_command"] or None
        if term_command is not None and not isinstance(term_command, str):
            raise ConfigError("launcher.term_command must be a string")
        if not isinstance(entries["exclude"], list):
            raise ConfigError("entries.exclude must be a list of patterns")
        if not isinstance(entries["name_overrides"], dict):
            raise ConfigError("entries.name_overrides must be a table")
        anchor = launcher["anchor"]
        if not isinstance(anchor, list) or any(edge not in ANCHORS for edge in anchor):
            raise ConfigError(f"launcher.anchor must be a list of {ANCHORS}, got {anchor!r}")

        try:
            return cls(
                command_prefix=launcher["command_prefix"],
                term_command=term_command,
                cgroups=bool(launcher["cgroups"]),
                close_on_unfocus=bool(launcher["close_on_unfocus"]),
                width=int(launcher["width"]),
                height=int(launcher["height"]),
                anchor=tuple(anchor),
                prune_history=bool(history["prune"]),
                history_order=history["order"],
                matcher=search["matcher"],
                score_threshold=int(search["score_threshold"]),
                fuzzy_threshold=int(search["fuzzy_threshold"]),
                max_results=int(search["max_results"]),
                exclude=tuple(str(p) for p in entries["exclude"]),
                name_overrides={str(k): str(v) for k, v in entries["name_overrides"].items()},
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load launcher settings from TOML file.

    Args:
        path: Settings file to read (defaults to SETTINGS_PATH)

    Returns:
        Dictionary containing settings with defaults applied
    """
    settings_path = path or SETTINGS_PATH

    if not settings_path.exists():
        logger.debug(f"Settings file not found at {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    try:
        loaded = toml.load(settings_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}")
        return _deep_merge(DEFAULT_SETTINGS, {})

    return _deep_merge(DEFAULT_SETTINGS, loaded)


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load settings and convert them into a validated Config.

    Invalid values are logged and replaced by the defaults.
    """
    settings = load_settings(path)
    try:
        return Config.from_settings(settings)
    except ConfigError as e:
        logger.warning(f"Invalid settings, using defaults: {e}")
        return Config()


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
