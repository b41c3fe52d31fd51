"""
Tests for settings loading, deep merge logic and Config validation.

Uses real TOML files on disk (no mocking).
"""

import pytest
import toml

from launchrank.config import (
    DEFAULT_SETTINGS,
    Config,
    ConfigError,
    _deep_merge,
    load_config,
    load_settings,
)


class TestDeepMerge:
    """Test the _deep_merge function directly."""

    def test_override_replaces_flat_key(self):
        assert _deep_merge({"a": 1, "b": 2}, {"b": 99}) == {"a": 1, "b": 99}

    def test_override_adds_new_key(self):
        assert _deep_merge({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_nested_dicts_are_merged(self):
        base = {"section": {"a": 1, "b": 2}}
        override = {"section": {"b": 99, "c": 3}}
        assert _deep_merge(base, override) == {"section": {"a": 1, "b": 99, "c": 3}}

    def test_base_is_not_mutated(self):
        base = {"a": {"x": 1}}
        _deep_merge(base, {"a": {"x": 2}})
        assert base["a"]["x"] == 1


class TestLoadSettings:
    """Test load_settings with real TOML files."""

    def test_returns_defaults_when_file_missing(self, tmp_path):
        settings = load_settings(tmp_path / "nonexistent.toml")
        assert settings == DEFAULT_SETTINGS

    def test_loaded_values_override_defaults(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text(toml.dumps({"launcher": {"command_prefix": "$"}}))
        settings = load_settings(path)
        assert settings["launcher"]["command_prefix"] == "$"
        assert settings["history"]["order"] == "frecency"

    def test_invalid_toml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("[launcher\ncommand_prefix = ")
        assert load_settings(path) == DEFAULT_SETTINGS


class TestConfig:
    """Test conversion to the Config value object."""

    def test_defaults(self):
        config = Config.from_settings({})
        assert config == Config()
        assert config.command_prefix == ">"
        assert config.prune_history is False
        assert config.history_order == "frecency"
        assert config.matcher == "subsequence"

    def test_full_settings_file(self, tmp_settings):
        config = load_config(tmp_settings)
        assert config.command_prefix == "!"
        assert config.term_command == "foot -e {}"
        assert config.cgroups is True
        assert config.prune_history is True
        assert config.history_order == "recent"
        assert config.matcher == "fuzzy"
        assert config.score_threshold == 5
        assert config.fuzzy_threshold == 60
        assert config.max_results == 10
        assert config.exclude == ("^hidden",)
        assert config.name_overrides == {"code.desktop": "VS Code"}

    def test_unknown_history_order_rejected(self):
        with pytest.raises(ConfigError):
            Config.from_settings({"history": {"order": "alphabetical"}})

    def test_unknown_matcher_rejected(self):
        with pytest.raises(ConfigError):
            Config.from_settings({"search": {"matcher": "semantic"}})

    def test_non_numeric_threshold_rejected(self):
        with pytest.raises(ConfigError):
            Config.from_settings({"search": {"score_threshold": "high"}})

    def test_load_config_falls_back_on_invalid_values(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text(toml.dumps({"history": {"order": "alphabetical"}}))
        assert load_config(path) == Config()

    def test_empty_term_command_is_none(self):
        config = Config.from_settings({"launcher": {"term_command": ""}})
        assert config.term_command is None

    def test_non_table_section_rejected(self):
        with pytest.raises(ConfigError):
            Config.from_settings({"launcher": "oops"})

    def test_load_config_falls_back_on_non_table_section(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text('launcher = "oops"\n')
        assert load_config(path) == Config()


class TestWindowSettings:
    """Test launcher window placement and focus settings."""

    def test_defaults(self):
        config = Config()
        assert config.close_on_unfocus is True
        assert (config.width, config.height) == (600, 700)
        assert config.anchor == ("top",)

    def test_custom_placement(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text(toml.dumps({
            "launcher": {
                "close_on_unfocus": False,
                "width": 800,
                "height": 400,
                "anchor": ["bottom", "left"],
            },
        }))
        config = load_config(path)
        assert config.close_on_unfocus is False
        assert (config.width, config.height) == (800, 400)
        assert config.anchor == ("bottom", "left")

    def test_unknown_anchor_rejected(self):
        with pytest.raises(ConfigError):
            Config.from_settings({"launcher": {"anchor": ["middle"]}})

    def test_anchor_must_be_list(self):
        with pytest.raises(ConfigError):
            Config.from_settings({"launcher": {"anchor": "top"}})

    def test_non_numeric_width_rejected(self):
        with pytest.raises(ConfigError):
            Config.from_settings({"launcher": {"width": "wide"}})
