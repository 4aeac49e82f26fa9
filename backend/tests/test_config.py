"""Tests for settings loading, validation and persistence."""

import json

import pytest

from notenamer.config import (
    CONFIG_SCHEMA,
    ConfigError,
    Settings,
    SettingsStore,
    get_data_dir,
    merge_settings,
)


class TestMergeSettings:
    def test_defaults(self):
        """An empty store yields the default settings."""
        settings = merge_settings({})
        assert settings == Settings()

    def test_schema_defaults_match_dataclass(self):
        """The schema and the dataclass agree on defaults."""
        defaults = Settings().to_dict()
        for key, (_, default, _, _, _) in CONFIG_SCHEMA.items():
            assert defaults[key] == default

    def test_api_key_from_environment(self, monkeypatch):
        """GEMINI_API_KEY supplies the default key."""
        monkeypatch.setenv("GEMINI_API_KEY", "AIfromenv")
        assert merge_settings({}).api_key == "AIfromenv"

    def test_stored_value_overrides_environment(self, monkeypatch):
        """A stored key wins over the environment."""
        monkeypatch.setenv("GEMINI_API_KEY", "AIfromenv")
        assert merge_settings({"api_key": "AIstored"}).api_key == "AIstored"

    def test_unknown_keys_ignored(self):
        """Keys outside the schema are ignored."""
        assert merge_settings({"theme": "dark"}) == Settings()

    def test_numeric_strings_coerced(self):
        """Numeric strings are converted to their schema type."""
        settings = merge_settings({"max_title_length": "60", "tag_temperature": "0.5"})
        assert settings.max_title_length == 60
        assert settings.tag_temperature == 0.5

    def test_bool_strings_coerced(self):
        """Recognised boolean strings are converted."""
        assert merge_settings({"show_ribbon_icons": "true"}).show_ribbon_icons is True
        assert merge_settings({"enable_notifications": "off"}).enable_notifications is False

    def test_below_minimum(self):
        """Values under the minimum name the limit."""
        with pytest.raises(ConfigError, match="minimum is 10"):
            merge_settings({"max_title_length": 5})

    def test_above_maximum(self):
        """Values over the maximum name the limit."""
        with pytest.raises(ConfigError, match="maximum is 1.0"):
            merge_settings({"title_temperature": 1.5})

    def test_bool_rejected_for_int(self):
        """Booleans are not accepted as integers."""
        with pytest.raises(ConfigError, match="expected int"):
            merge_settings({"max_content_length": True})

    def test_fractional_float_rejected_for_int(self):
        """Fractional numbers are not accepted as integers."""
        with pytest.raises(ConfigError, match="expected int"):
            merge_settings({"max_content_length": 75.5})

    def test_non_numeric_rejected(self):
        """Text that is not a number is rejected."""
        with pytest.raises(ConfigError, match="expected float"):
            merge_settings({"tag_temperature": "warm"})

    @pytest.mark.parametrize("raw", ["NaN", "nan", float("nan"), "inf", float("-inf")])
    def test_non_finite_float_rejected(self, raw):
        """NaN and infinities are rejected instead of slipping past the range check."""
        with pytest.raises(ConfigError, match="finite"):
            merge_settings({"title_temperature": raw})

    @pytest.mark.parametrize("raw", ["maybe", "", "2", 1, None])
    def test_unrecognised_bool_rejected(self, raw):
        """Values that are not a known boolean spelling are rejected."""
        with pytest.raises(ConfigError, match="expected bool"):
            merge_settings({"show_ribbon_icons": raw})

    def test_false_strings_coerced(self):
        """Recognised false spellings become False."""
        for raw in ("false", "0", "no", "OFF"):
            assert merge_settings({"enable_notifications": raw}).enable_notifications is False

    def test_merges_over_base(self):
        """Updates merge over existing settings, not defaults."""
        base = Settings(api_key="AIbase", max_title_length=30)
        settings = merge_settings({"tag_temperature": 0.4}, base=base)
        assert settings.api_key == "AIbase"
        assert settings.max_title_length == 30
        assert settings.tag_temperature == 0.4


class TestSettingsStore:
    def test_missing_file_gives_defaults(self, tmp_path):
        """A missing settings file yields defaults."""
        store = SettingsStore(tmp_path / "settings.json")
        assert store.load() == Settings()

    def test_loads_stored_values(self, tmp_path):
        """Stored values are loaded."""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"max_title_length": 55}))
        assert SettingsStore(path).settings.max_title_length == 55

    def test_invalid_json(self, tmp_path):
        """A corrupt settings file raises ConfigError."""
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            SettingsStore(path).load()

    def test_non_object_json(self, tmp_path):
        """A settings file must hold an object."""
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            SettingsStore(path).load()

    def test_update_persists(self, tmp_path):
        """Updates are written through to disk."""
        path = tmp_path / "nested" / "settings.json"
        store = SettingsStore(path)

        updated = store.update(api_key="AIsaved", show_ribbon_icons=True)

        assert updated.api_key == "AIsaved"
        assert store.settings == updated
        stored = json.loads(path.read_text())
        assert stored["api_key"] == "AIsaved"
        assert stored["show_ribbon_icons"] is True
        assert SettingsStore(path).load() == updated

    def test_update_rejects_unknown_key(self, tmp_path):
        """Updating an unknown key raises ConfigError."""
        store = SettingsStore(tmp_path / "settings.json")
        with pytest.raises(ConfigError, match="Unknown setting"):
            store.update(theme="dark")

    def test_failed_update_keeps_previous_value(self, tmp_path):
        """A rejected update changes neither memory nor disk."""
        path = tmp_path / "settings.json"
        store = SettingsStore(path)
        store.update(max_title_length=50)

        with pytest.raises(ConfigError):
            store.update(max_title_length=500)

        assert store.settings.max_title_length == 50
        assert json.loads(path.read_text())["max_title_length"] == 50


def test_data_dir_from_environment(monkeypatch, tmp_path):
    """NOTENAMER_DATA_DIR selects the data directory."""
    monkeypatch.setenv("NOTENAMER_DATA_DIR", str(tmp_path))
    assert get_data_dir() == tmp_path


def test_default_data_dir(monkeypatch):
    """The data directory defaults to ~/.notenamer."""
    monkeypatch.delenv("NOTENAMER_DATA_DIR", raising=False)
    assert get_data_dir().name == ".notenamer"
