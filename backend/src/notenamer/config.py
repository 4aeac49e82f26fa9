# backend/src/notenamer/config.py
"""Configuration system for notenamer.

Settings are a flat key-value object persisted as JSON in the data directory.
Stored values are merged over the defaults in CONFIG_SCHEMA, then type- and
range-checked. The data directory comes from NOTENAMER_DATA_DIR (default
~/.notenamer) and the default API key from GEMINI_API_KEY.
"""

import json
import logging
import math
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"

TRUE_STRINGS = ("true", "1", "yes", "on")
FALSE_STRINGS = ("false", "0", "no", "off")


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, tuple[type, Any, Any, Any, str]] = {
    "api_key": (str, "", None, None, "Gemini API key"),
    "max_title_length": (int, 40, 10, 100, "Maximum generated title length"),
    "title_temperature": (float, 0.2, 0.0, 1.0, "Temperature for title generation"),
    "title_max_output_tokens": (int, 64, 1, 8192, "Output token ceiling for titles"),
    "tag_temperature": (float, 0.2, 0.0, 1.0, "Temperature for tag generation"),
    "tag_max_output_tokens": (int, 128, 1, 8192, "Output token ceiling for tags"),
    "max_content_length": (int, 100, 50, 500, "Characters of body sent for tagging"),
    "show_ribbon_icons": (bool, False, None, None, "Show quick-action icons"),
    "enable_notifications": (bool, True, None, None, "Show success notifications"),
}


@dataclass(frozen=True)
class Settings:
    """User settings for title and tag generation."""

    api_key: str = ""
    max_title_length: int = 40
    title_temperature: float = 0.2
    title_max_output_tokens: int = 64
    tag_temperature: float = 0.2
    tag_max_output_tokens: int = 128
    max_content_length: int = 100
    show_ribbon_icons: bool = False
    enable_notifications: bool = True

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _coerce(key: str, raw_value: Any) -> Any:
    """Coerce and range-check one stored value against the schema.

    Raises:
        ConfigError: If the value has the wrong type or is out of range.
    """
    typ, _, min_val, max_val, _ = CONFIG_SCHEMA[key]

    value: bool | int | float | str
    if typ is bool:
        if isinstance(raw_value, bool):
            value = raw_value
        elif isinstance(raw_value, str) and raw_value.lower() in TRUE_STRINGS:
            value = True
        elif isinstance(raw_value, str) and raw_value.lower() in FALSE_STRINGS:
            value = False
        else:
            raise ConfigError(f"Invalid value for {key}: {raw_value!r} (expected bool)")
    elif typ is int:
        # bool is an int subclass; reject it so `true` never becomes 1
        if isinstance(raw_value, bool) or (
            isinstance(raw_value, float) and not raw_value.is_integer()
        ):
            raise ConfigError(f"Invalid value for {key}: {raw_value!r} (expected int)")
        try:
            value = int(raw_value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value for {key}: {raw_value!r} (expected int)") from e
    elif typ is float:
        if isinstance(raw_value, bool):
            raise ConfigError(f"Invalid value for {key}: {raw_value!r} (expected float)")
        try:
            value = float(raw_value)
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"Invalid value for {key}: {raw_value!r} (expected float)"
            ) from e
        if not math.isfinite(value):
            raise ConfigError(f"Invalid value for {key}: {raw_value!r} (expected a finite float)")
    else:
        if raw_value is None:
            raw_value = ""
        if not isinstance(raw_value, str):
            raise ConfigError(f"Invalid value for {key}: {raw_value!r} (expected str)")
        value = raw_value

    if typ in (int, float):
        if min_val is not None and value < min_val:
            raise ConfigError(f"Value for {key} is {value}, but minimum is {min_val}")
        if max_val is not None and value > max_val:
            raise ConfigError(f"Value for {key} is {value}, but maximum is {max_val}")

    return value


def default_values() -> dict[str, Any]:
    """Schema defaults, with the API key taken from GEMINI_API_KEY if set."""
    values = {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA.items()}
    values["api_key"] = os.getenv("GEMINI_API_KEY", "")
    return values


def merge_settings(stored: dict[str, Any], base: Optional[Settings] = None) -> Settings:
    """Merge stored values over defaults (or over an existing Settings).

    Unknown keys are ignored so settings files written by newer versions
    still load.

    Raises:
        ConfigError: If any known key fails validation.
    """
    values = base.to_dict() if base is not None else default_values()
    for key, raw_value in stored.items():
        if key not in CONFIG_SCHEMA:
            logger.debug(f"Ignoring unknown setting: {key}")
            continue
        values[key] = _coerce(key, raw_value)
    return Settings(**values)


def get_data_dir() -> Path:
    """Return the notenamer data directory (not created)."""
    data_dir_str = os.getenv("NOTENAMER_DATA_DIR")
    if data_dir_str:
        return Path(data_dir_str)
    return Path.home() / ".notenamer"


class SettingsStore:
    """Loads and persists Settings as a flat JSON object.

    The loaded value is kept in memory; every update is written through to
    disk before it becomes the current value.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or get_data_dir() / SETTINGS_FILENAME
        self._settings: Optional[Settings] = None

    def _read_stored(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            stored = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Settings file {self.path} is not valid JSON: {e}") from e
        if not isinstance(stored, dict):
            raise ConfigError(f"Settings file {self.path} must contain a JSON object")
        return stored

    def load(self) -> Settings:
        """Load settings from disk, merged over defaults."""
        self._settings = merge_settings(self._read_stored())
        logger.info(f"Settings loaded from {self.path}")
        return self._settings

    @property
    def settings(self) -> Settings:
        """Current settings, loading them on first access."""
        if self._settings is None:
            return self.load()
        return self._settings

    def save(self, settings: Settings) -> None:
        """Persist settings and make them current."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
        self._settings = settings

    def update(self, **changes: Any) -> Settings:
        """Validate a partial update, persist it, and return the new settings.

        Raises:
            ConfigError: If a value fails validation or the key is unknown.
        """
        unknown = sorted(set(changes) - {f.name for f in fields(Settings)})
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")
        updated = merge_settings(changes, base=self.settings)
        self.save(updated)
        logger.info(f"Settings updated: {', '.join(sorted(changes))}")
        return updated
