"""Registry settings management with config file persistence."""

from __future__ import annotations

import configparser
import logging
import os
from typing import Any

from eventregistry.lib.get_platform import get_data_directory


class PreferenceManager:
    """Single source of truth for user-configurable registry settings.

    Stores settings in config.ini under the [REGISTRY] section and handles
    persistence and type conversion.
    """

    SECTION = "REGISTRY"

    # Default values for all settings (single source of truth)
    DEFAULTS = {
        "error_policy": "isolate",
        "log_level": logging.INFO,
    }

    def __init__(self, config_file_path: str = "config.ini", target: object | None = None) -> None:
        """Initialize with config path and optional target object to sync.

        Args:
            config_file_path: Path to config.ini (relative paths go in data directory)
            target: Optional object whose attributes follow the settings, e.g. an EventRegistry
        """
        self._config_obj = configparser.ConfigParser()
        self._target = target

        if not os.path.isabs(config_file_path):
            self.config_file_path = os.path.join(get_data_directory(), config_file_path)
        else:
            self.config_file_path = config_file_path

        logging.debug(f"Using config file: {self.config_file_path}")

    def get(self, preference: str, default_value: Any = None) -> Any:
        """Get a setting value, auto-converting to bool/int/float."""
        # Silently ignores missing files
        self._config_obj.read(self.config_file_path, encoding="utf-8")

        if not self._config_obj.has_section(self.SECTION):
            return default_value

        try:
            pref = self._config_obj.get(self.SECTION, preference)
            return self._convert_value(pref)
        except (configparser.NoOptionError, ValueError):
            return default_value

    def get_or_default(self, preference: str) -> Any:
        """Get a setting value, falling back to DEFAULTS if not set."""
        return self.get(preference, self.DEFAULTS.get(preference))

    def set(self, preference: str, val: Any) -> tuple[bool, str]:
        """Update a setting, persist to config, and sync the target object.

        Returns (success, message) tuple.
        """
        if not self._persist(preference, val):
            return (False, "Something went wrong! Your settings were not changed")

        if self._target is not None and hasattr(self._target, preference):
            setattr(self._target, preference, self._convert_value(val))

        return (True, "Your settings were changed successfully")

    def _persist(self, preference: str, val: Any) -> bool:
        """Write one setting to the config file without touching the target."""
        logging.debug(f"Changing setting << {preference} >> to {val}")
        try:
            # Read existing config to preserve other settings
            self._config_obj.read(self.config_file_path, encoding="utf-8")

            if self.SECTION not in self._config_obj:
                self._config_obj.add_section(self.SECTION)

            self._config_obj[self.SECTION][preference] = str(val)

            with open(self.config_file_path, "w", encoding="utf-8") as conf:
                self._config_obj.write(conf)
        except (OSError, configparser.Error) as e:
            logging.error(f"Failed to change setting << {preference} >>: {e}")
            return False
        return True

    def clear(self) -> tuple[bool, str]:
        """Remove all settings by deleting the config file. Returns (success, message)."""
        try:
            if os.path.exists(self.config_file_path):
                os.remove(self.config_file_path)
                logging.info(f"Cleared settings: deleted {self.config_file_path}")
            # Drop the cached parser state so stale values don't come back
            self._config_obj.clear()
            return (True, "Your settings were cleared successfully")
        except OSError as e:
            logging.error(f"Failed to clear settings: {e}")
            return (False, "Something went wrong! Your settings were not cleared")

    def _convert_value(self, val: Any) -> Any:
        """Convert a string to bool/int/float if applicable, otherwise return as-is."""
        if not isinstance(val, str):
            return val

        val_lower = val.lower()
        if val_lower in ("true", "yes", "on"):
            return True
        if val_lower in ("false", "no", "off"):
            return False

        stripped = val.lstrip("-")
        if stripped.isdigit():
            return int(val)
        if stripped.replace(".", "", 1).isdigit():
            return float(val)

        return val

    def resolve(self, **cli_overrides: Any) -> dict[str, Any]:
        """Return every setting, applying priority CLI argument > config file > DEFAULTS.

        CLI arguments that are explicitly provided (not None) are persisted to config.
        The target is left alone; apply_all() is what hydrates it.
        """
        resolved = {}
        for pref, default in self.DEFAULTS.items():
            cli_value = cli_overrides.get(pref)
            if cli_value is not None:
                self._persist(pref, cli_value)
                resolved[pref] = cli_value
            else:
                resolved[pref] = self.get(pref, default)
        return resolved

    def apply_all(self, **cli_overrides: Any) -> dict[str, Any]:
        """Hydrate the target object with all settings it has an attribute for.

        Returns the resolved settings so callers can use the ones the target doesn't hold.
        """
        resolved = self.resolve(**cli_overrides)
        if self._target is not None:
            for pref, value in resolved.items():
                if hasattr(self._target, pref):
                    setattr(self._target, pref, value)
        return resolved

    def reset_all(self) -> tuple[bool, str]:
        """Clear config file and reset target to defaults.

        Returns (success, message) tuple.
        """
        success, message = self.clear()
        if success and self._target is not None:
            for pref, default in self.DEFAULTS.items():
                if hasattr(self._target, pref):
                    setattr(self._target, pref, default)
        return success, message
