# src/docsignals/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional, Tuple

from docsignals.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

TRUE_STRINGS = ("1", "true", "yes", "on")
FALSE_STRINGS = ("0", "false", "no", "off")


class ConfigError(ValueError):
    """Raised when an override does not fit the setting it replaces."""


def coerce_value(current: Any, value: Any) -> Any:
    """
    Casts `value` to the type of the setting it replaces.
    Unknown settings (current is None) take the value as given.

    Raises:
        ConfigError: If the value cannot represent the existing type.
    """
    if current is None or not isinstance(value, str):
        return value

    if isinstance(current, bool):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
        raise ConfigError(f"expected a boolean, got '{value}'")

    if isinstance(current, (int, float, str)):
        try:
            return type(current)(value)
        except ValueError:
            raise ConfigError(f"expected {type(current).__name__}, got '{value}'")

    raise ConfigError(f"'{type(current).__name__}' settings cannot be overridden")


class ConfigManager:
    """
    Singleton holding the application settings.

    Values come from settings.json and can be overridden in memory for one run
    (`docsignals URL --set analysis.fetch_delay_ms=0`); `reset()` reloads the file.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """Looks up a dotted key such as 'analysis.default_fetch_count'."""
        node: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(node, dict):
                return default
            node = node.get(key)
        return default if node is None else node

    def _parent_of(self, key_path: str) -> Tuple[Optional[Dict[str, Any]], str]:
        *parents, leaf = key_path.split('.')
        node = self._config
        for key in parents:
            node = node.setdefault(key, {})
            if not isinstance(node, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, key)
                return None, leaf
        return node, leaf

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Overrides one setting in memory. The value is cast to the type of the
        existing setting; a value that does not fit is rejected.

        Returns:
            bool: True when the setting was updated.
        """
        section, leaf = self._parent_of(key_path)
        if section is None:
            return False

        try:
            value = coerce_value(section.get(leaf), value)
        except ConfigError as e:
            logger.error("Rejected value for '%s': %s", key_path, e)
            return False

        section[leaf] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def reset(self):
        """Reloads the configuration from settings.json, dropping all overrides."""
        config_path = PathUtils.get_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using empty config.", config_path)
            self._config = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.debug("Configuration has been (re)loaded from %s.", config_path)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
