import json
import os
from typing import Any, Dict

from .utils import DEFAULT_POLL_INTERVAL, MACRO_DIRECTORY_OPTION

APP_DIR = os.path.join(os.path.expanduser("~"), ".tekla_macro_builder")
SETTINGS_PATH = os.path.join(APP_DIR, "settings.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    # Host advanced options; an empty value falls back to the environment
    "advanced_options": {
        MACRO_DIRECTORY_OPTION: "",
    },
    "poll_interval": DEFAULT_POLL_INTERVAL,  # seconds between "is a macro running" checks
    "wait_timeout": None,  # None=wait for the host indefinitely
    "emit_logs": True,
}


def ensure_app_dirs() -> None:
    """Ensure application directories exist."""
    os.makedirs(APP_DIR, exist_ok=True)


def _defaults() -> Dict[str, Any]:
    data = dict(DEFAULT_SETTINGS)
    data["advanced_options"] = dict(DEFAULT_SETTINGS["advanced_options"])
    return data


def load_settings() -> Dict[str, Any]:
    """
    Load user settings from disk, merging with defaults for any missing keys.

    Returns:
        Dictionary of all settings with defaults for any missing keys
    """
    ensure_app_dirs()
    if not os.path.exists(SETTINGS_PATH):
        save_settings(_defaults())
        return _defaults()
    try:
        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        print(f"Warning: Could not load settings: {e}, using defaults")
        return _defaults()
    # merge defaults for any new keys
    for k, v in _defaults().items():
        data.setdefault(k, v)
    if not isinstance(data.get("advanced_options"), dict):
        data["advanced_options"] = {}
    for k, v in DEFAULT_SETTINGS["advanced_options"].items():
        data["advanced_options"].setdefault(k, v)
    return data


def save_settings(s: Dict[str, Any]) -> None:
    """
    Save settings to disk.

    Args:
        s: Settings dictionary to persist
    """
    ensure_app_dirs()
    try:
        with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
            json.dump(s, f, indent=2)
    except IOError as e:
        print(f"Warning: Could not save settings: {e}")


class JsonSettingsLookup:
    """Host advanced options backed by the settings file and the environment."""

    def __init__(self, settings: Dict[str, Any]):
        self.settings = settings

    def get_advanced_option(self, key: str) -> str:
        value = self.settings.get("advanced_options", {}).get(key) or ""
        if not value:
            value = os.environ.get(key, "")
        return value
