"""Configuration management for Wage Levels.

Configuration lives in a single settings.json file:

- data_dir: directory holding generated artifacts (occupations.json, wages.json)
- tax_year: tax rules year to use for take-home calculations
- col_index: path to the cost-of-living index JSON file

Config directory resolution:
1. WAGE_LEVELS_CONFIG_PATH environment variable (if set)
2. ~/.config/wage-levels/ (XDG_CONFIG_HOME fallback)

Data paths follow XDG spec:
- Data: settings.json "data_dir", else XDG_DATA_HOME/wage-levels/ or ~/.local/share/wage-levels/
"""

import json
import os
from pathlib import Path
from typing import Any

APP_NAME = "wage-levels"
SETTINGS_FILENAME = "settings.json"

OCCUPATIONS_FILENAME = "occupations.json"
WAGES_FILENAME = "wages.json"
COL_INDEX_FILENAME = "cost_of_living.json"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. WAGE_LEVELS_CONFIG_PATH environment variable
    2. ~/.config/wage-levels/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("WAGE_LEVELS_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "data_dir", "tax_year")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


# =============================================================================
# Data paths
# =============================================================================

def get_data_path() -> Path:
    """Get the data directory path.

    Uses the settings.json "data_dir" key when set, otherwise
    XDG_DATA_HOME/wage-levels/.

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    custom = get_setting("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


def get_occupations_path() -> Path:
    """Path to the generated occupation catalog."""
    return get_data_path() / OCCUPATIONS_FILENAME


def get_wages_path() -> Path:
    """Path to the generated wage table."""
    return get_data_path() / WAGES_FILENAME


def get_col_index_path() -> Path:
    """Path to the cost-of-living index (settings "col_index" overrides)."""
    custom = get_setting("col_index")
    if custom:
        return Path(custom).expanduser()
    return get_data_path() / COL_INDEX_FILENAME
