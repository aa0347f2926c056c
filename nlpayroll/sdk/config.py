"""Configuration management for nl-payroll.

Configuration lives in one directory:

1. settings.json - Machine-specific settings
   - tax_rules_dir: directory holding YYYY.yaml tax rules (optional)
   - prorata_method: default pro-rata method for the CLI ("calendar"/"working")

2. tax-rules/ - Optional user-supplied tax rules, one YAML file per year.
   Files here override the rules bundled with the package.

Config directory resolution:
1. NL_PAYROLL_CONFIG_PATH environment variable (if set)
2. ~/.config/nl-payroll/ (XDG_CONFIG_HOME fallback)
"""

import json
import os
from pathlib import Path
from typing import Any, Optional


APP_NAME = "nl-payroll"
SETTINGS_FILENAME = "settings.json"
TAX_RULES_DIRNAME = "tax-rules"

KNOWN_SETTINGS = {
    "tax_rules_dir": "Directory holding YYYY.yaml tax rules (overrides bundled rules)",
    "prorata_method": "Default pro-rata method for 'calc': calendar or working",
}


class SettingsError(Exception):
    """Raised when settings.json cannot be read or a setting is invalid."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. NL_PAYROLL_CONFIG_PATH environment variable
    2. ~/.config/nl-payroll/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("NL_PAYROLL_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        SettingsError: If the file exists but is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        try:
            settings = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsError(f"Invalid JSON in {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise SettingsError(f"{settings_file} must contain a JSON object")
    return settings


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

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
    """Get a setting value from settings.json."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Raises:
        SettingsError: If the key is unknown or the value is invalid
    """
    if key not in KNOWN_SETTINGS:
        raise SettingsError(
            f"Unknown setting '{key}'. Known settings: {', '.join(sorted(KNOWN_SETTINGS))}"
        )
    if key == "prorata_method" and value not in ("calendar", "working"):
        raise SettingsError(f"prorata_method must be 'calendar' or 'working', got '{value}'")

    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_bundled_tax_rules_dir() -> Path:
    """Tax rules shipped with the package."""
    return Path(__file__).parent.parent / "tax_rules"


def get_user_tax_rules_dir() -> Path:
    """User tax rules directory.

    Resolution order:
    1. settings.json "tax_rules_dir"
    2. <config dir>/tax-rules/
    """
    custom = get_setting("tax_rules_dir")
    if custom:
        return Path(custom).expanduser()
    return get_config_dir() / TAX_RULES_DIRNAME


def get_tax_rules_dirs() -> list:
    """Tax rules directories in lookup order (user first, bundled last)."""
    return [get_user_tax_rules_dir(), get_bundled_tax_rules_dir()]


def get_default_prorata_method(default: Optional[str] = "calendar") -> Optional[str]:
    """Configured default pro-rata method for the CLI."""
    return get_setting("prorata_method", default)
