"""Configuration management module.

Handles loading, saving, and accessing the relais configuration.
Config is stored at ~/.config/relais/config.toml

Usage:
    from relais.config import load_config, get_spreadsheet_id

    config = load_config()
    spreadsheet_id = get_spreadsheet_id(config)
"""

import os
import tomllib

import tomli_w

from relais.errors import ConfigError

from .paths import CONFIG_FILE, ensure_config_dir
from .schema import GoogleConfig, RelaisConfig
from .template import CONFIG_TEMPLATE

__all__ = [
    "load_config",
    "save_config",
    "init_config",
    "get_spreadsheet_id",
    "get_default_folder_path",
    "get_max_threads",
    "get_client_secret",
    "set_config_value",
    "CONFIG_FILE",
    "CLIENT_SECRET_ENV",
]

# Environment variable for the OAuth client secret.
# Takes precedence over the value in config.toml.
CLIENT_SECRET_ENV = "RELAIS_GOOGLE_CLIENT_SECRET"

DEFAULT_FOLDER_PATH = "/"
DEFAULT_MAX_THREADS = 500

# Module-level cache for loaded config.
# Avoids repeated disk reads during a single CLI invocation.
_cached_config: RelaisConfig | None = None


def load_config(*, force_reload: bool = False) -> RelaisConfig:
    """Load configuration from disk.

    Returns empty dict if config file doesn't exist.
    Uses module-level caching to avoid repeated disk reads.

    Args:
        force_reload: Bypass cache and read from disk (useful after saving).

    Returns:
        The configuration dictionary.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    if not CONFIG_FILE.exists():
        _cached_config = {}
        return _cached_config

    with open(CONFIG_FILE, "rb") as f:
        _cached_config = tomllib.load(f)

    return _cached_config


def save_config(config: RelaisConfig) -> None:
    """Save configuration to disk.

    Creates config directory if needed. Updates the module cache.
    """
    global _cached_config

    ensure_config_dir()

    with open(CONFIG_FILE, "wb") as f:
        tomli_w.dump(config, f)

    _cached_config = config


def init_config(*, overwrite: bool = False) -> bool:
    """Initialize config directory and create template config file.

    Args:
        overwrite: If True, overwrite existing config file.

    Returns:
        True if config was created, False if it already existed.
    """
    ensure_config_dir()

    if CONFIG_FILE.exists() and not overwrite:
        return False

    CONFIG_FILE.write_text(CONFIG_TEMPLATE)
    return True


def get_spreadsheet_id(config: RelaisConfig) -> str:
    """Get the ledger spreadsheet ID.

    Raises:
        ConfigError: If no spreadsheet is configured.
    """
    spreadsheet_id = config.get("spreadsheet", {}).get("id")
    if not spreadsheet_id:
        raise ConfigError(
            "No spreadsheet configured. Set it with: "
            "relais config set spreadsheet.id <SPREADSHEET_ID>"
        )
    return spreadsheet_id


def get_default_folder_path(config: RelaisConfig) -> str:
    """Get the fallback Drive folder path (root when unset)."""
    value = config.get("defaults", {}).get("folder_path", "")
    return value.strip() or DEFAULT_FOLDER_PATH


def get_max_threads(config: RelaisConfig) -> int:
    """Get the maximum number of threads fetched per search."""
    return config.get("defaults", {}).get("max_threads", DEFAULT_MAX_THREADS)


def get_client_secret(google: GoogleConfig) -> str | None:
    """Get client secret from environment variable or config.

    Environment variable takes precedence over the config file.
    """
    return os.environ.get(CLIENT_SECRET_ENV) or google.get("client_secret")


def set_config_value(key: str, value: str) -> None:
    """Set a configuration value using dot notation.

    Examples:
        set_config_value("spreadsheet.id", "1AbC...")
        set_config_value("defaults.max_threads", "200")

    Raises:
        ValueError: If value cannot be converted to expected type.
    """
    config = load_config(force_reload=True)

    parts = key.split(".")

    # Navigate to parent dict, creating intermediate dicts as needed
    current: dict = config
    for part in parts[:-1]:
        if part not in current:
            current[part] = {}
        current = current[part]

    final_key = parts[-1]
    current[final_key] = _convert_value(final_key, value)

    save_config(config)


def _convert_value(key: str, value: str) -> str | int:
    """Convert string value to appropriate type based on field name.

    Known integer fields are converted to int, everything else stays str.
    """
    int_fields = {"max_threads"}

    if key in int_fields:
        return int(value)

    return value
