"""Path constants and directory utilities for relais config.

Follows the XDG Base Directory specification:
- Config: ~/.config/relais/
- Credentials: ~/.config/relais/credentials/ (with restricted permissions)
"""

from pathlib import Path


CONFIG_DIR = Path.home() / ".config" / "relais"
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Credentials stored separately with restricted permissions
CREDENTIALS_DIR = CONFIG_DIR / "credentials"
GOOGLE_TOKEN_FILE = CREDENTIALS_DIR / "google_token.json"


def ensure_config_dir() -> Path:
    """Create config directory if it doesn't exist.

    Returns the config directory path.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR


def ensure_credentials_dir() -> Path:
    """Create credentials directory with restricted permissions.

    Sets directory permissions to 700 so only the owner can read
    the cached OAuth token.

    Returns the credentials directory path.
    """
    CREDENTIALS_DIR.mkdir(parents=True, exist_ok=True)
    CREDENTIALS_DIR.chmod(0o700)
    return CREDENTIALS_DIR
