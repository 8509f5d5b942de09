"""Authentication module for Google APIs.

Usage:
    from relais.auth import authenticate, get_credentials

    # Perform OAuth flow (interactive)
    result = authenticate(config["google"])

    # Get cached credentials (non-interactive)
    creds = get_credentials()
"""

from relais.config import CLIENT_SECRET_ENV, get_client_secret
from relais.config.schema import GoogleConfig

from .google import authenticate_loopback_flow, get_credentials

__all__ = [
    "authenticate",
    "get_credentials",
    "is_authenticated",
]


def authenticate(google: GoogleConfig) -> dict:
    """Authenticate with Google using the OAuth 2.0 loopback flow.

    Args:
        google: The [google] section of config.toml.

    Returns:
        Authentication result dict:
        - On success: contains 'access_token'
        - On failure: contains 'error' and 'error_description'
    """
    client_id = google.get("client_id")

    if not client_id:
        return {
            "error": "missing_config",
            "error_description": "The [google] section must have 'client_id' configured.",
        }

    client_secret = get_client_secret(google)

    if not client_secret:
        return {
            "error": "missing_config",
            "error_description": f"Google client_secret not found. Set {CLIENT_SECRET_ENV} environment variable or add 'client_secret' to config.",
        }

    return authenticate_loopback_flow(client_id, client_secret)


def is_authenticated() -> bool:
    """Check if valid cached credentials exist."""
    return get_credentials() is not None
