"""Google authentication via OAuth 2.0 Installed Application Flow.

One set of credentials covers all three APIs relais talks to (Gmail,
Drive and Sheets). The user's browser opens to Google's consent page and
the authorization code is captured via a local HTTP server redirect.

Tokens are persisted to ~/.config/relais/credentials/google_token.json
"""

import json
import logging

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from relais.config.paths import GOOGLE_TOKEN_FILE, ensure_credentials_dir

logger = logging.getLogger(__name__)

# - gmail.readonly: search threads and download attachments
# - drive: look up and create folders/files anywhere in My Drive
# - spreadsheets: read and write the review ledger
SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/spreadsheets",
]

REDIRECT_URI = "http://localhost:8080"


def _load_token() -> Credentials | None:
    """Load credentials from disk.

    Returns None if the token file doesn't exist or is invalid.
    """
    if not GOOGLE_TOKEN_FILE.exists():
        return None

    try:
        return Credentials.from_authorized_user_file(str(GOOGLE_TOKEN_FILE), SCOPES)
    except ValueError as e:
        # Invalid token file - will re-authenticate
        logger.debug("Ignoring unreadable token file: %s", e)
        return None


def _save_token(creds: Credentials) -> None:
    """Persist credentials to disk with 600 permissions."""
    ensure_credentials_dir()

    token_data = {
        "token": creds.token,
        "refresh_token": creds.refresh_token,
        "token_uri": creds.token_uri,
        "client_id": creds.client_id,
        "client_secret": creds.client_secret,
        "scopes": creds.scopes,
    }

    GOOGLE_TOKEN_FILE.write_text(json.dumps(token_data, indent=2))
    GOOGLE_TOKEN_FILE.chmod(0o600)


def _build_client_config(client_id: str, client_secret: str) -> dict:
    """Build OAuth client configuration dict.

    InstalledAppFlow expects the JSON structure that normally comes from
    downloading credentials from Cloud Console. We construct it from our
    config values.
    """
    return {
        "installed": {
            "client_id": client_id,
            "client_secret": client_secret,
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": [REDIRECT_URI],
        }
    }


def authenticate_loopback_flow(client_id: str, client_secret: str) -> dict:
    """Perform OAuth 2.0 loopback flow authentication.

    If valid cached tokens exist (or can be refreshed), returns them
    without prompting.

    Returns:
        Authentication result dict containing:
        - On success: 'access_token', 'refresh_token'
        - On failure: 'error' and 'error_description'
    """
    creds = get_credentials()
    if creds is not None:
        return {"access_token": creds.token, "refresh_token": creds.refresh_token}

    try:
        flow = InstalledAppFlow.from_client_config(
            _build_client_config(client_id, client_secret),
            scopes=SCOPES,
            redirect_uri=REDIRECT_URI,
        )

        # Opens the user's browser automatically
        creds = flow.run_local_server(
            port=8080,
            success_message="Authentication successful! You can close this window.",
        )

        _save_token(creds)

        return {"access_token": creds.token, "refresh_token": creds.refresh_token}

    except Exception as e:
        return {
            "error": "oauth_flow_failed",
            "error_description": f"OAuth 2.0 flow failed: {str(e)}",
        }


def get_credentials() -> Credentials | None:
    """Get cached credentials for API access.

    Automatically refreshes expired tokens if a refresh token is
    available. Does not prompt for login.

    Returns:
        Credentials object, or None if not authenticated or refresh failed.
    """
    creds = _load_token()
    if not creds:
        return None

    if creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
            _save_token(creds)
        except Exception as e:
            logger.warning("Token refresh failed: %s", e)
            return None

    return creds if creds.valid else None
