"""Shared setup for commands that talk to Google APIs."""

from dataclasses import dataclass

from google.oauth2.credentials import Credentials

from relais.auth import get_credentials
from relais.config import get_spreadsheet_id, load_config
from relais.config.schema import RelaisConfig
from relais.errors import ConfigError
from relais.ledger.layout import LedgerLayout
from relais.ledger.sheets import SheetsClient


@dataclass
class Session:
    """Loaded config, credentials and spreadsheet client for one command."""

    config: RelaisConfig
    layout: LedgerLayout
    credentials: Credentials
    sheets: SheetsClient


def open_session() -> Session:
    """Load config and cached credentials.

    Raises:
        ConfigError: If the config is incomplete or no valid token is cached.
    """
    config = load_config()
    layout = LedgerLayout.from_config(config)
    spreadsheet_id = get_spreadsheet_id(config)

    credentials = get_credentials()
    if credentials is None:
        raise ConfigError("Not authenticated. Run 'relais config auth' first.")

    return Session(
        config=config,
        layout=layout,
        credentials=credentials,
        sheets=SheetsClient(credentials, spreadsheet_id),
    )
