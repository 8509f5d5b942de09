"""Configuration schema definitions.

Uses TypedDict for type safety without runtime overhead.
These types match the structure of config.toml.
"""

from typing import TypedDict


class GoogleConfig(TypedDict, total=False):
    """Google Cloud OAuth client settings.

    Attributes:
        client_id: OAuth client ID from Google Cloud Console.
        client_secret: Optional client secret (prefer env var).
    """

    client_id: str
    client_secret: str


class SpreadsheetConfig(TypedDict, total=False):
    """The spreadsheet used as the review ledger.

    Attributes:
        id: Spreadsheet ID (the long token in the sheet URL).
    """

    id: str


class DefaultsConfig(TypedDict, total=False):
    """Default settings applied to all operations.

    Attributes:
        folder_path: Drive folder path used when the sheet leaves it blank.
        max_threads: Maximum number of Gmail threads fetched per search.
    """

    folder_path: str
    max_threads: int


class LedgerConfig(TypedDict, total=False):
    """Sheet names inside the ledger spreadsheet."""

    criteria_sheet: str
    results_sheet: str
    folders_sheet: str


class RelaisConfig(TypedDict, total=False):
    """Root configuration structure."""

    google: GoogleConfig
    spreadsheet: SpreadsheetConfig
    defaults: DefaultsConfig
    ledger: LedgerConfig
