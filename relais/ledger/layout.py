"""Sheet names and column layout of the ledger spreadsheet.

Built once from the [ledger] section of config.toml and passed to every
sheet component.
"""

from dataclasses import dataclass, fields

from relais.config.schema import RelaisConfig
from relais.errors import ConfigError

from .sheets import column_letter

# Field order of a results row; the column letter follows from the position.
RESULT_FIELDS = (
    "selected",
    "title",
    "received_at",
    "attachment_name",
    "save_name",
    "save_folder",
    "result",
    "file_link",
)

RESULT_HEADERS = (
    "Save",
    "Email subject",
    "Received at",
    "Attachment name",
    "Save as",
    "Save folder",
    "Result",
    "File link",
)


@dataclass(frozen=True)
class LedgerLayout:
    criteria_sheet: str = "Search"
    results_sheet: str = "Results"
    folders_sheet: str = "Folders"

    @classmethod
    def from_config(cls, config: RelaisConfig) -> "LedgerLayout":
        """Build the layout from the [ledger] config section.

        Raises:
            ConfigError: On unknown keys or blank sheet names.
        """
        section = config.get("ledger", {})
        known = {f.name for f in fields(cls)}

        unknown = sorted(set(section) - known)
        if unknown:
            raise ConfigError(f"Unknown [ledger] setting(s): {', '.join(unknown)}")

        for key, value in section.items():
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"[ledger] {key} must be a non-empty string")

        return cls(**{key: value.strip() for key, value in section.items()})

    @property
    def result_headers(self) -> list[str]:
        return list(RESULT_HEADERS)

    @staticmethod
    def column_index(field_name: str) -> int:
        return RESULT_FIELDS.index(field_name)

    @property
    def last_column(self) -> str:
        return column_letter(len(RESULT_FIELDS) - 1)
