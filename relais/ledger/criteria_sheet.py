"""The search criteria sheet: a two-column key/value form."""

from datetime import date

from relais.criteria import (
    SearchCriteria,
    normalize_folder_path,
    parse_date,
    parse_keywords,
)

from .layout import LedgerLayout
from .sheets import SheetsClient, a1_range

HEADERS = ["Setting", "Value"]

START_DATE_KEY = "Start date"
END_DATE_KEY = "End date"
KEYWORDS_KEY = "Keywords"
FOLDER_PATH_KEY = "Folder path"


def default_rows(today: date, folder_path: str = "/") -> list[list[str]]:
    """Initial form: this month so far, no keywords."""
    first_of_month = today.replace(day=1)
    return [
        [START_DATE_KEY, first_of_month.isoformat()],
        [END_DATE_KEY, today.isoformat()],
        [KEYWORDS_KEY, ""],
        [FOLDER_PATH_KEY, folder_path],
    ]


def _parse_date_cell(value: object) -> date | None:
    if isinstance(value, str) and not value.strip():
        return None
    return parse_date(value)


class CriteriaSheet:
    def __init__(self, sheets: SheetsClient, layout: LedgerLayout):
        self._sheets = sheets
        self._layout = layout

    @property
    def sheet_name(self) -> str:
        return self._layout.criteria_sheet

    def initialize(self, today: date | None = None, folder_path: str = "/") -> bool:
        """Create the sheet with default values if missing.

        Returns:
            True if the sheet was created.
        """
        _, created = self._sheets.ensure_sheet(self.sheet_name, HEADERS, index=0)
        if created:
            rows = default_rows(today or date.today(), folder_path)
            self._sheets.update_values(
                a1_range(self.sheet_name, f"A2:B{len(rows) + 1}"), rows
            )
        return created

    def _read_pairs(self) -> list[tuple[int, str, object]]:
        # Date cells come back as serial numbers, independent of their format
        values = self._sheets.get_values(
            a1_range(self.sheet_name, "A2:B"), date_time_render="SERIAL_NUMBER"
        )
        pairs = []
        for row_number, cells in enumerate(values, start=2):
            key = str(cells[0]).strip() if cells else ""
            value = cells[1] if len(cells) > 1 and cells[1] is not None else ""
            pairs.append((row_number, key, value))
        return pairs

    def read(self) -> SearchCriteria:
        """Read criteria from the sheet, creating it if needed.

        Unknown keys are ignored. The result is not validated.

        Raises:
            InvalidInputError: If a date cell cannot be parsed.
        """
        self.initialize()

        start_date = None
        end_date = None
        keywords: list[str] = []
        folder_path = normalize_folder_path(None)

        for _, key, value in self._read_pairs():
            if key == START_DATE_KEY:
                start_date = _parse_date_cell(value)
            elif key == END_DATE_KEY:
                end_date = _parse_date_cell(value)
            elif key == KEYWORDS_KEY:
                keywords = parse_keywords(str(value))
            elif key == FOLDER_PATH_KEY:
                folder_path = normalize_folder_path(str(value))

        return SearchCriteria(
            start_date=start_date,
            end_date=end_date,
            keywords=keywords,
            folder_path=folder_path,
        )

    def set_folder_path(self, path: str) -> None:
        """Write the Folder path value, adding the row if it is missing."""
        self.initialize()
        pairs = self._read_pairs()

        for row_number, key, _ in pairs:
            if key == FOLDER_PATH_KEY:
                self._sheets.update_values(
                    a1_range(self.sheet_name, f"B{row_number}"), [[path]]
                )
                return

        row_number = len(pairs) + 2
        self._sheets.update_values(
            a1_range(self.sheet_name, f"A{row_number}:B{row_number}"),
            [[FOLDER_PATH_KEY, path]],
        )
