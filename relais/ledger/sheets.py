"""Google Sheets API client.

Thin wrapper around the Sheets v4 values and batchUpdate endpoints for a
single spreadsheet. All writes use valueInputOption=RAW so strings are
stored exactly as given.
"""

import logging

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from relais.errors import host_call

logger = logging.getLogger(__name__)


def column_letter(index: int) -> str:
    """Convert a 0-based column index to its A1 letter(s)."""
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def a1_range(sheet: str, cells: str) -> str:
    """Qualify an A1 cell range with a quoted sheet name."""
    quoted = sheet.replace("'", "''")
    return f"'{quoted}'!{cells}"


class SheetsClient:
    """Client for one spreadsheet.

    Example:
        creds = get_credentials()
        sheets = SheetsClient(creds, "1AbC...")
        rows = sheets.get_values(a1_range("Results", "A2:H"))
    """

    def __init__(self, credentials: Credentials, spreadsheet_id: str):
        self._credentials = credentials
        self._spreadsheet_id = spreadsheet_id
        self._service = build("sheets", "v4", credentials=credentials)

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheet_id

    @host_call
    def _batch_update(self, requests: list[dict]) -> dict:
        return (
            self._service.spreadsheets()
            .batchUpdate(
                spreadsheetId=self._spreadsheet_id,
                body={"requests": requests},
            )
            .execute()
        )

    @host_call
    def get_sheet_ids(self) -> dict[str, int]:
        """Map sheet titles to their numeric sheet IDs."""
        result = (
            self._service.spreadsheets()
            .get(
                spreadsheetId=self._spreadsheet_id,
                fields="sheets.properties(sheetId,title)",
            )
            .execute()
        )
        return {
            sheet["properties"]["title"]: sheet["properties"]["sheetId"]
            for sheet in result.get("sheets", [])
        }

    def add_sheet(self, title: str, index: int | None = None) -> int:
        """Add a sheet and return its sheet ID."""
        properties: dict = {"title": title}
        if index is not None:
            properties["index"] = index

        result = self._batch_update([{"addSheet": {"properties": properties}}])
        sheet_id = result["replies"][0]["addSheet"]["properties"]["sheetId"]
        logger.debug("Added sheet %s (%s)", title, sheet_id)
        return sheet_id

    def ensure_sheet(
        self,
        title: str,
        headers: list[str],
        index: int | None = None,
    ) -> tuple[int, bool]:
        """Return the sheet ID for title, creating it with a header row.

        Returns:
            (sheet_id, created) tuple.
        """
        sheet_ids = self.get_sheet_ids()
        if title in sheet_ids:
            return sheet_ids[title], False

        sheet_id = self.add_sheet(title, index)
        end = column_letter(len(headers) - 1)
        self.update_values(a1_range(title, f"A1:{end}1"), [headers])
        return sheet_id, True

    @host_call
    def get_values(
        self,
        range_: str,
        render: str = "UNFORMATTED_VALUE",
        date_time_render: str = "SERIAL_NUMBER",
    ) -> list[list]:
        """Read a range. Trailing empty rows and cells are omitted by the API.

        date_time_render only applies to unformatted reads.
        """
        result = (
            self._service.spreadsheets()
            .values()
            .get(
                spreadsheetId=self._spreadsheet_id,
                range=range_,
                valueRenderOption=render,
                dateTimeRenderOption=date_time_render,
            )
            .execute()
        )
        return result.get("values", [])

    @host_call
    def update_values(self, range_: str, values: list[list]) -> None:
        """Write a block of values starting at range_."""
        (
            self._service.spreadsheets()
            .values()
            .update(
                spreadsheetId=self._spreadsheet_id,
                range=range_,
                valueInputOption="RAW",
                body={"values": values},
            )
            .execute()
        )

    @host_call
    def batch_update_values(self, data: list[tuple[str, list[list]]]) -> None:
        """Write several ranges in one request."""
        if not data:
            return

        (
            self._service.spreadsheets()
            .values()
            .batchUpdate(
                spreadsheetId=self._spreadsheet_id,
                body={
                    "valueInputOption": "RAW",
                    "data": [
                        {"range": range_, "values": values} for range_, values in data
                    ],
                },
            )
            .execute()
        )

    def delete_rows(self, sheet_id: int, start_index: int, end_index: int) -> None:
        """Delete rows [start_index, end_index) (0-based)."""
        self._batch_update(
            [
                {
                    "deleteDimension": {
                        "range": {
                            "sheetId": sheet_id,
                            "dimension": "ROWS",
                            "startIndex": start_index,
                            "endIndex": end_index,
                        }
                    }
                }
            ]
        )

    def set_checkboxes(
        self,
        sheet_id: int,
        start_row: int,
        end_row: int,
        column: int,
    ) -> None:
        """Turn cells in rows [start_row, end_row) of a column into checkboxes."""
        self._batch_update(
            [
                {
                    "setDataValidation": {
                        "range": {
                            "sheetId": sheet_id,
                            "startRowIndex": start_row,
                            "endRowIndex": end_row,
                            "startColumnIndex": column,
                            "endColumnIndex": column + 1,
                        },
                        "rule": {
                            "condition": {"type": "BOOLEAN"},
                            "showCustomUi": True,
                        },
                    }
                }
            ]
        )
