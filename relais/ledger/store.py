"""The results sheet: one row per PDF attachment candidate.

The results sheet is the only record of what has been processed. A row
whose Result cell is non-empty has been handled and is never rewritten by
the copy flow.

Single writer: updates are read-then-batch-write with no locking, so two
concurrent runs against the same spreadsheet can lose updates.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from relais.errors import InvalidInputError

from .layout import LedgerLayout
from .models import LedgerRow, RowUpdate
from .sheets import SheetsClient, a1_range, column_letter

logger = logging.getLogger(__name__)

# Data starts on row 2; row 1 is the header.
FIRST_DATA_ROW = 2


class ResultLedger:
    """Batch access to the results sheet.

    Example:
        ledger = ResultLedger(sheets, LedgerLayout.from_config(config))
        ledger.clear()
        ledger.append([LedgerRow(title="Invoice", attachment_name="a.pdf")])
        for row in ledger.list_selected():
            ...
    """

    def __init__(self, sheets: SheetsClient, layout: LedgerLayout):
        self._sheets = sheets
        self._layout = layout
        self._sheet_id: int | None = None

    @property
    def sheet_name(self) -> str:
        return self._layout.results_sheet

    def initialize(self) -> bool:
        """Create the results sheet with its header row if missing.

        Returns:
            True if the sheet was created.
        """
        self._sheet_id, created = self._sheets.ensure_sheet(
            self.sheet_name, self._layout.result_headers, index=1
        )
        return created

    def _ensure_sheet_id(self) -> int:
        if self._sheet_id is None:
            self.initialize()
        return self._sheet_id

    def _row_count(self) -> int:
        """Number of used rows, header included."""
        return len(self._sheets.get_values(a1_range(self.sheet_name, "A:A")))

    def read_rows(self) -> list[LedgerRow]:
        """Read every data row, keyed by its sheet row number."""
        self._ensure_sheet_id()
        values = self._sheets.get_values(
            a1_range(self.sheet_name, f"A{FIRST_DATA_ROW}:{self._layout.last_column}")
        )
        return [
            LedgerRow.from_cells(row_key, cells)
            for row_key, cells in enumerate(values, start=FIRST_DATA_ROW)
        ]

    def append(self, rows: Iterable[LedgerRow]) -> list[LedgerRow]:
        """Append rows in one write, preserving order, all selected.

        Returns:
            The appended rows with their row keys assigned.
        """
        rows = list(rows)
        if not rows:
            return []

        sheet_id = self._ensure_sheet_id()
        start = max(self._row_count(), 1) + 1
        end = start + len(rows) - 1

        stored = [
            replace(row, selected=True, row_key=row_key)
            for row_key, row in enumerate(rows, start=start)
        ]

        self._sheets.update_values(
            a1_range(self.sheet_name, f"A{start}:{self._layout.last_column}{end}"),
            [row.to_cells() for row in stored],
        )
        self._sheets.set_checkboxes(
            sheet_id, start - 1, end, self._layout.column_index("selected")
        )

        logger.debug("Appended %d ledger row(s) at row %d", len(stored), start)
        return stored

    def clear(self) -> int:
        """Delete all data rows, keeping the header.

        Returns:
            Number of rows removed.
        """
        sheet_id = self._ensure_sheet_id()
        used = self._row_count()

        if used < FIRST_DATA_ROW:
            return 0

        self._sheets.delete_rows(sheet_id, FIRST_DATA_ROW - 1, used)
        return used - 1

    def list_selected(self) -> list[LedgerRow]:
        """Rows whose checkbox is ticked, in sheet order."""
        return [row for row in self.read_rows() if row.selected]

    def apply_updates(self, updates: Iterable[RowUpdate]) -> int:
        """Apply partial row updates in a single batch write.

        The updated rows are computed in memory first; an unknown row key
        aborts before anything is written. Several updates for the same
        row are merged in order. Only the cells an update sets are written,
        so other cells keep their original values and types.

        Returns:
            Number of rows written.

        Raises:
            InvalidInputError: If an update names a row outside the ledger.
        """
        updates = list(updates)
        if not updates:
            return 0

        current = {row.row_key: row for row in self.read_rows()}
        changed: dict[int, LedgerRow] = {}
        touched: dict[int, set[str]] = {}

        for update in updates:
            row = changed.get(update.row_key) or current.get(update.row_key)
            if row is None:
                raise InvalidInputError(
                    f"Row {update.row_key} is not in the {self.sheet_name} sheet"
                )
            changed[update.row_key] = update.apply(row)
            touched.setdefault(update.row_key, set()).update(update.fields)

        data = []
        for row_key, row in sorted(changed.items()):
            cells = row.to_cells()
            for first, last in _column_runs(touched[row_key]):
                cell_range = f"{column_letter(first)}{row_key}"
                if last > first:
                    cell_range += f":{column_letter(last)}{row_key}"
                data.append(
                    (a1_range(self.sheet_name, cell_range), [cells[first : last + 1]])
                )

        self._sheets.batch_update_values(data)

        written = len({row_key for row_key, fields in touched.items() if fields})
        logger.debug("Updated %d ledger row(s)", written)
        return written


def _column_runs(field_names: set[str]) -> list[tuple[int, int]]:
    """Group the columns of field_names into (first, last) runs of neighbours."""
    runs: list[tuple[int, int]] = []
    for index in sorted(LedgerLayout.column_index(name) for name in field_names):
        if runs and runs[-1][1] == index - 1:
            runs[-1] = (runs[-1][0], index)
        else:
            runs.append((index, index))
    return runs
