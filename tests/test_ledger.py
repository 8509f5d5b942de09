"""Tests for the results sheet and ledger row models."""

import pytest

from relais.errors import ConfigError, InvalidInputError
from relais.ledger.layout import RESULT_HEADERS, LedgerLayout
from relais.ledger.models import LedgerRow, ProcessingResult, ResultKind, RowUpdate
from relais.ledger.store import ResultLedger


def candidate(title: str, name: str = "a.pdf", **kwargs) -> LedgerRow:
    return LedgerRow(
        title=title,
        received_at="2024-01-15 09:30:00",
        attachment_name=name,
        save_folder="/",
        **kwargs,
    )


class TestProcessingResult:
    """Tests for ProcessingResult rendering and parsing."""

    @pytest.mark.parametrize(
        "result,text",
        [
            (ProcessingResult(), ""),
            (ProcessingResult.ok(), "OK"),
            (ProcessingResult.skip("File already exists: a.pdf"), "SKIP: File already exists: a.pdf"),
            (ProcessingResult.error("Message not found: x"), "ERROR: Message not found: x"),
        ],
    )
    def test_render_and_parse(self, result, text):
        assert result.render() == text
        assert ProcessingResult.parse(text) == result

    def test_blank_and_none_are_empty(self):
        assert ProcessingResult.parse("   ").is_empty
        assert ProcessingResult.parse(None).is_empty

    def test_free_text_counts_as_handled(self):
        """Anything typed by hand marks the row as processed."""
        result = ProcessingResult.parse("done manually")

        assert result.kind is ResultKind.ERROR
        assert not result.is_empty


class TestLedgerRow:
    def test_from_cells_pads_short_rows(self):
        row = LedgerRow.from_cells(3, [True, "Subject"])

        assert row.row_key == 3
        assert row.selected is True
        assert row.title == "Subject"
        assert row.result.is_empty
        assert row.file_link == ""

    @pytest.mark.parametrize("cell,expected", [(True, True), ("TRUE", True), (False, False), ("", False)])
    def test_selected_cell(self, cell, expected):
        assert LedgerRow.from_cells(2, [cell]).selected is expected

    def test_row_update_only_touches_given_fields(self):
        row = candidate("Invoice", save_name="keep.pdf")

        updated = RowUpdate(row_key=2, result=ProcessingResult.ok()).apply(row)

        assert updated.save_name == "keep.pdf"
        assert updated.result == ProcessingResult.ok()

    def test_row_update_fields(self):
        update = RowUpdate(row_key=2, result=ProcessingResult.ok(), save_folder="/")

        assert update.fields == ("result", "save_folder")
        assert RowUpdate(row_key=2).fields == ()


class TestLedgerLayout:
    def test_defaults(self):
        layout = LedgerLayout.from_config({})

        assert layout == LedgerLayout("Search", "Results", "Folders")
        assert layout.last_column == "H"

    def test_overrides(self):
        layout = LedgerLayout.from_config({"ledger": {"results_sheet": " Found "}})

        assert layout.results_sheet == "Found"

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError, match="result_sheet"):
            LedgerLayout.from_config({"ledger": {"result_sheet": "x"}})

    def test_blank_name_rejected(self):
        with pytest.raises(ConfigError):
            LedgerLayout.from_config({"ledger": {"folders_sheet": ""}})


class TestResultLedger:
    """Tests for ResultLedger against an in-memory spreadsheet."""

    @pytest.fixture
    def ledger(self, fake_sheets) -> ResultLedger:
        return ResultLedger(fake_sheets, LedgerLayout())

    def test_initialize_creates_header(self, ledger, fake_sheets):
        assert ledger.initialize() is True
        assert fake_sheets.rows("Results") == [list(RESULT_HEADERS)]
        assert ledger.initialize() is False

    def test_append_preserves_order_and_selects(self, ledger, fake_sheets):
        stored = ledger.append(
            [candidate("First", selected=False), candidate("Second"), candidate("Third")]
        )

        assert [row.row_key for row in stored] == [2, 3, 4]
        rows = ledger.read_rows()
        assert [row.title for row in rows] == ["First", "Second", "Third"]
        assert all(row.selected for row in rows)
        sheet_id = fake_sheets.get_sheet_ids()["Results"]
        assert fake_sheets.checkboxes == [(sheet_id, 1, 4, 0)]

    def test_append_after_existing_rows(self, ledger):
        ledger.append([candidate("First")])

        stored = ledger.append([candidate("Second")])

        assert stored[0].row_key == 3

    def test_append_nothing(self, ledger, fake_sheets):
        assert ledger.append([]) == []
        assert fake_sheets.checkboxes == []

    def test_clear_keeps_header(self, ledger, fake_sheets):
        ledger.append([candidate("First"), candidate("Second")])

        removed = ledger.clear()

        assert removed == 2
        assert fake_sheets.rows("Results") == [list(RESULT_HEADERS)]

    def test_clear_empty_ledger(self, ledger):
        assert ledger.clear() == 0

    def test_list_selected(self, ledger, fake_sheets):
        ledger.append([candidate("First"), candidate("Second"), candidate("Third")])
        fake_sheets.update_values("'Results'!A3", [[False]])

        selected = ledger.list_selected()

        assert [(row.row_key, row.title) for row in selected] == [(2, "First"), (4, "Third")]

    def test_apply_updates_single_batch(self, ledger, fake_sheets):
        """All updates go out in one write and untouched rows stay as they were."""
        ledger.append([candidate("First"), candidate("Second"), candidate("Third")])
        before_second = list(fake_sheets.rows("Results")[2])

        written = ledger.apply_updates(
            [
                RowUpdate(
                    row_key=2,
                    result=ProcessingResult.ok(),
                    file_link="https://drive.google.com/file/d/f1/view",
                    save_name="a.pdf",
                ),
                RowUpdate(row_key=4, result=ProcessingResult.error("boom")),
            ]
        )

        assert written == 2
        assert len(fake_sheets.batch_writes) == 1
        assert [r for r, _ in fake_sheets.batch_writes[0]] == [
            "'Results'!E2",
            "'Results'!G2:H2",
            "'Results'!G4",
        ]
        rows = {row.row_key: row for row in ledger.read_rows()}
        assert rows[2].result == ProcessingResult.ok()
        assert rows[2].file_link.endswith("/f1/view")
        assert rows[4].result.render() == "ERROR: boom"
        assert fake_sheets.rows("Results")[2] == before_second

    def test_apply_updates_leaves_unset_cells_alone(self, ledger, fake_sheets):
        """A typed value in Save as keeps its type when only Result changes."""
        ledger.append([candidate("First")])
        fake_sheets.update_values("'Results'!E2", [[2024]])

        ledger.apply_updates([RowUpdate(row_key=2, result=ProcessingResult.skip("dup"))])

        assert fake_sheets.batch_writes[-1] == [("'Results'!G2", [["SKIP: dup"]])]
        assert fake_sheets.rows("Results")[1][4] == 2024

    def test_apply_updates_merges_same_row(self, ledger):

        ledger.append([candidate("First")])

        ledger.apply_updates(
            [
                RowUpdate(row_key=2, save_name="x.pdf"),
                RowUpdate(row_key=2, result=ProcessingResult.ok()),
            ]
        )

        row = ledger.read_rows()[0]
        assert row.save_name == "x.pdf"
        assert row.result == ProcessingResult.ok()

    def test_unknown_row_aborts_before_writing(self, ledger, fake_sheets):
        ledger.append([candidate("First")])

        with pytest.raises(InvalidInputError, match="Row 9"):
            ledger.apply_updates(
                [
                    RowUpdate(row_key=2, result=ProcessingResult.ok()),
                    RowUpdate(row_key=9, result=ProcessingResult.ok()),
                ]
            )

        assert fake_sheets.batch_writes == []
        assert ledger.read_rows()[0].result.is_empty

    def test_apply_no_updates(self, ledger, fake_sheets):
        assert ledger.apply_updates([]) == 0
        assert fake_sheets.batch_writes == []
