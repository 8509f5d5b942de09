"""The folder list sheet used to pick a destination folder."""

from relais.drive.models import DriveFolder

from .layout import LedgerLayout
from .sheets import SheetsClient, a1_range

HEADERS = ["Select", "Folder name", "Path", "Folder ID", "Link"]


class FolderListSheet:
    def __init__(self, sheets: SheetsClient, layout: LedgerLayout):
        self._sheets = sheets
        self._layout = layout

    @property
    def sheet_name(self) -> str:
        return self._layout.folders_sheet

    def display(self, folders: list[DriveFolder]) -> None:
        """Replace the sheet contents with folders, all unticked."""
        sheet_id, _ = self._sheets.ensure_sheet(self.sheet_name, HEADERS)

        used = len(self._sheets.get_values(a1_range(self.sheet_name, "A:A")))
        if used > 1:
            self._sheets.delete_rows(sheet_id, 1, used)

        if not folders:
            return

        end = len(folders) + 1
        self._sheets.update_values(
            a1_range(self.sheet_name, f"A2:E{end}"),
            [
                [False, folder.name, folder.path, folder.id, folder.link]
                for folder in folders
            ],
        )
        self._sheets.set_checkboxes(sheet_id, 1, end, 0)

    def get_selected(self) -> DriveFolder | None:
        """The first ticked folder, or None."""
        sheet_ids = self._sheets.get_sheet_ids()
        if self.sheet_name not in sheet_ids:
            return None

        for cells in self._sheets.get_values(a1_range(self.sheet_name, "A2:D")):
            padded = list(cells) + [""] * (4 - len(cells))
            checked = padded[0] is True or str(padded[0]).upper() == "TRUE"
            if checked:
                return DriveFolder(
                    id=str(padded[3]), name=str(padded[1]), path=str(padded[2])
                )

        return None
