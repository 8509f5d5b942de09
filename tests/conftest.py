"""Shared fixtures: in-memory stand-ins for the Drive and Sheets clients."""

import re

import pytest

_RANGE = re.compile(r"^'((?:[^']|'')*)'!([A-Z]+)(\d*)(?::([A-Z]+)(\d*))?$")


def _column_index(letters: str) -> int:
    index = 0
    for char in letters:
        index = index * 26 + (ord(char) - ord("A") + 1)
    return index - 1


class FakeDrive:
    """Folder tree and files kept in dicts. Mirrors DriveClient's methods."""

    ROOT = "root-id"

    def __init__(self):
        self.folders: dict[str, tuple[str, str]] = {}  # id -> (name, parent)
        self.files: dict[str, tuple[str, str, bytes]] = {}  # id -> (name, folder, data)
        self.created_folders: list[str] = []
        self._counter = 0

    def _new_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-{self._counter}"

    def get_root_id(self) -> str:
        return self.ROOT

    def find_folder(self, name, parent_id):
        for folder_id, (folder_name, parent) in self.folders.items():
            if folder_name == name and parent == parent_id:
                return folder_id
        return None

    def create_folder(self, name, parent_id):
        folder_id = self._new_id("folder")
        self.folders[folder_id] = (name, parent_id)
        self.created_folders.append(name)
        return folder_id

    def find_file(self, name, folder_id):
        for file_id, (file_name, parent, _) in self.files.items():
            if file_name == name and parent == folder_id:
                return file_id
        return None

    def create_file(self, name, folder_id, data, mime_type="application/pdf"):
        file_id = self._new_id("file")
        self.files[file_id] = (name, folder_id, data)
        return {"id": file_id, "name": name}

    def files_in(self, folder_id):
        return {name: data for name, parent, data in self.files.values() if parent == folder_id}


class FakeSheets:
    """Grid of cells per sheet title. Mirrors SheetsClient's methods."""

    def __init__(self):
        self.sheets: dict[str, dict] = {}
        self.checkboxes: list[tuple[int, int, int, int]] = []
        self.batch_writes: list[list[tuple[str, list[list]]]] = []
        self._next_id = 100

    def rows(self, title: str) -> list[list]:
        return self.sheets[title]["rows"]

    def get_sheet_ids(self):
        return {title: sheet["id"] for title, sheet in self.sheets.items()}

    def add_sheet(self, title, index=None):
        self._next_id += 1
        self.sheets[title] = {"id": self._next_id, "rows": []}
        return self._next_id

    def ensure_sheet(self, title, headers, index=None):
        if title in self.sheets:
            return self.sheets[title]["id"], False
        sheet_id = self.add_sheet(title, index)
        self.sheets[title]["rows"].append(list(headers))
        return sheet_id, True

    def _parse(self, range_):
        match = _RANGE.match(range_)
        assert match, f"bad range {range_}"
        title = match[1].replace("''", "'")
        c1 = _column_index(match[2])
        r1 = int(match[3]) - 1 if match[3] else 0
        if match[4] is None:
            c2, r2 = c1, (r1 if match[3] else None)
        else:
            c2 = _column_index(match[4])
            r2 = int(match[5]) - 1 if match[5] else None
        return title, r1, c1, r2, c2

    def get_values(self, range_, render="UNFORMATTED_VALUE", date_time_render="SERIAL_NUMBER"):
        title, r1, c1, r2, c2 = self._parse(range_)
        rows = self.sheets[title]["rows"]
        stop = None if r2 is None else r2 + 1

        result = []
        for row in rows[r1:stop]:
            cells = list(row[c1 : c2 + 1])
            while cells and cells[-1] in ("", None):
                cells.pop()
            result.append(cells)

        while result and not result[-1]:
            result.pop()
        return result

    def update_values(self, range_, values):
        title, r1, c1, _, _ = self._parse(range_)
        rows = self.sheets[title]["rows"]
        for offset, new_cells in enumerate(values):
            index = r1 + offset
            while len(rows) <= index:
                rows.append([])
            row = rows[index]
            while len(row) < c1 + len(new_cells):
                row.append("")
            row[c1 : c1 + len(new_cells)] = list(new_cells)

    def batch_update_values(self, data):
        self.batch_writes.append(list(data))
        for range_, values in data:
            self.update_values(range_, values)

    def delete_rows(self, sheet_id, start_index, end_index):
        for sheet in self.sheets.values():
            if sheet["id"] == sheet_id:
                del sheet["rows"][start_index:end_index]

    def set_checkboxes(self, sheet_id, start_row, end_row, column):
        self.checkboxes.append((sheet_id, start_row, end_row, column))


@pytest.fixture
def fake_drive() -> FakeDrive:
    return FakeDrive()


@pytest.fixture
def fake_sheets() -> FakeSheets:
    return FakeSheets()
