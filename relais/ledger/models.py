"""Data models for ledger rows and their processing state."""

from dataclasses import dataclass, replace
from enum import Enum

from .layout import RESULT_FIELDS


class ResultKind(str, Enum):
    """Processing state of a ledger row."""

    EMPTY = ""
    OK = "OK"
    SKIP = "SKIP"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ProcessingResult:
    """The Result cell of a ledger row.

    Rendered as "", "OK", "SKIP: <message>" or "ERROR: <message>".
    Any other non-empty text typed by hand counts as ERROR so that the row
    is still treated as handled.
    """

    kind: ResultKind = ResultKind.EMPTY
    message: str = ""

    @classmethod
    def ok(cls) -> "ProcessingResult":
        return cls(ResultKind.OK)

    @classmethod
    def skip(cls, message: str) -> "ProcessingResult":
        return cls(ResultKind.SKIP, message)

    @classmethod
    def error(cls, message: str) -> "ProcessingResult":
        return cls(ResultKind.ERROR, message)

    @classmethod
    def parse(cls, text: object) -> "ProcessingResult":
        value = "" if text is None else str(text).strip()
        if not value:
            return cls()

        for kind in (ResultKind.OK, ResultKind.SKIP, ResultKind.ERROR):
            if value == kind.value:
                return cls(kind)
            prefix = f"{kind.value}:"
            if value.startswith(prefix):
                return cls(kind, value[len(prefix):].strip())

        return cls(ResultKind.ERROR, value)

    @property
    def is_empty(self) -> bool:
        return self.kind is ResultKind.EMPTY

    def render(self) -> str:
        if self.kind is ResultKind.EMPTY:
            return ""
        if self.message:
            return f"{self.kind.value}: {self.message}"
        return self.kind.value


def _cell_text(value: object) -> str:
    return "" if value is None else str(value)


def _cell_checked(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().upper() == "TRUE"


@dataclass(frozen=True)
class LedgerRow:
    """One attachment candidate in the results sheet.

    row_key is the 1-based sheet row (the header is row 1); 0 means the
    row has not been written yet.
    """

    title: str = ""
    received_at: str = ""
    attachment_name: str = ""
    save_name: str = ""
    save_folder: str = ""
    result: ProcessingResult = ProcessingResult()
    file_link: str = ""
    selected: bool = True
    row_key: int = 0

    @classmethod
    def from_cells(cls, row_key: int, cells: list) -> "LedgerRow":
        padded = list(cells) + [""] * (len(RESULT_FIELDS) - len(cells))
        values = dict(zip(RESULT_FIELDS, padded))
        return cls(
            row_key=row_key,
            selected=_cell_checked(values["selected"]),
            title=_cell_text(values["title"]),
            received_at=_cell_text(values["received_at"]),
            attachment_name=_cell_text(values["attachment_name"]),
            save_name=_cell_text(values["save_name"]),
            save_folder=_cell_text(values["save_folder"]),
            result=ProcessingResult.parse(values["result"]),
            file_link=_cell_text(values["file_link"]),
        )

    def to_cells(self) -> list:
        values = {
            "selected": self.selected,
            "title": self.title,
            "received_at": self.received_at,
            "attachment_name": self.attachment_name,
            "save_name": self.save_name,
            "save_folder": self.save_folder,
            "result": self.result.render(),
            "file_link": self.file_link,
        }
        return [values[name] for name in RESULT_FIELDS]


@dataclass(frozen=True)
class RowUpdate:
    """Partial update for one ledger row. None leaves a field unchanged."""

    row_key: int
    result: ProcessingResult | None = None
    file_link: str | None = None
    save_name: str | None = None
    save_folder: str | None = None

    @property
    def fields(self) -> tuple[str, ...]:
        """Names of the fields this update sets."""
        return tuple(
            name
            for name in ("result", "file_link", "save_name", "save_folder")
            if getattr(self, name) is not None
        )

    def apply(self, row: LedgerRow) -> LedgerRow:
        return replace(row, **{name: getattr(self, name) for name in self.fields})
