"""The Google Sheets spreadsheet used as review ledger."""

from .criteria_sheet import CriteriaSheet
from .folder_sheet import FolderListSheet
from .layout import LedgerLayout
from .models import LedgerRow, ProcessingResult, ResultKind, RowUpdate
from .sheets import SheetsClient
from .store import ResultLedger

__all__ = [
    "CriteriaSheet",
    "FolderListSheet",
    "LedgerLayout",
    "LedgerRow",
    "ProcessingResult",
    "ResultKind",
    "ResultLedger",
    "RowUpdate",
    "SheetsClient",
]
