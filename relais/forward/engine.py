"""Forwarding engine.

Coordinates Gmail, Drive and the results sheet:

- search_and_list: find mail with PDF attachments and list one ledger row
  per attachment for the operator to review.
- review_and_copy: copy the ticked rows into Drive and record the outcome
  of each row back into the ledger in one batch.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from relais.criteria import SearchCriteria, format_datetime, validate_criteria
from relais.drive.copy import AlreadyExists, Created, Failed, copy_file
from relais.drive.client import DriveClient
from relais.drive.resolver import FolderResolver
from relais.errors import NotFoundError
from relais.ledger.models import LedgerRow, ProcessingResult, ResultKind, RowUpdate
from relais.ledger.store import ResultLedger
from relais.mail.extract import extract_email_data
from relais.mail.gmail import GmailClient
from relais.mail.query import build_search_query, build_subject_query

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    """Result of a search-and-list run."""

    threads: int = 0
    rows: int = 0


@dataclass
class CopyRunResult:
    """Result of a review-and-copy run.

    Tracks counts per outcome and a short description of each error.
    """

    copied: int = 0
    skipped: int = 0
    errors: int = 0
    already_processed: int = 0
    error_details: list[str] = field(default_factory=list)

    def add_error(self, row_key: int, error: str) -> None:
        self.errors += 1
        self.error_details.append(f"row {row_key}: {error}")


# Type for progress callback: (title, current, total) -> None
ProgressCallback = Callable[[str, int, int], None]


class ForwardEngine:
    """Engine for forwarding Gmail PDF attachments into Drive.

    Example:
        creds = get_credentials()
        engine = ForwardEngine(
            GmailClient(creds),
            DriveClient(creds),
            ResultLedger(SheetsClient(creds, spreadsheet_id), layout),
        )
        outcome = engine.search_and_list(criteria)
        result = engine.review_and_copy(criteria.folder_path)
    """

    def __init__(
        self,
        gmail_client: GmailClient,
        drive: DriveClient,
        ledger: ResultLedger,
        max_threads: int = 500,
    ):
        self._gmail = gmail_client
        self._drive = drive
        self._ledger = ledger
        self._resolver = FolderResolver(drive)
        self._max_threads = max_threads

    def search_and_list(self, criteria: SearchCriteria) -> SearchOutcome:
        """Replace the ledger contents with the current search results.

        Raises:
            InvalidInputError: If the criteria are incomplete.
            HostError: If a Google API call fails.
        """
        validate_criteria(criteria)

        self._ledger.clear()

        query = build_search_query(
            criteria.start_date, criteria.end_date, criteria.keywords
        )
        threads = self._gmail.search(query, max_results=self._max_threads)

        rows = []
        for thread in threads:
            email_data = extract_email_data(thread)
            if email_data is None:
                continue

            for attachment in email_data.attachments:
                rows.append(
                    LedgerRow(
                        title=email_data.subject,
                        received_at=format_datetime(email_data.date),
                        attachment_name=attachment.name,
                        save_folder=criteria.folder_path,
                    )
                )

        self._ledger.append(rows)
        logger.info("Listed %d attachment(s) from %d thread(s)", len(rows), len(threads))

        return SearchOutcome(threads=len(threads), rows=len(rows))

    def _copy_row(self, row: LedgerRow, default_folder_path: str) -> RowUpdate:
        """Copy one ledger row's attachment and describe the row update.

        Raises:
            NotFoundError: If the message or attachment is gone.
            FolderResolutionError: If the destination cannot be resolved.
        """
        # Look the message up again by subject; the first matching thread wins
        threads = self._gmail.search(build_subject_query(row.title), max_results=1)
        if not threads:
            raise NotFoundError(f"Message not found: {row.title}")

        email_data = extract_email_data(threads[0])
        if email_data is None:
            raise NotFoundError(f"No PDF attachment found: {row.title}")

        attachment = next(
            (att for att in email_data.attachments if att.name == row.attachment_name),
            None,
        )
        if attachment is None:
            raise NotFoundError(f"Attachment not found: {row.attachment_name}")

        # "/" is an explicit choice of the Drive root; only a blank cell falls back
        folder_path = row.save_folder if row.save_folder.strip() else default_folder_path
        folder = self._resolver.resolve(folder_path)

        save_name = row.save_name.strip() or attachment.name
        data = self._gmail.get_attachment_data(attachment)
        outcome = copy_file(self._drive, data, folder.id, save_name)

        match outcome:
            case Created():
                return RowUpdate(
                    row_key=row.row_key,
                    result=ProcessingResult.ok(),
                    file_link=outcome.link,
                    save_name=outcome.file_name,
                    save_folder=folder.path,
                )
            case AlreadyExists():
                return RowUpdate(
                    row_key=row.row_key,
                    result=ProcessingResult.skip(outcome.message),
                )
            case Failed():
                return RowUpdate(
                    row_key=row.row_key,
                    result=ProcessingResult.error(outcome.reason),
                )

    def review_and_copy(
        self,
        default_folder_path: str,
        progress_callback: ProgressCallback | None = None,
    ) -> CopyRunResult:
        """Copy every ticked, unprocessed ledger row into Drive.

        Rows with a non-empty Result are left untouched. A failure on one
        row is recorded as ERROR in that row and does not stop the others.
        All row updates are written in one batch at the end.

        Args:
            default_folder_path: Used for rows with a blank Save folder.
            progress_callback: Optional, called with (title, current, total).

        Returns:
            CopyRunResult with per-outcome counts.
        """
        result = CopyRunResult()
        rows = self._ledger.list_selected()
        total = len(rows)
        updates: list[RowUpdate] = []

        for idx, row in enumerate(rows):
            if progress_callback:
                progress_callback(row.title, idx + 1, total)

            if not row.result.is_empty:
                logger.debug("Row %d already processed: %s", row.row_key, row.result.render())
                result.already_processed += 1
                continue

            try:
                update = self._copy_row(row, default_folder_path)
            except Exception as e:
                logger.error("Row %d failed: %s", row.row_key, e)
                updates.append(
                    RowUpdate(row_key=row.row_key, result=ProcessingResult.error(str(e)))
                )
                result.add_error(row.row_key, str(e))
                continue

            updates.append(update)

            if update.result.kind is ResultKind.OK:
                result.copied += 1
            elif update.result.kind is ResultKind.SKIP:
                result.skipped += 1
                logger.info("Row %d skipped: %s", row.row_key, update.result.message)
            else:
                logger.warning("Row %d copy failed: %s", row.row_key, update.result.message)
                result.add_error(row.row_key, update.result.message)

        self._ledger.apply_updates(updates)

        return result
