"""Copying attachment bytes into Drive folders.

A copy never overwrites: when the destination already holds a file with
the target name, the outcome is ``AlreadyExists`` and nothing is written.
"""

import logging
import re
from dataclasses import dataclass

from relais.errors import InvalidInputError

from .client import DriveClient
from .links import file_link

logger = logging.getLogger(__name__)

_PDF_SUFFIX = re.compile(r"\.pdf$", re.IGNORECASE)


@dataclass(frozen=True)
class Created:
    """The file was uploaded."""

    file_id: str
    file_name: str

    @property
    def link(self) -> str:
        return file_link(self.file_id)


@dataclass(frozen=True)
class AlreadyExists:
    """A file with the target name is already in the destination folder."""

    file_name: str

    @property
    def message(self) -> str:
        return f"File already exists: {self.file_name}"


@dataclass(frozen=True)
class Failed:
    """The copy could not be performed."""

    reason: str


CopyOutcome = Created | AlreadyExists | Failed


@dataclass(frozen=True)
class CopyInput:
    """One file for copy_multiple_files."""

    name: str
    data: bytes


def ensure_pdf_extension(file_name: str) -> str:
    """Append ".pdf" unless the name already ends with it (any case).

    Raises:
        InvalidInputError: If file_name is empty.
    """
    if not file_name:
        raise InvalidInputError("File name is empty")

    if not file_name.lower().endswith(".pdf"):
        return f"{file_name}.pdf"

    return file_name


def copy_file(
    drive: DriveClient,
    data: bytes,
    folder_id: str,
    desired_name: str,
) -> CopyOutcome:
    """Copy bytes into a Drive folder under desired_name.

    Args:
        drive: DriveClient used for the lookup and upload.
        data: File content.
        folder_id: Destination folder ID.
        desired_name: Target name; ".pdf" is appended when missing.

    Returns:
        Created, AlreadyExists or Failed.
    """
    try:
        file_name = ensure_pdf_extension(desired_name)

        if drive.find_file(file_name, folder_id) is not None:
            return AlreadyExists(file_name)

        created = drive.create_file(file_name, folder_id, data)
    except Exception as e:
        logger.warning("File copy failed for %s: %s", desired_name, e)
        return Failed(f"File copy failed: {e}")

    logger.debug("Copied file %s (%s)", created["name"], created["id"])
    return Created(file_id=created["id"], file_name=created["name"])


def multi_copy_names(names: list[str], base_name: str | None) -> list[str]:
    """Target names for a batch of files.

    Without a base name each file keeps its own name. With one file the
    base is used as-is; with several, files become {base}_1.pdf ...
    {base}_N.pdf in input order.
    """
    if not base_name:
        return list(names)

    if len(names) == 1:
        return [base_name]

    stem = _PDF_SUFFIX.sub("", base_name)
    return [f"{stem}_{index}.pdf" for index in range(1, len(names) + 1)]


def copy_multiple_files(
    drive: DriveClient,
    files: list[CopyInput],
    folder_id: str,
    base_name: str | None = None,
) -> list[tuple[str, CopyOutcome]]:
    """Copy several files into one folder.

    Returns:
        (original name, outcome) pairs in input order.
    """
    target_names = multi_copy_names([f.name for f in files], base_name)

    return [
        (item.name, copy_file(drive, item.data, folder_id, target))
        for item, target in zip(files, target_names)
    ]
