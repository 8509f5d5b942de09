"""Google Drive access: folder resolution and attachment copying."""

from .client import DriveClient
from .copy import (
    AlreadyExists,
    CopyInput,
    CopyOutcome,
    Created,
    Failed,
    copy_file,
    copy_multiple_files,
    ensure_pdf_extension,
)
from .links import file_link, folder_link
from .models import DriveFolder, ResolvedFolder
from .resolver import FolderResolver

__all__ = [
    "AlreadyExists",
    "CopyInput",
    "CopyOutcome",
    "Created",
    "DriveClient",
    "DriveFolder",
    "Failed",
    "FolderResolver",
    "ResolvedFolder",
    "copy_file",
    "copy_multiple_files",
    "ensure_pdf_extension",
    "file_link",
    "folder_link",
]
