"""Slash-delimited folder path resolution.

Turns a path like "/Invoices/2024" into a Drive folder ID, creating any
missing folders along the way. Creation is not rolled back if a later
segment fails.
"""

import logging

from relais.errors import FolderResolutionError

from .client import DriveClient
from .models import ResolvedFolder

logger = logging.getLogger(__name__)


def split_folder_path(path: str | None) -> list[str]:
    """Split a folder path into segments, dropping blank ones.

    "", "/" and "///" all yield an empty list (the root folder).
    """
    if not path:
        return []
    return [segment for segment in path.split("/") if segment.strip()]


def join_folder_path(segments: list[str]) -> str:
    return "/" + "/".join(segments)


class FolderResolver:
    """Resolves folder paths against a DriveClient.

    Each segment is looked up by exact name under the current folder;
    the first match wins. Resolving the same path twice does not create
    duplicate folders.
    """

    def __init__(self, drive: DriveClient):
        self._drive = drive

    def resolve(self, path: str | None) -> ResolvedFolder:
        """Resolve path, creating missing folders.

        Raises:
            FolderResolutionError: If any Drive lookup or create call fails.
        """
        segments = split_folder_path(path)

        try:
            current = self._drive.get_root_id()

            for segment in segments:
                child = self._drive.find_folder(segment, current)
                if child is None:
                    child = self._drive.create_folder(segment, current)
                    logger.info("Created Drive folder: %s", segment)
                current = child
        except Exception as e:
            raise FolderResolutionError(
                f"Failed to resolve folder path '{path}': {e}"
            ) from e

        return ResolvedFolder(id=current, path=join_folder_path(segments))
