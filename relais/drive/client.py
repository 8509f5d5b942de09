"""Google Drive API client.

Provides the handful of Drive v3 calls relais needs: exact-name lookups
under a parent folder, folder and file creation, and a full folder listing.
"""

import io
import logging

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload

from relais.errors import host_call

from .models import DriveFolder

logger = logging.getLogger(__name__)

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
PDF_MIME_TYPE = "application/pdf"


def escape_query_value(value: str) -> str:
    """Escape a literal for use inside single quotes in a Drive query."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_folder_paths(root_id: str, folders: list[dict]) -> list[DriveFolder]:
    """Compute full paths for folder resources returned by files.list.

    Folders whose parent chain does not reach root_id (shared drives,
    folders shared with me) are left out.

    Args:
        root_id: ID of My Drive's root folder.
        folders: Dicts with keys id, name and optionally parents.

    Returns:
        DriveFolder list sorted by path.
    """
    by_id = {folder["id"]: folder for folder in folders}
    paths: dict[str, str | None] = {root_id: ""}

    def path_of(folder_id: str, seen: frozenset) -> str | None:
        if folder_id in paths:
            return paths[folder_id]
        folder = by_id.get(folder_id)
        if folder is None or folder_id in seen:
            return None
        parents = folder.get("parents") or []
        parent_path = path_of(parents[0], seen | {folder_id}) if parents else None
        path = None if parent_path is None else f"{parent_path}/{folder['name']}"
        paths[folder_id] = path
        return path

    result = []
    for folder in folders:
        path = path_of(folder["id"], frozenset())
        if path:
            result.append(DriveFolder(id=folder["id"], name=folder["name"], path=path))

    return sorted(result, key=lambda f: f.path)


class DriveClient:
    """Client for Google Drive API operations.

    Example:
        creds = get_credentials()
        drive = DriveClient(creds)
        folder_id = drive.find_folder("Invoices", drive.get_root_id())
    """

    def __init__(self, credentials: Credentials):
        self._credentials = credentials
        self._service = build("drive", "v3", credentials=credentials)
        self._root_id: str | None = None

    @host_call
    def get_root_id(self) -> str:
        """Return the ID of My Drive's root folder (cached)."""
        if self._root_id is None:
            result = self._service.files().get(fileId="root", fields="id").execute()
            self._root_id = result["id"]
        return self._root_id

    @host_call
    def _find_child(self, name: str, parent_id: str, *, folder: bool) -> str | None:
        mime_clause = (
            f"mimeType = '{FOLDER_MIME_TYPE}'"
            if folder
            else f"mimeType != '{FOLDER_MIME_TYPE}'"
        )
        query = (
            f"name = '{escape_query_value(name)}' "
            f"and '{escape_query_value(parent_id)}' in parents "
            f"and {mime_clause} and trashed = false"
        )
        result = (
            self._service.files()
            .list(q=query, spaces="drive", fields="files(id, name)", pageSize=1)
            .execute()
        )
        files = result.get("files", [])
        return files[0]["id"] if files else None

    def find_folder(self, name: str, parent_id: str) -> str | None:
        """Find a direct child folder by exact name. Returns its ID or None."""
        return self._find_child(name, parent_id, folder=True)

    def find_file(self, name: str, folder_id: str) -> str | None:
        """Find a non-folder file by exact name in a folder."""
        return self._find_child(name, folder_id, folder=False)

    @host_call
    def create_folder(self, name: str, parent_id: str) -> str:
        """Create a folder under parent_id and return its ID."""
        body = {"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]}
        result = self._service.files().create(body=body, fields="id").execute()
        logger.debug("Created folder %s (%s)", name, result["id"])
        return result["id"]

    @host_call
    def create_file(
        self,
        name: str,
        folder_id: str,
        data: bytes,
        mime_type: str = PDF_MIME_TYPE,
    ) -> dict:
        """Upload bytes as a new file.

        Returns:
            Dict with keys id and name.
        """
        media = MediaIoBaseUpload(io.BytesIO(data), mimetype=mime_type, resumable=False)
        body = {"name": name, "parents": [folder_id]}
        result = (
            self._service.files()
            .create(body=body, media_body=media, fields="id, name")
            .execute()
        )
        return {"id": result["id"], "name": result.get("name", name)}

    @host_call
    def list_folders(self) -> list[DriveFolder]:
        """List every folder in My Drive with its full path.

        Handles pagination automatically. This may take a while on large
        drives.
        """
        folders = []
        page_token = None

        while True:
            params = {
                "q": f"mimeType = '{FOLDER_MIME_TYPE}' and trashed = false",
                "spaces": "drive",
                "fields": "nextPageToken, files(id, name, parents)",
                "pageSize": 1000,
            }
            if page_token:
                params["pageToken"] = page_token

            result = self._service.files().list(**params).execute()
            folders.extend(result.get("files", []))

            page_token = result.get("nextPageToken")
            if not page_token:
                break

        return build_folder_paths(self.get_root_id(), folders)
